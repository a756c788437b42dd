def _is_meaningful(value):
    if value is None:
        return False
    v = str(value).strip()
    if v == "":
        return False
    lowered = v.lower()
    return lowered not in {"n/a", "none", "null", "unknown", "-"}


def pick_first_nonempty(*candidates):
    for c in candidates:
        if _is_meaningful(c):
            return str(c).strip()
    return None


def format_timestamp(timestamp_str):
    if not timestamp_str or timestamp_str == 'N/A':
        return 'N/A'
    # Alertmanager usa 0001-01-01T00:00:00Z para "sem fim"
    if timestamp_str.startswith('0001-01-01'):
        return 'N/A'
    clean_timestamp = timestamp_str.replace('Z', '').replace('T', ' ')
    # Remove frações de segundo (RFC3339Nano)
    return clean_timestamp.split('.')[0]
