from .constants import DEFAULT_PRIORITY, RESOLVED_PRIORITY, SEVERITY_PRIORITIES, STATUS_TAGS


def get_priority(labels, alert_status):
    if alert_status == 'resolved':
        return RESOLVED_PRIORITY

    severity = labels.get('severity', '').strip().lower()
    return SEVERITY_PRIORITIES.get(severity, DEFAULT_PRIORITY)


def get_status_tag(alert_status):
    return STATUS_TAGS.get(alert_status) or None
