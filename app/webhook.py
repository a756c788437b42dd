from typing import Any, Dict, List

VALID_STATUSES = ('firing', 'resolved')


class WebhookPayloadError(ValueError):
    pass


def _string_map(value: Any, field: str, index: int) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise WebhookPayloadError(f"alerts[{index}].{field} deve ser um objeto")
    for key, item in value.items():
        if not isinstance(item, str):
            raise WebhookPayloadError(f"alerts[{index}].{field}.{key} deve ser string")
    return dict(value)


def parse_webhook_payload(data: Any) -> List[Dict[str, Any]]:
    """
    Valida o payload de webhook do Alertmanager (versão 4) e normaliza os alertas.

    Returns:
        Lista de alertas com: status, labels, annotations, starts_at, ends_at,
        generator_url e fingerprint.

    Raises:
        WebhookPayloadError: se o formato do payload for inválido.
    """
    if not isinstance(data, dict):
        raise WebhookPayloadError("payload deve ser um objeto JSON")

    raw_alerts = data.get('alerts')
    if not isinstance(raw_alerts, list):
        raise WebhookPayloadError("campo 'alerts' ausente ou não é uma lista")

    group_status = str(data.get('status') or 'firing').lower()

    alerts = []
    for index, raw in enumerate(raw_alerts):
        if not isinstance(raw, dict):
            raise WebhookPayloadError(f"alerts[{index}] deve ser um objeto")

        status = str(raw.get('status') or group_status).lower()
        if status not in VALID_STATUSES:
            raise WebhookPayloadError(f"alerts[{index}].status inválido: '{status}'")

        alerts.append({
            'status': status,
            'labels': _string_map(raw.get('labels'), 'labels', index),
            'annotations': _string_map(raw.get('annotations'), 'annotations', index),
            'starts_at': raw.get('startsAt'),
            'ends_at': raw.get('endsAt'),
            'generator_url': raw.get('generatorURL'),
            'fingerprint': raw.get('fingerprint'),
        })
    return alerts
