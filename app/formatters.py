import logging

from .constants import NTFY_CLICK_GENERATOR_URL, NTFY_TOPIC
from .detection import get_priority, get_status_tag
from .labels import LabelSet, render_labels
from .templates import NotificationTemplates, TemplateEvaluationError, render_template
from .utils import format_timestamp, pick_first_nonempty

logger = logging.getLogger(__name__)


def get_alertname(alert):
    return alert['labels'].get('alertname') or 'Alerta'


def default_title(alert):
    return f"[{alert['status'].upper()}] {get_alertname(alert)}"


def default_message(alert):
    annotations = alert['annotations']
    description = pick_first_nonempty(
        annotations.get('description'),
        annotations.get('summary'),
    ) or 'Sem descrição disponível'

    lines = [description, "", f"Início: {format_timestamp(alert.get('starts_at'))}"]
    if alert['status'] == 'resolved':
        lines.append(f"Fim: {format_timestamp(alert.get('ends_at'))}")
    return "\n".join(lines)


def build_template_context(alert):
    return {
        'status': alert['status'],
        'labels': LabelSet(alert['labels']),
        'annotations': LabelSet(alert['annotations']),
        'starts_at': alert.get('starts_at') or '',
        'ends_at': alert.get('ends_at') or '',
        'generator_url': alert.get('generator_url') or '',
        'fingerprint': alert.get('fingerprint') or '',
    }


def _render_text(template, alert, fallback):
    if template is None:
        return fallback(alert)
    try:
        text = render_template(template, build_template_context(alert)).strip()
    except TemplateEvaluationError as exc:
        logger.warning(f"Template '{exc.template_name}' falhou para o alerta '{get_alertname(alert)}', usando padrão: {exc}")
        return fallback(alert)
    return text or fallback(alert)


def build_tags(alert, labels_template=None):
    tags = []
    status_tag = get_status_tag(alert['status'])
    if status_tag:
        tags.append(status_tag)

    # Falha no template de labels não derruba a notificação: segue sem as tags de labels
    try:
        tags.extend(render_labels(alert['labels'], labels_template))
    except TemplateEvaluationError as exc:
        logger.warning(f"Falha ao renderizar tags do alerta '{get_alertname(alert)}': {exc}")
    return tags


def build_notification(alert, templates=None):
    """
    Monta o payload JSON de publicação do ntfy para um alerta normalizado
    (ver webhook.parse_webhook_payload).
    """
    templates = templates or NotificationTemplates()

    payload = {
        "topic": NTFY_TOPIC,
        "title": _render_text(templates.title, alert, default_title),
        "message": _render_text(templates.message, alert, default_message),
        "priority": get_priority(alert['labels'], alert['status']),
        "tags": build_tags(alert, templates.labels),
    }
    if NTFY_CLICK_GENERATOR_URL and alert.get('generator_url'):
        payload["click"] = alert['generator_url']
    return payload
