import hmac
import json
import logging

import requests
from flask import Flask, request

from .constants import WEBHOOK_PASSWORD, WEBHOOK_USERNAME
from .formatters import build_notification, get_alertname
from .services import send_ntfy_payload
from .templates import load_notification_templates
from .webhook import WebhookPayloadError, parse_webhook_payload

logger = logging.getLogger(__name__)


def _is_authorized(auth):
    if not (WEBHOOK_USERNAME and WEBHOOK_PASSWORD):
        return True
    if auth is None or auth.username is None or auth.password is None:
        return False
    user_ok = hmac.compare_digest(auth.username.encode(), WEBHOOK_USERNAME.encode())
    pass_ok = hmac.compare_digest(auth.password.encode(), WEBHOOK_PASSWORD.encode())
    return user_ok and pass_ok


def create_app(templates=None):
    """
    Cria o app Flask. Os templates são compilados aqui, uma única vez;
    TemplateCompileError é propagado e impede a inicialização.
    """
    app = Flask(__name__)
    if templates is None:
        templates = load_notification_templates()

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok', 'service': 'alertmanager-ntfy-proxy'}, 200

    @app.route('/alert', methods=['POST'])
    def alert():
        if not _is_authorized(request.authorization):
            return 'Unauthorized', 401, {'WWW-Authenticate': 'Basic realm="alertmanager-ntfy-proxy"'}

        data = request.get_json(silent=True)
        if data is None:
            return 'Error: payload JSON inválido', 400
        logger.debug(f"Received data: {json.dumps(data)[:1000]}")

        try:
            alerts = parse_webhook_payload(data)
        except WebhookPayloadError as e:
            logger.warning(f"Payload de webhook rejeitado: {e}")
            return f'Error: {e}', 400

        return handle_alertmanager_alerts(alerts)

    def handle_alertmanager_alerts(alerts):
        failures = 0
        for alert_data in alerts:
            payload = build_notification(alert_data, templates)
            logger.debug(f"Sending ntfy payload: {json.dumps(payload, ensure_ascii=False)[:500]}")
            try:
                resp = send_ntfy_payload(payload)
            except requests.RequestException as exc:
                logger.error(f"Falha ao publicar alerta '{get_alertname(alert_data)}' no ntfy: {exc}")
                failures += 1
                continue
            if not resp.ok:
                failures += 1

        if failures:
            logger.error(f"{failures} de {len(alerts)} alertas não foram entregues ao ntfy")
            return '', 502
        return '', 200

    return app
