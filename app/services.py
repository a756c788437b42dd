import logging

import requests

from .constants import (
    NTFY_BASE_URL,
    NTFY_PASSWORD,
    NTFY_TIMEOUT_SECONDS,
    NTFY_TOKEN,
    NTFY_USERNAME,
    NTFY_VERIFY_TLS,
)

logger = logging.getLogger(__name__)


def _auth_options():
    # Token tem precedência sobre usuário/senha
    if NTFY_TOKEN:
        return {"headers": {"Authorization": f"Bearer {NTFY_TOKEN}"}}
    if NTFY_USERNAME and NTFY_PASSWORD:
        return {"auth": (NTFY_USERNAME, NTFY_PASSWORD)}
    return {}


def send_ntfy_payload(payload):
    resp = requests.post(
        NTFY_BASE_URL,
        json=payload,
        timeout=NTFY_TIMEOUT_SECONDS,
        verify=NTFY_VERIFY_TLS,
        **_auth_options(),
    )
    if resp.ok:
        logger.debug(f"ntfy response: {resp.status_code}")
    else:
        logger.warning(f"ntfy respondeu {resp.status_code} para o tópico '{payload.get('topic')}': {resp.text[:500]}")
    return resp
