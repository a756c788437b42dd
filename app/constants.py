import os

# Configurações globais de ambiente
APP_PORT = int(os.getenv("APP_PORT", "5001"))
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Servidor ntfy (publicação JSON na raiz do servidor)
NTFY_BASE_URL = os.getenv("NTFY_BASE_URL", "https://ntfy.sh").rstrip("/")
NTFY_TOPIC = os.getenv("NTFY_TOPIC", "alertmanager")
NTFY_TOKEN = os.getenv("NTFY_TOKEN")
NTFY_USERNAME = os.getenv("NTFY_USERNAME")
NTFY_PASSWORD = os.getenv("NTFY_PASSWORD")
NTFY_TIMEOUT_SECONDS = int(os.getenv("NTFY_TIMEOUT_SECONDS", "10"))
NTFY_VERIFY_TLS = os.getenv("NTFY_VERIFY_TLS", "true").lower() == "true"
NTFY_CLICK_GENERATOR_URL = os.getenv("NTFY_CLICK_GENERATOR_URL", "true").lower() == "true"

# Basic auth exigido no /alert (somente se ambos estiverem definidos)
WEBHOOK_USERNAME = os.getenv("WEBHOOK_USERNAME")
WEBHOOK_PASSWORD = os.getenv("WEBHOOK_PASSWORD")

# Templates (Jinja2). A fonte inline tem precedência sobre o arquivo.
LABELS_TEMPLATE = os.getenv("NTFY_LABELS_TEMPLATE")
LABELS_TEMPLATE_FILE = os.getenv("NTFY_LABELS_TEMPLATE_FILE")
LABELS_TEMPLATE_PRESET = os.getenv("NTFY_LABELS_PRESET", "").strip().lower()
TITLE_TEMPLATE = os.getenv("NTFY_TITLE_TEMPLATE")
TITLE_TEMPLATE_FILE = os.getenv("NTFY_TITLE_TEMPLATE_FILE")
MESSAGE_TEMPLATE = os.getenv("NTFY_MESSAGE_TEMPLATE")
MESSAGE_TEMPLATE_FILE = os.getenv("NTFY_MESSAGE_TEMPLATE_FILE")

# Tags de status (shortcodes de emoji do ntfy); vazio desabilita
STATUS_TAGS = {
    "firing": os.getenv("NTFY_FIRING_TAG", "rotating_light").strip(),
    "resolved": os.getenv("NTFY_RESOLVED_TAG", "white_check_mark").strip(),
}

# Prioridades do ntfy: 1=min, 2=low, 3=default, 4=high, 5=urgent
SEVERITY_PRIORITIES = {
    "critical": int(os.getenv("PRIORITY_CRITICAL", "5")),
    "error": int(os.getenv("PRIORITY_ERROR", "4")),
    "warning": int(os.getenv("PRIORITY_WARNING", "4")),
    "info": int(os.getenv("PRIORITY_INFO", "3")),
}
DEFAULT_PRIORITY = int(os.getenv("PRIORITY_DEFAULT", "3"))
RESOLVED_PRIORITY = int(os.getenv("PRIORITY_RESOLVED", "2"))
