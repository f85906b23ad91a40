"""Static configuration for the transit site core.

All user-editable settings (database, inquiry form, notifications, logging)
live in a single JSON file for quick edits without touching Python.
"""

import json
import os

from core.config import DEFAULT_PHONE_TEMPLATE

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# The config path can be overridden so one checkout can serve several sites.
CONFIG_PATH = os.getenv("TRANSIT_CONFIG", os.path.join(PROJECT_ROOT, "config.json"))


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _resolve_path(path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(PROJECT_ROOT, path)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Where to store the SQLite database.
_database = _CONFIG.get("database", {})
DB_PATH = _resolve_path(_database.get("path", "transit.db"))

# Inquiry form settings:
# - PHONE_TEMPLATE: str.format template with {code} and {number}
# - FIELD_SEPARATOR: joins phones and routes in the stored form and mail body
# - OPERATOR_CODES: dialing codes offered on the form page
_inquiry = _CONFIG.get("inquiry", {})
PHONE_TEMPLATE = _inquiry.get("phone_template", DEFAULT_PHONE_TEMPLATE)
FIELD_SEPARATOR = _inquiry.get("separator", ";")
OPERATOR_CODES = tuple(str(code) for code in _inquiry.get("operator_codes", []))

# Notification method switches adapters without changing core logic.
_notifications = _CONFIG.get("notifications", {})
NOTIFICATION_METHOD = _notifications.get("notification_method", "smtp")
MAIL_SUBJECT = _notifications.get("subject", "New transportation inquiry")

_smtp = _notifications.get("smtp", {})
SMTP_HOST = _smtp.get("host", "localhost")
SMTP_PORT = int(_smtp.get("port", 587))
SMTP_SENDER = _smtp.get("sender", "")
SMTP_RECIPIENTS = list(_smtp.get("recipients", []))
SMTP_USERNAME = _smtp.get("username")
SMTP_USE_TLS = bool(_smtp.get("use_tls", True))

# Bot chat id is only required when notification_method=bot.
BOT_CHAT_ID = _notifications.get("bot_chat_id")

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
