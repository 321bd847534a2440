import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./invoicing.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Invoice document rendering
    PDF_INVARIANT = bool(data.get("PDF_INVARIANT", False))  # No timestamp/random id in PDF output

    # Invoice numbering defaults (overridden per tenant by billing settings)
    DEFAULT_INVOICE_PREFIX = data.get("DEFAULT_INVOICE_PREFIX", "INV")
    DEFAULT_PAYMENT_TERMS_DAYS = data.get("DEFAULT_PAYMENT_TERMS_DAYS", 30)

    # Overdue invoice detection
    OVERDUE_CHECK_ENABLED = bool(data.get("OVERDUE_CHECK_ENABLED", True))
    OVERDUE_CHECK_INTERVAL_SECONDS = data.get("OVERDUE_CHECK_INTERVAL_SECONDS", 86400)  # Daily
    OVERDUE_NOTIFICATION_WEBHOOK = data.get("OVERDUE_NOTIFICATION_WEBHOOK", None)
