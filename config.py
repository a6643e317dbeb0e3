import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.environ.get("LEXINTAKE_CONFIG", os.path.join(ROOT_PATH, "env.yaml"))

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def _get(key, default=None):
    """Environment variables win over env.yaml; values are YAML-parsed."""
    if key in os.environ:
        return yaml.safe_load(os.environ[key])
    return data.get(key, default)


class ApplicationConfig:
    DB_URI = _get("DB_URI", "sqlite+aiosqlite:///./test.db")
    API_PREFIX = _get("API_PREFIX", "/api")
    API_PORT = _get("API_PORT", 8000)
    API_HOST = _get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = _get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = _get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = _get("LOG_LEVEL", "INFO")

    # Cookie sessions
    SESSION_SECRET = _get("SESSION_SECRET", "dev-secret-key-change-in-production")
    SESSION_TTL_DAYS = int(_get("SESSION_TTL_DAYS", 7))
    COOKIE_SECURE = bool(_get("COOKIE_SECURE", False))

    # Shared secrets for internal endpoints
    INTERNAL_ADMIN_KEY = _get("INTERNAL_ADMIN_KEY", "test-internal-admin-key")
    INTERNAL_CLEANUP_KEY = _get("INTERNAL_CLEANUP_KEY", "test-internal-cleanup-key")
    SYSTEM_FIRM_ID = _get("SYSTEM_FIRM_ID", None)

    # Firm API keys
    API_KEY_TTL_DAYS = int(_get("API_KEY_TTL_DAYS", 90))
    DEFAULT_API_KEY_SCOPES = _get(
        "DEFAULT_API_KEY_SCOPES", ["leads:write", "clients:write", "matters:read"]
    )

    # AML provider
    AML_ENABLED = bool(_get("AML_ENABLED", False))
    AML_API_URL = _get("AML_API_URL", "https://api.aml-provider.com")
    AML_API_KEY = _get("AML_API_KEY", "")
    AML_API_TIMEOUT = float(_get("AML_API_TIMEOUT", 5))

    # Rate limiting
    RATE_LIMIT_ENABLED = bool(_get("RATE_LIMIT_ENABLED", True))
    RATE_LIMIT_BACKEND = _get("RATE_LIMIT_BACKEND", "memory")
    REDIS_URL = _get("REDIS_URL", "redis://localhost:6379/0")
    RATE_LIMITS = _get("RATE_LIMITS", {})

    # Outbound email (Mailgun)
    MAILGUN_API_KEY = _get("MAILGUN_API_KEY", "")
    MAILGUN_DOMAIN = _get("MAILGUN_DOMAIN", "")
    MAILGUN_FROM_EMAIL = _get("MAILGUN_FROM_EMAIL", "noreply@example.com")
    APP_URL = _get("APP_URL", "http://localhost:3000")

    # Retention
    LEAD_RETENTION_DAYS = int(_get("LEAD_RETENTION_DAYS", 730))
