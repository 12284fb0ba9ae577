"""Application settings read from the environment.

Values are resolved at call time so tests (and the CLI) can override them by
setting environment variables before the first use.
"""

import os

_DEFAULT_SECRET = "storefront-development-secret-change-me-in-production"  # noqa: S105


def secret_key() -> str:
    return os.getenv("SECRET_KEY", _DEFAULT_SECRET)


def access_token_ttl_minutes() -> int:
    return int(os.getenv("ACCESS_TOKEN_TTL_MINUTES", "1440"))


def password_reset_ttl_minutes() -> int:
    return int(os.getenv("PASSWORD_RESET_TTL_MINUTES", "10"))


def bcrypt_rounds() -> int:
    return int(os.getenv("BCRYPT_ROUNDS", "12"))


def upload_dir() -> str:
    return os.getenv("UPLOAD_DIR", "uploads")


def max_upload_bytes() -> int:
    return int(os.getenv("MAX_UPLOAD_BYTES", str(50 * 1024 * 1024)))


def cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def smtp_settings() -> dict | None:
    """SMTP connection settings, or None when no SMTP host is configured."""
    host = os.getenv("SMTP_HOST")
    if not host:
        return None
    return {
        "host": host,
        "port": int(os.getenv("SMTP_PORT", "587")),
        "username": os.getenv("SMTP_USER"),
        "password": os.getenv("SMTP_PASSWORD"),
        "sender": os.getenv("MAIL_FROM", "no-reply@storefront.local"),
        "use_tls": os.getenv("SMTP_TLS", "true").lower() != "false",
    }
