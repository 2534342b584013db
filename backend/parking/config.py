from __future__ import annotations

"""Application configuration.

Everything is read from the environment so that deployments override values
without code changes. Defaults match a local development setup (frontend on
port 4000, API on port 3000, Mongo on localhost).
"""

import os


def _env_flag(name: str, default: bool = True) -> bool:
    """Read a boolean-like flag from environment.

    Accepted falsy values: "0", "false", "off", "no" (case-insensitive).
    Accepted truthy values: "1", "true", "on", "yes".
    Anything else (or unset) falls back to `default`.
    """

    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in {"0", "false", "off", "no"}:
        return False
    if value in {"1", "true", "on", "yes"}:
        return True
    return default


# Application constants
APP_NAME = "Smart Parking API"
APP_VERSION = "1.0.0"
SERVICE_NAME = "smart-parking"


def mongo_url() -> str:
    return os.environ.get("MONGO_URL", "mongodb://localhost:27017")


def db_name() -> str:
    return os.environ.get("DB_NAME", "smart_parking")


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "http://localhost:4000")
    return [o.strip() for o in raw.split(",") if o.strip()]


def listen_port() -> int:
    return int(os.environ.get("PORT", "3000"))


def payee_name() -> str:
    return os.environ.get("PAYEE_NAME", "SmartParking")


def email_notifications_enabled() -> bool:
    return _env_flag("ENABLE_EMAIL_NOTIFICATIONS", default=True)


# Email (Resend)
RESEND_API_URL = "https://api.resend.com/emails"


def resend_timeout_seconds() -> float:
    return float(os.environ.get("RESEND_TIMEOUT_SECONDS", "15"))
