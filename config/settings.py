"""
GymOS – Django Settings (Infrastructure Only)
=============================================
Django serves as the framework container for GymOS.
The access-control core in gymos/ is framework-agnostic; Django provides
the ORM stores, the HTTP adapter and this settings module.

Environment:
- GYMOS_SECRET_KEY
- GYMOS_DEBUG ("1"/"true" enables debug)
- GYMOS_AUTHZ_BACKEND ("memory" dev fixtures or "db")
- GYMOS_DB_PATH (SQLite file path)
- GYMOS_LOG_LEVEL
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
# BASE_DIR = project root where manage.py lives
BASE_DIR = Path(__file__).resolve().parent.parent


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get(
    "GYMOS_SECRET_KEY",
    "gymos-dev-key-replace-before-deployment",
)

DEBUG = _env_flag("GYMOS_DEBUG", "1")

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("GYMOS_ALLOWED_HOSTS", "").split(",")
    if host.strip()
]

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    # ── GymOS stores ──────────────────────────────────────
    "gymos.identity_store.apps.GymosIdentityStoreConfig",
    "gymos.permissions_store.apps.GymosPermissionsStoreConfig",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

# ── Database ──────────────────────────────────────────────────
# SQLite for development. Production DB configured separately.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("GYMOS_DB_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

# ── Authorization ─────────────────────────────────────────────
# "memory": dev fixtures; "db": relational identity/permission stores.
GYMOS_AUTHZ_BACKEND = os.environ.get("GYMOS_AUTHZ_BACKEND", "memory")

# ── Logging ───────────────────────────────────────────────────
GYMOS_LOG_LEVEL = os.environ.get("GYMOS_LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        "gymos": {
            "handlers": ["console"],
            "level": GYMOS_LOG_LEVEL,
            "propagate": True,
        },
    },
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# ── Default Primary Key ──────────────────────────────────────
# Tenants, branches, roles and assignments use UUIDs explicitly.
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
