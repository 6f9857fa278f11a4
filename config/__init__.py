"""Settings modules of the dashboard, one per deployment environment.

``APP_ENV`` picks the module: ``prod``/``production`` runs against Firebase,
``test``/``testing`` pins the in-memory backend, and anything else (including
an unset variable) falls back to development.
"""

import os

_SETTINGS_BY_ENV = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").strip().lower()
    return _SETTINGS_BY_ENV.get(env, "config.development")
