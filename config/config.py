import json
import os

DEFAULT_STORES = ("Main Store", "Branch Store")


def _stores_from_env() -> tuple:
    raw = os.environ.get("STORES", "")
    stores = tuple(s.strip() for s in raw.split(",") if s.strip())
    return stores or DEFAULT_STORES


def _firebase_config_from_env() -> dict:
    """FIREBASE_CONFIG may hold the web config JSON; FIREBASE_* variables override it."""

    raw = os.environ.get("FIREBASE_CONFIG", "")
    data = json.loads(raw) if raw.strip() else {}
    return {
        "project_id": os.environ.get("FIREBASE_PROJECT_ID", data.get("projectId", "")),
        "storage_bucket": os.environ.get("FIREBASE_STORAGE_BUCKET", data.get("storageBucket", "")),
        "api_key": os.environ.get("FIREBASE_API_KEY", data.get("apiKey", "")),
        "credentials_file": os.environ.get("GOOGLE_APPLICATION_CREDENTIALS") or None,
    }


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "pharmacy-ops-dev-secret"

    BACKEND = os.environ.get("BACKEND", "firebase").lower()
    APP_ID = os.environ.get("APP_ID", "default-app-id")
    FIREBASE_CONFIG = _firebase_config_from_env()

    STORES = _stores_from_env()
    EXPIRING_SOON_DAYS = int(os.environ.get("EXPIRING_SOON_DAYS", "30"))
    TIMEZONE = os.environ.get("TIMEZONE", "Asia/Kolkata")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
