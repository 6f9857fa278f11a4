import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Without Firebase credentials, development runs against the in-memory backend.
BACKEND = os.getenv("BACKEND", "memory").lower()
APP_ID = Config.APP_ID
FIREBASE_CONFIG = Config.FIREBASE_CONFIG

STORES = Config.STORES
EXPIRING_SOON_DAYS = Config.EXPIRING_SOON_DAYS
TIMEZONE = Config.TIMEZONE

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()
