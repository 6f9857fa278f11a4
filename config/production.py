import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

BACKEND = Config.BACKEND
APP_ID = Config.APP_ID
FIREBASE_CONFIG = Config.FIREBASE_CONFIG

STORES = Config.STORES
EXPIRING_SOON_DAYS = Config.EXPIRING_SOON_DAYS
TIMEZONE = Config.TIMEZONE

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL
