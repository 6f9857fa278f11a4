SECRET_KEY = "test-secret"

BACKEND = "memory"
APP_ID = "test-app"
FIREBASE_CONFIG = {}

STORES = ("Main Store", "Branch Store")
EXPIRING_SOON_DAYS = 30
TIMEZONE = "Asia/Kolkata"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
