"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import timedelta

EXPIRING_SOON_DAYS = 30
EXPIRING_SOON_WINDOW = timedelta(days=EXPIRING_SOON_DAYS)

DEFAULT_APP_ID = "default-app-id"
DEFAULT_TIMEZONE = "Asia/Kolkata"
DEFAULT_STORES = ("Main Store", "Branch Store")

DATE_FORMAT = "%Y-%m-%d"
MISSING_DATE_LABEL = "N/A"

NOTHING_TO_EXPORT = "Nothing to export"
