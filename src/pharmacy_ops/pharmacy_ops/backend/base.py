from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Iterator, Optional

from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions

from ..common.datetime_utils import ensure_aware, parse_iso_date, utc_midnight
from ..core.exceptions import BackendError

logger = logging.getLogger(__name__)


@contextmanager
def backend_call(action: str) -> Iterator[None]:
    """Translate client-library failures into BackendError with a readable message."""

    try:
        yield
    except google_exceptions.PermissionDenied as e:
        logger.error("Permission denied while trying to %s", action)
        raise BackendError(f"Permission denied while trying to {action}") from e
    except (google_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError) as e:
        logger.exception("Backend call failed: %s", action)
        raise BackendError(f"Could not {action}. Please try again.") from e


def normalize_timestamp(value: Any) -> Optional[datetime]:
    """Normalize stored timestamps across backends.

    Firestore returns DatetimeWithNanoseconds (aware, UTC); the in-memory store
    returns whatever was written. Also accepted:
    - datetime.date (UTC midnight)
    - ISO string (date or datetime)
    Anything else is treated as missing.
    """

    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return ensure_aware(value)

    if isinstance(value, date):
        return utc_midnight(value)

    if isinstance(value, str):
        text = value.strip()
        try:
            return ensure_aware(datetime.fromisoformat(text))
        except ValueError:
            pass
        try:
            return utc_midnight(parse_iso_date(text))
        except ValueError:
            return None

    return None


def normalize_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return parse_iso_date(value.strip()[:10])
        except ValueError:
            return None
    return None
