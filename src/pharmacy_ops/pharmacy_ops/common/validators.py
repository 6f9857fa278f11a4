from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Iterable, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def require_date(value: Any, field_name: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = optional_text(value)
    if not text:
        raise ValidationError(f"{field_name} is required")
    try:
        return parse_iso_date(text)
    except ValueError:
        raise ValidationError("Invalid date format.")


def require_non_negative_int(value: Any, field_name: str, *, default: int = 0) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number")
    if number < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return number


def require_choice(value: Optional[str], field_name: str, choices: Iterable[str]) -> str:
    text = optional_text(value)
    allowed = tuple(choices)
    if text not in allowed:
        raise ValidationError(f"{field_name} must be one of: {', '.join(allowed)}")
    return text


def require_email(value: Optional[str], field_name: str = "Email") -> str:
    email = require_non_empty(value, field_name)
    if not _EMAIL_RE.match(email):
        raise ValidationError(f"{field_name} is not a valid email address")
    return email
