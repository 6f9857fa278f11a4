from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ExpiryState


@dataclass(frozen=True)
class License:
    """Domain entity: a pharmacy license. Renewal mutates it in place (same id)."""

    license_id: str
    name: str
    expiry_date: Optional[datetime]
    license_number: str = ""
    issuing_authority: str = ""
    notes: str = ""
    file_url: str = ""
    file_name: str = ""


@dataclass(frozen=True)
class Attachment:
    """Uploaded document waiting to be stored next to a license."""

    file_name: str
    data: bytes
    content_type: Optional[str] = None


@dataclass(frozen=True)
class ExpiryAlert:
    license_id: str
    name: str
    state: ExpiryState
    expiry: str
    message: str
