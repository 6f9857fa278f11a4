"""Expiry classification of licenses relative to an instant.

expired:        expiry < now
expiring soon:  0 < expiry - now <= window
neither:        everything else; this includes a license expiring exactly at
                ``now`` and licenses without an expiry date.

Nothing is cached: callers re-run this on every data change and at least once
per calendar day so that classifications age with the clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import ensure_aware
from ..core.constants import EXPIRING_SOON_WINDOW
from ..core.enums import ExpiryState
from .model import License


@dataclass(frozen=True)
class ExpiryBuckets:
    expired: tuple[License, ...]
    expiring_soon: tuple[License, ...]

    @property
    def needs_attention(self) -> bool:
        return bool(self.expired or self.expiring_soon)


def expiry_state(
    license: License,
    now: datetime,
    *,
    window: timedelta = EXPIRING_SOON_WINDOW,
) -> Optional[ExpiryState]:
    """None when the license has no expiry date (never classified)."""

    if license.expiry_date is None:
        return None

    expiry = ensure_aware(license.expiry_date)
    now = ensure_aware(now)
    if expiry < now:
        return ExpiryState.EXPIRED

    remaining = expiry - now
    if timedelta(0) < remaining <= window:
        return ExpiryState.EXPIRING_SOON
    return ExpiryState.OK


def classify_expiry(
    now: datetime,
    licenses: Iterable[License],
    *,
    window: timedelta = EXPIRING_SOON_WINDOW,
) -> ExpiryBuckets:
    expired: list[License] = []
    expiring_soon: list[License] = []
    for lic in licenses:
        state = expiry_state(lic, now, window=window)
        if state == ExpiryState.EXPIRED:
            expired.append(lic)
        elif state == ExpiryState.EXPIRING_SOON:
            expiring_soon.append(lic)
    return ExpiryBuckets(expired=tuple(expired), expiring_soon=tuple(expiring_soon))
