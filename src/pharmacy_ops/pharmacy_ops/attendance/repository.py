from __future__ import annotations

from datetime import date
from typing import Callable, Protocol

from ..backend.store import Subscription
from ..core.enums import AttendanceStatus
from .model import AttendanceSnapshot


class AttendanceRepository(Protocol):
    def get_snapshot(self, day: date) -> AttendanceSnapshot:
        """Empty snapshot when nothing was marked that day."""

        raise NotImplementedError

    def subscribe_day(self, day: date, on_change: Callable[[AttendanceSnapshot], None]) -> Subscription:
        raise NotImplementedError

    def set_status(self, *, day: date, staff_id: str, status: AttendanceStatus) -> None:
        """Field-level merge: other staff entries of the same day are left alone."""

        raise NotImplementedError
