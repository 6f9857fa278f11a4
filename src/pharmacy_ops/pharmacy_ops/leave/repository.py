from __future__ import annotations

from datetime import date
from typing import Callable, Protocol, Sequence

from ..backend.store import Subscription
from ..core.enums import LeaveType
from .model import LeaveRecord


class LeaveRepository(Protocol):
    def list_all(self) -> Sequence[LeaveRecord]:
        raise NotImplementedError

    def subscribe(self, on_change: Callable[[Sequence[LeaveRecord]], None]) -> Subscription:
        raise NotImplementedError

    def create(
        self,
        *,
        staff_id: str,
        staff_name: str,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> str:
        raise NotImplementedError
