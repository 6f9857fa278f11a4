from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Protocol, Sequence

from ..backend.store import Subscription
from .model import StaffMember


class StaffRepository(Protocol):
    def list_all(self) -> Sequence[StaffMember]:
        raise NotImplementedError

    def get_by_id(self, staff_id: str) -> Optional[StaffMember]:
        raise NotImplementedError

    def subscribe(self, on_change: Callable[[Sequence[StaffMember]], None]) -> Subscription:
        raise NotImplementedError

    def create(self, *, name: str, store: str, total_cl: int, total_sl: int, total_el: int) -> str:
        raise NotImplementedError

    def update(self, *, staff_id: str, changes: Mapping[str, Any]) -> None:
        """``changes`` uses StaffMember field names (name, store, total_cl, ...)."""

        raise NotImplementedError

    def delete(self, staff_id: str) -> None:
        raise NotImplementedError
