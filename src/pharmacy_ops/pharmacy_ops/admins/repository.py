from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Admin


class AdminRepository(Protocol):
    def list_all(self) -> Sequence[Admin]:
        raise NotImplementedError

    def get_by_id(self, admin_id: str) -> Optional[Admin]:
        raise NotImplementedError

    def create(self, *, name: str, email: str, mobile: str, designation: str) -> str:
        raise NotImplementedError

    def update(self, *, admin_id: str, changes: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def delete(self, admin_id: str) -> None:
        raise NotImplementedError
