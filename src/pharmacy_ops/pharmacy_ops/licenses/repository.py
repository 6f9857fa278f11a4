from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional, Protocol, Sequence

from ..backend.store import Subscription
from .model import License


class LicenseRepository(Protocol):
    def list_all(self) -> Sequence[License]:
        raise NotImplementedError

    def get_by_id(self, license_id: str) -> Optional[License]:
        raise NotImplementedError

    def subscribe(self, on_change: Callable[[Sequence[License]], None]) -> Subscription:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        expiry_date: datetime,
        license_number: str = "",
        issuing_authority: str = "",
        notes: str = "",
        file_url: str = "",
        file_name: str = "",
    ) -> str:
        raise NotImplementedError

    def renew(
        self,
        *,
        license_id: str,
        expiry_date: datetime,
        notes: str,
        file_url: str,
        file_name: str,
    ) -> None:
        """Only the mutable fields change; name, number and authority stay."""

        raise NotImplementedError

    def delete(self, license_id: str) -> None:
        raise NotImplementedError
