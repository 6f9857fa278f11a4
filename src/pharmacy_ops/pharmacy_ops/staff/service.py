from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..backend.paths import TenantScope
from ..common.validators import optional_text, require_choice, require_non_empty, require_non_negative_int
from ..core.constants import DEFAULT_STORES
from ..core.exceptions import ConfirmationRequiredError, NotFoundError
from .model import StaffMember
from .repository import StaffRepository

logger = logging.getLogger(__name__)


class StaffService:
    """Use case: manage staff members and their leave entitlements (admin)."""

    def __init__(self, staff: StaffRepository, scope: TenantScope, *, stores: Sequence[str] = DEFAULT_STORES):
        self._staff = staff
        self._scope = scope
        self._stores = tuple(stores)

    @property
    def repository(self) -> StaffRepository:
        return self._staff

    @property
    def stores(self) -> tuple[str, ...]:
        return self._stores

    def list_staff(self) -> list[StaffMember]:
        return sorted(self._staff.list_all(), key=lambda s: s.name.lower())

    def get_staff(self, staff_id: str) -> StaffMember:
        member = self._staff.get_by_id(staff_id)
        if not member:
            raise NotFoundError("Staff member not found")
        return member

    def add_staff(
        self,
        *,
        name: str,
        store: str,
        total_cl: Any = 0,
        total_sl: Any = 0,
        total_el: Any = 0,
    ) -> str:
        staff_id = self._staff.create(
            name=require_non_empty(name, "Name"),
            store=require_choice(store, "Store", self._stores),
            total_cl=require_non_negative_int(total_cl, "Total CL"),
            total_sl=require_non_negative_int(total_sl, "Total SL"),
            total_el=require_non_negative_int(total_el, "Total EL"),
        )
        logger.info("Staff member added", extra={"tenant": self._scope.uid, "staff_id": staff_id})
        return staff_id

    def update_staff(
        self,
        staff_id: str,
        *,
        name: Optional[str] = None,
        store: Optional[str] = None,
        total_cl: Any = None,
        total_sl: Any = None,
        total_el: Any = None,
    ) -> None:
        """Partial edit. A rename does not touch leave records already filed."""

        self.get_staff(staff_id)

        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = require_non_empty(name, "Name")
        if store is not None:
            changes["store"] = require_choice(store, "Store", self._stores)
        for field_name, value, label in (
            ("total_cl", total_cl, "Total CL"),
            ("total_sl", total_sl, "Total SL"),
            ("total_el", total_el, "Total EL"),
        ):
            # Blank form fields mean "unchanged", not zero.
            if optional_text(value):
                changes[field_name] = require_non_negative_int(value, label)

        if changes:
            self._staff.update(staff_id=staff_id, changes=changes)
            logger.info("Staff member updated", extra={"tenant": self._scope.uid, "staff_id": staff_id})

    def delete_staff(self, staff_id: str, *, confirmed: bool = False) -> None:
        """Leave records and attendance entries of the member are kept (orphaned)."""

        if not confirmed:
            raise ConfirmationRequiredError("Are you sure you want to delete this staff member?")
        self.get_staff(staff_id)
        self._staff.delete(staff_id)
        logger.info("Staff member deleted", extra={"tenant": self._scope.uid, "staff_id": staff_id})
