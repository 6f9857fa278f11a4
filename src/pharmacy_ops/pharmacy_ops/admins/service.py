from __future__ import annotations

import logging
from typing import Any, Optional

from ..backend.paths import TenantScope
from ..common.validators import optional_text, require_email, require_non_empty
from ..core.exceptions import ConfirmationRequiredError, NotFoundError
from .model import Admin
from .repository import AdminRepository

logger = logging.getLogger(__name__)


class AdminService:
    """Use case: keep the list of pharmacy administrators."""

    def __init__(self, admins: AdminRepository, scope: TenantScope):
        self._admins = admins
        self._scope = scope

    def list_admins(self) -> list[Admin]:
        return sorted(self._admins.list_all(), key=lambda a: a.name.lower())

    def add_admin(self, *, name: str, email: str, mobile: str = "", designation: str = "") -> str:
        admin_id = self._admins.create(
            name=require_non_empty(name, "Name"),
            email=require_email(email),
            mobile=optional_text(mobile),
            designation=optional_text(designation),
        )
        logger.info("Admin added", extra={"tenant": self._scope.uid, "admin_id": admin_id})
        return admin_id

    def update_admin(
        self,
        admin_id: str,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        mobile: Optional[str] = None,
        designation: Optional[str] = None,
    ) -> None:
        if not self._admins.get_by_id(admin_id):
            raise NotFoundError("Admin not found")

        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = require_non_empty(name, "Name")
        if email is not None:
            changes["email"] = require_email(email)
        if mobile is not None:
            changes["mobile"] = optional_text(mobile)
        if designation is not None:
            changes["designation"] = optional_text(designation)

        if changes:
            self._admins.update(admin_id=admin_id, changes=changes)

    def delete_admin(self, admin_id: str, *, confirmed: bool = False) -> None:
        if not confirmed:
            raise ConfirmationRequiredError("Are you sure you want to delete this admin?")
        if not self._admins.get_by_id(admin_id):
            raise NotFoundError("Admin not found")
        self._admins.delete(admin_id)
        logger.info("Admin deleted", extra={"tenant": self._scope.uid, "admin_id": admin_id})
