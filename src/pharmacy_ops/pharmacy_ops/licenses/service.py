from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from ..backend.paths import TenantScope
from ..backend.store import BlobStore
from ..common.datetime_utils import format_date, utc_midnight
from ..common.validators import optional_text, require_date
from ..core.constants import EXPIRING_SOON_WINDOW
from ..core.enums import ExpiryState
from ..core.exceptions import BackendError, ConfirmationRequiredError, NotFoundError, ValidationError
from .classifier import ExpiryBuckets, classify_expiry
from .model import Attachment, ExpiryAlert, License
from .repository import LicenseRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LicenseListing:
    licenses: tuple[License, ...]
    empty_message: Optional[str] = None


def search_licenses(licenses: Iterable[License], term: str) -> list[License]:
    needle = (term or "").strip().lower()
    return [lic for lic in licenses if needle in lic.name.lower()]


def sort_by_expiry(licenses: Iterable[License]) -> list[License]:
    """Soonest expiry first; licenses without an expiry date go last."""

    return sorted(licenses, key=lambda lic: (lic.expiry_date is None, lic.expiry_date or datetime.min))


def build_alerts(buckets: ExpiryBuckets) -> list[ExpiryAlert]:
    alerts = [
        ExpiryAlert(
            license_id=lic.license_id,
            name=lic.name,
            state=ExpiryState.EXPIRED,
            expiry=format_date(lic.expiry_date),
            message=f'"{lic.name}" expired on {format_date(lic.expiry_date)}. Please renew it immediately.',
        )
        for lic in buckets.expired
    ]
    alerts.extend(
        ExpiryAlert(
            license_id=lic.license_id,
            name=lic.name,
            state=ExpiryState.EXPIRING_SOON,
            expiry=format_date(lic.expiry_date),
            message=f'"{lic.name}" will expire on {format_date(lic.expiry_date)}. Don\'t forget to renew.',
        )
        for lic in buckets.expiring_soon
    )
    return alerts


class LicenseService:
    """Use cases: track, renew and remove licenses of one tenant."""

    def __init__(
        self,
        licenses: LicenseRepository,
        blobs: BlobStore,
        scope: TenantScope,
        *,
        window: timedelta = EXPIRING_SOON_WINDOW,
    ):
        self._licenses = licenses
        self._blobs = blobs
        self._scope = scope
        self._window = window

    @property
    def repository(self) -> LicenseRepository:
        return self._licenses

    def _parse_expiry(self, name: str, expiry_date) -> datetime:
        if not name or expiry_date is None or (isinstance(expiry_date, str) and not expiry_date.strip()):
            raise ValidationError("License Name and Expiry Date are required.")
        return utc_midnight(require_date(expiry_date, "Expiry Date"))

    def _store_attachment(self, attachment: Attachment) -> tuple[str, str]:
        file_name = optional_text(attachment.file_name).replace("/", "_")
        if not file_name:
            raise ValidationError("Attached file has no name")
        try:
            handle = self._blobs.upload(
                self._scope.license_blob(file_name),
                attachment.data,
                content_type=attachment.content_type,
            )
            return self._blobs.get_public_url(handle), file_name
        except BackendError as e:
            raise BackendError("Failed to upload file. Please try again.") from e

    def _discard_attachment(self, file_name: str) -> None:
        """Remove a blob uploaded for a record write that then failed."""

        try:
            self._blobs.delete(self._scope.license_blob(file_name))
        except BackendError:
            logger.exception("Could not remove orphaned attachment", extra={"tenant": self._scope.uid})

    def list_licenses(self, *, search: str = "", licenses: Optional[Sequence[License]] = None) -> LicenseListing:
        all_licenses = list(licenses) if licenses is not None else list(self._licenses.list_all())
        matching = sort_by_expiry(search_licenses(all_licenses, search))
        if matching:
            return LicenseListing(licenses=tuple(matching))
        message = "No licenses match your search." if all_licenses else "No licenses added yet."
        return LicenseListing(licenses=(), empty_message=message)

    def add_license(
        self,
        *,
        name: str,
        expiry_date,
        license_number: str = "",
        issuing_authority: str = "",
        notes: str = "",
        attachment: Optional[Attachment] = None,
    ) -> str:
        name = optional_text(name)
        expiry = self._parse_expiry(name, expiry_date)

        lowered = name.lower()
        if any(lic.name.lower() == lowered for lic in self._licenses.list_all()):
            raise ValidationError(f'A license named "{name}" already exists')

        file_url, file_name = ("", "")
        if attachment is not None:
            file_url, file_name = self._store_attachment(attachment)

        try:
            license_id = self._licenses.create(
                name=name,
                expiry_date=expiry,
                license_number=optional_text(license_number),
                issuing_authority=optional_text(issuing_authority),
                notes=optional_text(notes),
                file_url=file_url,
                file_name=file_name,
            )
        except BackendError:
            if attachment is not None:
                self._discard_attachment(file_name)
            raise
        logger.info("License added", extra={"tenant": self._scope.uid, "license_id": license_id})
        return license_id

    def renew_license(
        self,
        *,
        license_id: str,
        expiry_date,
        notes: Optional[str] = None,
        attachment: Optional[Attachment] = None,
    ) -> None:
        current = self._licenses.get_by_id(license_id)
        if not current:
            raise NotFoundError("License not found")

        expiry = self._parse_expiry(current.name, expiry_date)

        file_url, file_name = current.file_url, current.file_name
        if attachment is not None:
            file_url, file_name = self._store_attachment(attachment)

        try:
            self._licenses.renew(
                license_id=license_id,
                expiry_date=expiry,
                notes=current.notes if notes is None else optional_text(notes),
                file_url=file_url,
                file_name=file_name,
            )
        except BackendError:
            # Same name means the upload replaced the current file in place.
            if attachment is not None and file_name != current.file_name:
                self._discard_attachment(file_name)
            raise
        logger.info("License renewed", extra={"tenant": self._scope.uid, "license_id": license_id})

    def delete_license(self, license_id: str, *, confirmed: bool = False) -> None:
        if not confirmed:
            raise ConfirmationRequiredError(
                "Are you sure you want to delete this license? This action cannot be undone."
            )
        if not self._licenses.get_by_id(license_id):
            raise NotFoundError("License not found")

        self._licenses.delete(license_id)
        logger.info("License deleted", extra={"tenant": self._scope.uid, "license_id": license_id})

    def classify(self, now: datetime, licenses: Optional[Sequence[License]] = None) -> ExpiryBuckets:
        source = licenses if licenses is not None else self._licenses.list_all()
        return classify_expiry(now, source, window=self._window)

    def alerts(self, now: datetime, licenses: Optional[Sequence[License]] = None) -> list[ExpiryAlert]:
        return build_alerts(self.classify(now, licenses))
