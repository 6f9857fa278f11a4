from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.pharmacy_ops.pharmacy_ops.backend.memory import (
    InMemoryBlobStore,
    InMemoryIdentityProvider,
    InMemoryRecordStore,
)
from src.pharmacy_ops.pharmacy_ops.container import TenantFactory
from src.pharmacy_ops.pharmacy_ops.core.constants import DEFAULT_STORES, EXPIRING_SOON_WINDOW


@pytest.fixture
def fixed_now() -> datetime:
    # 12:00 in Asia/Kolkata, same calendar date as UTC.
    return datetime(2024, 6, 15, 6, 30, tzinfo=timezone.utc)


@pytest.fixture
def records() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def blobs() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def identity() -> InMemoryIdentityProvider:
    return InMemoryIdentityProvider()


@pytest.fixture
def tenant_factory(records, blobs) -> TenantFactory:
    return TenantFactory(
        records=records,
        blobs=blobs,
        app_id="test-app",
        stores=DEFAULT_STORES,
        timezone="Asia/Kolkata",
        expiring_soon_window=EXPIRING_SOON_WINDOW,
    )


@pytest.fixture
def tenant(tenant_factory):
    return tenant_factory("owner-1")


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.pharmacy_ops.pharmacy_ops.main import create_app

    flask_app = create_app()
    yield flask_app
    flask_app.extensions["pharmacy_ops"].sessions.close_all()


@pytest.fixture
def client(app):
    return app.test_client()
