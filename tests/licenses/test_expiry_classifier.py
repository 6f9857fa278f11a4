from __future__ import annotations

from datetime import datetime, timedelta, timezone

from src.pharmacy_ops.pharmacy_ops.core.enums import ExpiryState
from src.pharmacy_ops.pharmacy_ops.licenses.classifier import classify_expiry, expiry_state
from src.pharmacy_ops.pharmacy_ops.licenses.model import License


def _license(license_id: str, expiry):
    return License(license_id=license_id, name=f"License {license_id}", expiry_date=expiry)


def test_expiry_exactly_now_is_neither_expired_nor_expiring(fixed_now):
    buckets = classify_expiry(fixed_now, [_license("a", fixed_now)])

    assert buckets.expired == ()
    assert buckets.expiring_soon == ()
    assert not buckets.needs_attention


def test_one_microsecond_in_the_past_is_expired(fixed_now):
    lic = _license("a", fixed_now - timedelta(microseconds=1))

    assert expiry_state(lic, fixed_now) == ExpiryState.EXPIRED
    assert classify_expiry(fixed_now, [lic]).expired == (lic,)


def test_window_boundaries(fixed_now):
    inside = _license("a", fixed_now + timedelta(days=29, hours=23))
    edge = _license("b", fixed_now + timedelta(days=30))
    outside = _license("c", fixed_now + timedelta(days=30, hours=1))

    buckets = classify_expiry(fixed_now, [inside, edge, outside])

    assert buckets.expiring_soon == (inside, edge)
    assert expiry_state(outside, fixed_now) == ExpiryState.OK


def test_license_without_expiry_is_never_classified(fixed_now):
    lic = _license("a", None)

    assert expiry_state(lic, fixed_now) is None
    buckets = classify_expiry(fixed_now, [lic])
    assert buckets.expired == () and buckets.expiring_soon == ()


def test_naive_timestamps_compare_as_utc(fixed_now):
    naive_expiry = datetime(2024, 6, 20)
    lic = _license("a", naive_expiry)

    assert expiry_state(lic, fixed_now) == ExpiryState.EXPIRING_SOON
    assert expiry_state(lic, datetime(2024, 6, 21, tzinfo=timezone.utc)) == ExpiryState.EXPIRED


def test_classification_ages_with_the_clock(fixed_now):
    lic = _license("a", fixed_now + timedelta(days=45))

    assert expiry_state(lic, fixed_now) == ExpiryState.OK
    assert expiry_state(lic, fixed_now + timedelta(days=20)) == ExpiryState.EXPIRING_SOON
    assert expiry_state(lic, fixed_now + timedelta(days=46)) == ExpiryState.EXPIRED


def test_custom_window(fixed_now):
    lic = _license("a", fixed_now + timedelta(days=10))

    assert expiry_state(lic, fixed_now, window=timedelta(days=7)) == ExpiryState.OK
    assert expiry_state(lic, fixed_now, window=timedelta(days=10)) == ExpiryState.EXPIRING_SOON
