"""UTCDateTime column type: conversion on bind and on load."""

from datetime import datetime, timedelta, timezone

from cms_core.db.types import UTCDateTime

NOON_UTC = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
UTC_PLUS_5 = timezone(timedelta(hours=5))


def test_bind_converts_offset_to_utc():
    bound = UTCDateTime().process_bind_param(NOON_UTC.astimezone(UTC_PLUS_5), None)
    assert bound.tzinfo is timezone.utc
    assert bound.hour == 12


def test_bind_takes_naive_as_utc():
    bound = UTCDateTime().process_bind_param(datetime(2026, 3, 1, 12, 0), None)
    assert bound == NOON_UTC


def test_result_reattaches_utc():
    loaded = UTCDateTime().process_result_value(datetime(2026, 3, 1, 12, 0), None)
    assert loaded == NOON_UTC
    assert loaded.tzinfo is timezone.utc


def test_none_passes_through():
    column_type = UTCDateTime()
    assert column_type.process_bind_param(None, None) is None
    assert column_type.process_result_value(None, None) is None
