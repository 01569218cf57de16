"""Visibility Rule: public vs administrative reads over posted_at."""

from datetime import datetime, timedelta, timezone

from cms_core.core.visibility import is_visible, utc_now

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_admin_mode_sees_drafts():
    assert is_visible(None, NOW, only_published=False)


def test_admin_mode_sees_scheduled_items():
    assert is_visible(NOW + timedelta(days=1), NOW, only_published=False)


def test_public_mode_hides_drafts():
    assert not is_visible(None, NOW, only_published=True)


def test_public_mode_hides_scheduled_items():
    assert not is_visible(NOW + timedelta(seconds=1), NOW, only_published=True)


def test_public_mode_shows_past_items():
    assert is_visible(NOW - timedelta(hours=1), NOW, only_published=True)


def test_item_published_exactly_now_is_visible():
    assert is_visible(NOW, NOW, only_published=True)


def test_utc_now_is_timezone_aware():
    assert utc_now().tzinfo is timezone.utc
