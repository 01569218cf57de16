"""Visibility Rule: public vs administrative read modes over a nullable publish timestamp.

Invariants:
    - Administrative reads (only_published=False) see drafts and scheduled items
    - Public reads see an item iff posted_at is set and not in the future
    - The repositories apply the same rule as a SQL predicate (repositories/filters.py)
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_visible(
    posted_at: datetime | None, now: datetime, only_published: bool,
) -> bool:
    """Decide whether an item with this publish timestamp is visible at `now`."""
    if not only_published:
        return True
    return posted_at is not None and posted_at <= now
