"""Pagination Policy: normalizes page/page-size into a bounded offset/limit pair.

Invariants:
    - page <= 0 is treated as page 1
    - page_size <= 0 falls back to DEFAULT_PAGE_SIZE; above MAX_PAGE_SIZE is clamped
    - Pure: no IO, never raises
"""

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 500


def resolve(page: int, page_size: int) -> tuple[int, int]:
    """Return (offset, limit) for a 1-based page."""
    if page <= 0:
        page = 1
    if page_size > MAX_PAGE_SIZE:
        limit = MAX_PAGE_SIZE
    elif page_size <= 0:
        limit = DEFAULT_PAGE_SIZE
    else:
        limit = page_size
    return (page - 1) * limit, limit
