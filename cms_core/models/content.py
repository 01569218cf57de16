"""Content Columns: the schema shared by every publishable content kind.

Invariants:
    - title and slug are unique among live rows (deleted_at IS NULL) of one table
    - posted_at NULL means draft; a future posted_at means scheduled
    - deleted_at set means tombstoned; the row stays readable only via the unscoped path
    - posted_at and deleted_at are indexed for visibility filtering
    - Every timestamp is stored and read back as UTC (db/types.py)

Design Decisions:
    - Partial unique indexes instead of plain UNIQUE: a tombstoned row must not
      block re-creating content with the same title or slug
"""

from datetime import datetime

from sqlalchemy import Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from cms_core.core.visibility import utc_now
from cms_core.db.types import UTCDateTime


def live_unique_index(table_name: str, column: str) -> Index:
    """Unique index over `column` restricted to non-tombstoned rows."""
    live = text("deleted_at IS NULL")
    return Index(
        f"uq_{table_name}_{column}_live", column,
        unique=True, sqlite_where=live, postgresql_where=live,
    )


class ContentColumns:
    """Columns shared by Article and PortfolioItem."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    short_description: Mapped[str] = mapped_column(
        String(500), nullable=False, default="",
    )
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utc_now,
    )
    posted_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(), nullable=True, index=True,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(), nullable=True, index=True,
    )
