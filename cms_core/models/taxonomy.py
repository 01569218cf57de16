"""Taxonomy ORM: tags and categories referenced by content rows.

Invariants:
    - title is unique per table (no soft delete, rows are only renamed)
"""

from datetime import datetime

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from cms_core.core.visibility import utc_now
from cms_core.db.base import Base
from cms_core.db.types import UTCDateTime


class TaxonomyColumns:
    """Columns shared by Tag and Category."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utc_now, onupdate=utc_now,
    )


class TagModel(TaxonomyColumns, Base):
    __tablename__ = "tags"


class CategoryModel(TaxonomyColumns, Base):
    __tablename__ = "categories"
