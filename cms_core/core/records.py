"""Plain Data Records: the shapes repositories accept and return.

Invariants:
    - Records carry no persistence behavior; repositories are the only writers
    - id is None until the store assigns one on create
    - tags/categories on a content record are a snapshot of its link rows at read time
    - Page unpacks as (items, total) for paginated operations

Design Decisions:
    - dataclasses over ORM rows at the boundary: callers never hold a live session object
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, NamedTuple, TypeVar


T = TypeVar("T")


class Page(NamedTuple, Generic[T]):
    """One page of results plus the total number of matching rows."""
    items: list[T]
    total: int


# ─── Taxonomy ────────────────────────────────────────────────────

@dataclass
class Tag:
    title: str
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class Category:
    title: str
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# ─── Content ─────────────────────────────────────────────────────

@dataclass
class ContentRecord:
    """Fields shared by every content kind."""
    title: str
    slug: str
    short_description: str = ""
    body: str = ""
    posted_at: datetime | None = None
    tags: list[Tag] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass
class Article(ContentRecord):
    pass


@dataclass
class PortfolioItem(ContentRecord):
    demo_url: str = ""
    repo_url: str = ""
