"""Content Repository: CRUD, pagination, visibility and search for one content kind.

Invariants:
    - Default reads (get_by_id, get_by_slug, list_all, search) exclude tombstoned rows
    - get_by_slug raises the same ResourceNotFoundError whether the row is absent
      or hidden by the visibility rule (a public caller cannot detect drafts)
    - create() inserts the row and its pre-attached links in one transaction
    - update() replaces mutable fields only; links and posted_at are untouched
    - delete() tombstones; deleting an already-deleted id raises ResourceNotFoundError
    - Returned tags/categories are always fully loaded

Design Decisions:
    - One class parameterized by ContentKind; ArticleRepository and
      PortfolioItemRepository only bind the kind
    - The clock is injected so visibility can be evaluated against a fixed "now"
    - list_all/search count and page in two round-trips; under concurrent writes
      total and page may disagree slightly (accepted weak consistency)
"""

import logging
from datetime import datetime
from typing import Iterable

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cms_core.core.domain_types import NO_FILTER, AssociationKind, Clock
from cms_core.core.errors import ResourceNotFoundError
from cms_core.core.pagination import DEFAULT_PAGE_SIZE, resolve
from cms_core.core.records import Category, ContentRecord, Page, Tag
from cms_core.core.visibility import utc_now
from cms_core.infrastructure.database import DatabaseSessionManager
from cms_core.repositories.associations import AssociationReplacer
from cms_core.repositories.filters import live_clause, visible_clause
from cms_core.repositories.kinds import ARTICLE, PORTFOLIO_ITEM, ContentKind
from cms_core.repositories.mapping import to_content_record
from cms_core.repositories.search import SearchCriteria, SearchFilter

logger = logging.getLogger(__name__)


def _persisted_ids(items: Iterable[Tag | Category]) -> list[int]:
    ids = []
    for item in items:
        if item.id is None:
            raise ValueError(f"{type(item).__name__} '{item.title}' has no id; create it first")
        ids.append(item.id)
    return ids


class ContentRepository:
    """Stateless repository over one content kind's table and link tables."""

    def __init__(
        self,
        store: DatabaseSessionManager,
        kind: ContentKind,
        clock: Clock = utc_now,
    ):
        self._store = store
        self.kind = kind
        self._clock = clock
        self._associations = AssociationReplacer(store, kind)
        self._search = SearchFilter(kind)

    # ─── Reads ──────────────────────────────────────────────────

    async def list_all(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        only_published: bool = True,
    ) -> Page[ContentRecord]:
        model = self.kind.model
        conditions = (
            live_clause(model),
            visible_clause(model, self._clock(), only_published),
        )
        offset, limit = resolve(page, page_size)
        async with self._store.session(self.kind.label) as db:
            total = await db.scalar(
                select(func.count()).select_from(model).where(*conditions),
            )
            rows = await db.scalars(
                select(model)
                .where(*conditions)
                .order_by(*self.kind.list_order)
                .offset(offset)
                .limit(limit)
            )
            items = [to_content_record(self.kind, row) for row in rows]
        return Page(items, total or 0)

    async def get_by_slug(
        self, slug: str, only_published: bool = True,
    ) -> ContentRecord:
        model = self.kind.model
        async with self._store.session(self.kind.label) as db:
            row = await db.scalar(
                select(model).where(
                    model.slug == slug,
                    live_clause(model),
                    visible_clause(model, self._clock(), only_published),
                )
            )
            if row is None:
                raise ResourceNotFoundError(self.kind.label, slug)
            return to_content_record(self.kind, row)

    async def get_by_id(self, content_id: int) -> ContentRecord:
        """Administrative lookup: no visibility filter, tombstoned rows excluded."""
        async with self._store.session(self.kind.label) as db:
            row = await self._load(db, content_id)
            return to_content_record(self.kind, row)

    async def get_by_id_including_deleted(self, content_id: int) -> ContentRecord:
        """The one read path that also returns tombstoned rows (recovery)."""
        async with self._store.session(self.kind.label) as db:
            row = await self._load(db, content_id, include_deleted=True)
            return to_content_record(self.kind, row)

    async def search(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        category_id: int = NO_FILTER,
        tag_id: int = NO_FILTER,
        text: str = "",
        only_published: bool = True,
    ) -> Page[ContentRecord]:
        criteria = SearchCriteria(
            page=page, page_size=page_size,
            category_id=category_id, tag_id=tag_id,
            text=text, only_published=only_published,
        )
        async with self._store.session(self.kind.label) as db:
            rows, total = await self._search.search(db, criteria, self._clock())
            items = [to_content_record(self.kind, row) for row in rows]
        return Page(items, total)

    # ─── Writes ─────────────────────────────────────────────────

    async def create(self, item: ContentRecord) -> ContentRecord:
        if item.id is not None:
            raise ValueError(f"{self.kind.label} already has id {item.id}")
        tag_ids = _persisted_ids(item.tags)
        category_ids = _persisted_ids(item.categories)
        now = self._clock()
        row = self.kind.model(
            **{name: getattr(item, name) for name in self.kind.mutable_fields},
            posted_at=item.posted_at,
            created_at=now,
            updated_at=now,
        )
        async with self._store.transaction(self.kind.label) as db:
            db.add(row)
            await db.flush()
            if tag_ids:
                await self._associations.apply(db, row.id, AssociationKind.TAG, tag_ids)
            if category_ids:
                await self._associations.apply(
                    db, row.id, AssociationKind.CATEGORY, category_ids,
                )
            created = await self._load(db, row.id)
            record = to_content_record(self.kind, created)
        logger.info(
            f"Created {self.kind.label} {record.id}",
            extra={"resource_type": self.kind.label, "resource_id": str(record.id)},
        )
        return record

    async def update(self, item: ContentRecord) -> ContentRecord:
        """Full replace of the mutable fields by primary key."""
        if item.id is None:
            raise ValueError(f"{self.kind.label} has no id")
        values = {name: getattr(item, name) for name in self.kind.mutable_fields}
        async with self._store.transaction(self.kind.label) as db:
            await self._update_live(db, item.id, **values, updated_at=self._clock())
            updated = await self._load(db, item.id)
            record = to_content_record(self.kind, updated)
        logger.info(
            f"Updated {self.kind.label} {item.id}",
            extra={"resource_type": self.kind.label, "resource_id": str(item.id)},
        )
        return record

    async def delete(self, content_id: int) -> None:
        """Tombstone the row. A second delete raises ResourceNotFoundError."""
        async with self._store.transaction(self.kind.label) as db:
            await self._update_live(db, content_id, deleted_at=self._clock())
        logger.info(
            f"Deleted {self.kind.label} {content_id}",
            extra={"resource_type": self.kind.label, "resource_id": str(content_id)},
        )

    async def restore(self, content_id: int) -> ContentRecord:
        """Clear the tombstone; ConflictError if a live row took its title or slug."""
        model = self.kind.model
        async with self._store.transaction(self.kind.label) as db:
            result = await db.execute(
                update(model)
                .where(model.id == content_id, model.deleted_at.is_not(None))
                .values(deleted_at=None)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise ResourceNotFoundError(self.kind.label, str(content_id))
            restored = await self._load(db, content_id)
            record = to_content_record(self.kind, restored)
        logger.info(
            f"Restored {self.kind.label} {content_id}",
            extra={"resource_type": self.kind.label, "resource_id": str(content_id)},
        )
        return record

    async def set_posted_at(
        self, content_id: int, posted_at: datetime | None,
    ) -> None:
        """Publish, schedule or unpublish without touching any other column."""
        async with self._store.transaction(self.kind.label) as db:
            await self._update_live(db, content_id, posted_at=posted_at)
        logger.debug(
            f"Set posted_at of {self.kind.label} {content_id} to {posted_at}",
            extra={"resource_type": self.kind.label, "resource_id": str(content_id)},
        )

    async def replace_tags(self, item: ContentRecord, tags: Iterable[Tag]) -> None:
        await self._associations.replace(
            self._require_id(item), AssociationKind.TAG, _persisted_ids(tags),
        )

    async def replace_categories(
        self, item: ContentRecord, categories: Iterable[Category],
    ) -> None:
        await self._associations.replace(
            self._require_id(item), AssociationKind.CATEGORY, _persisted_ids(categories),
        )

    # ─── Helpers ────────────────────────────────────────────────

    def _require_id(self, item: ContentRecord) -> int:
        if item.id is None:
            raise ValueError(f"{self.kind.label} '{item.title}' has no id")
        return item.id

    async def _load(
        self, db: AsyncSession, content_id: int, include_deleted: bool = False,
    ):
        model = self.kind.model
        query = select(model).where(model.id == content_id)
        if not include_deleted:
            query = query.where(live_clause(model))
        row = await db.scalar(
            query.execution_options(populate_existing=True),
        )
        if row is None:
            raise ResourceNotFoundError(self.kind.label, str(content_id))
        return row

    async def _update_live(self, db: AsyncSession, content_id: int, **values) -> None:
        model = self.kind.model
        result = await db.execute(
            update(model)
            .where(model.id == content_id, live_clause(model))
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise ResourceNotFoundError(self.kind.label, str(content_id))


class ArticleRepository(ContentRepository):
    def __init__(self, store: DatabaseSessionManager, clock: Clock = utc_now):
        super().__init__(store, ARTICLE, clock)


class PortfolioItemRepository(ContentRepository):
    def __init__(self, store: DatabaseSessionManager, clock: Clock = utc_now):
        super().__init__(store, PORTFOLIO_ITEM, clock)
