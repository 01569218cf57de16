"""Taxonomy Repository: tags and categories, created once and only ever renamed.

Invariants:
    - list_all orders by title ascending (id ascending on ties)
    - Duplicate titles raise ConflictError on create and rename
    - No delete: content links reference taxonomy rows, never own them
"""

import logging
from typing import Iterable

from sqlalchemy import func, select, update

from cms_core.core.errors import ResourceNotFoundError
from cms_core.core.pagination import DEFAULT_PAGE_SIZE, resolve
from cms_core.core.records import Page
from cms_core.infrastructure.database import DatabaseSessionManager
from cms_core.models import CategoryModel, TagModel
from cms_core.repositories.mapping import to_category, to_tag

logger = logging.getLogger(__name__)


class TaxonomyRepository:
    """CRUD over one taxonomy table (tags or categories)."""

    def __init__(self, store: DatabaseSessionManager, model, to_record, label: str):
        self._store = store
        self._model = model
        self._to_record = to_record
        self.label = label

    async def list_all(
        self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page:
        model = self._model
        offset, limit = resolve(page, page_size)
        async with self._store.session(self.label) as db:
            total = await db.scalar(select(func.count()).select_from(model))
            rows = await db.scalars(
                select(model)
                .order_by(model.title.asc(), model.id.asc())
                .offset(offset)
                .limit(limit)
            )
            items = [self._to_record(row) for row in rows]
        return Page(items, total or 0)

    async def get_by_id(self, taxonomy_id: int):
        async with self._store.session(self.label) as db:
            row = await db.get(self._model, taxonomy_id)
            if row is None:
                raise ResourceNotFoundError(self.label, str(taxonomy_id))
            return self._to_record(row)

    async def find_by_ids(self, ids: Iterable[int]) -> list:
        """Resolve ids to records; unknown ids are left out, order is by title."""
        ids = sorted(set(ids))
        if not ids:
            return []
        model = self._model
        async with self._store.session(self.label) as db:
            rows = await db.scalars(
                select(model).where(model.id.in_(ids)).order_by(model.title.asc()),
            )
            return [self._to_record(row) for row in rows]

    async def create(self, item):
        if item.id is not None:
            raise ValueError(f"{self.label} already has id {item.id}")
        row = self._model(title=item.title)
        async with self._store.transaction(self.label) as db:
            db.add(row)
            await db.flush()
            record = self._to_record(row)
        logger.info(
            f"Created {self.label} '{record.title}'",
            extra={"resource_type": self.label, "resource_id": str(record.id)},
        )
        return record

    async def rename(self, taxonomy_id: int, new_title: str):
        model = self._model
        async with self._store.transaction(self.label) as db:
            result = await db.execute(
                update(model)
                .where(model.id == taxonomy_id)
                .values(title=new_title)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise ResourceNotFoundError(self.label, str(taxonomy_id))
            row = await db.get(model, taxonomy_id, populate_existing=True)
            record = self._to_record(row)
        logger.info(
            f"Renamed {self.label} {taxonomy_id} to '{new_title}'",
            extra={"resource_type": self.label, "resource_id": str(taxonomy_id)},
        )
        return record


class TagRepository(TaxonomyRepository):
    def __init__(self, store: DatabaseSessionManager):
        super().__init__(store, TagModel, to_tag, "Tag")


class CategoryRepository(TaxonomyRepository):
    def __init__(self, store: DatabaseSessionManager):
        super().__init__(store, CategoryModel, to_category, "Category")