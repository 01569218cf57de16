"""Search Filter: join-based filtering by category, tag and free text.

Invariants:
    - category_id/tag_id == NO_FILTER (0) leaves that dimension unrestricted and
      its link table unjoined
    - Matching ids are made DISTINCT before counting and before paging, so a row
      joined through several links is counted and returned once
    - text matches title OR short_description, case-insensitive substring;
      LIKE wildcards in the text match literally
    - Visibility and tombstone predicates are the same as plain listing
    - Order: posted_at DESC (NULLs last), then id ASC

Design Decisions:
    - The page query selects content rows by id IN (distinct ids), never through the
      filtering joins; tags/categories then load in a second selectin pass keyed by
      those ids, so association loading cannot reintroduce duplicates
"""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from cms_core.core.domain_types import NO_FILTER, AssociationKind
from cms_core.core.pagination import DEFAULT_PAGE_SIZE, resolve
from cms_core.repositories.filters import live_clause, visible_clause
from cms_core.repositories.kinds import ContentKind


@dataclass(frozen=True)
class SearchCriteria:
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    category_id: int = NO_FILTER
    tag_id: int = NO_FILTER
    text: str = ""
    only_published: bool = True


class SearchFilter:
    def __init__(self, kind: ContentKind):
        self._kind = kind

    def matching_ids(self, criteria: SearchCriteria, now: datetime) -> Select:
        """SELECT DISTINCT id of every content row matching the criteria."""
        model = self._kind.model
        query = select(model.id).where(
            live_clause(model),
            visible_clause(model, now, criteria.only_published),
        )
        for association, wanted in (
            (AssociationKind.CATEGORY, criteria.category_id),
            (AssociationKind.TAG, criteria.tag_id),
        ):
            if wanted == NO_FILTER:
                continue
            link = self._kind.links[association]
            query = query.join(
                link.model, link.content_attr == model.id,
            ).where(link.target_attr == wanted)
        if criteria.text:
            query = query.where(or_(
                model.title.icontains(criteria.text, autoescape=True),
                model.short_description.icontains(criteria.text, autoescape=True),
            ))
        return query.distinct()

    async def search(
        self, db: AsyncSession, criteria: SearchCriteria, now: datetime,
    ) -> tuple[list, int]:
        """Return (rows, total). Count and page are separate round-trips."""
        model = self._kind.model
        ids = self.matching_ids(criteria, now).subquery()
        total = await db.scalar(select(func.count()).select_from(ids))

        offset, limit = resolve(criteria.page, criteria.page_size)
        rows = await db.scalars(
            select(model)
            .where(model.id.in_(select(ids.c.id)))
            .order_by(model.posted_at.desc().nulls_last(), model.id.asc())
            .offset(offset)
            .limit(limit)
        )
        return list(rows), total or 0
