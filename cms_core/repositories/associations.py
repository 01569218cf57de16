"""Association Replacer: atomic full-set substitution of a content row's link rows.

Invariants:
    - replace() deletes every link of one kind for the content row, then inserts
      exactly the new set, inside one transaction (all-or-nothing)
    - The empty set is legal and clears all links of that kind
    - Duplicate target ids collapse to one link; no ordering among links
    - The content row must be live and every target must exist, checked before any write

Design Decisions:
    - apply() runs inside a caller-owned transaction so create() can attach
      links in the same unit as the row insert
    - Target existence is checked explicitly instead of relying on the backend's
      foreign key enforcement
"""

import logging
from typing import Iterable

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from cms_core.core.domain_types import AssociationKind
from cms_core.core.errors import ResourceNotFoundError
from cms_core.infrastructure.database import DatabaseSessionManager
from cms_core.repositories.filters import live_clause
from cms_core.repositories.kinds import ContentKind, LinkSpec

logger = logging.getLogger(__name__)


class AssociationReplacer:
    """Owns every write to one content kind's link tables."""

    def __init__(self, store: DatabaseSessionManager, kind: ContentKind):
        self._store = store
        self._kind = kind

    async def replace(
        self,
        content_id: int,
        association: AssociationKind,
        target_ids: Iterable[int],
    ) -> None:
        """Replace the whole link set of one kind in its own transaction."""
        target_ids = list(target_ids)
        async with self._store.transaction(self._kind.label) as db:
            await self._require_live_content(db, content_id)
            await self.apply(db, content_id, association, target_ids)
        logger.info(
            f"Replaced {association.value} links of {self._kind.label} {content_id}",
            extra={
                "resource_type": self._kind.label,
                "resource_id": str(content_id),
                "total": len(set(target_ids)),
            },
        )

    async def apply(
        self,
        db: AsyncSession,
        content_id: int,
        association: AssociationKind,
        target_ids: Iterable[int],
    ) -> None:
        """Delete-then-insert within the caller's open transaction."""
        link = self._kind.links[association]
        ids = sorted(set(target_ids))
        await _require_targets(db, link, ids)
        await db.execute(
            delete(link.model).where(link.content_attr == content_id),
        )
        if ids:
            await db.execute(
                insert(link.model),
                [{"content_id": content_id, link.target_column: i} for i in ids],
            )

    async def _require_live_content(self, db: AsyncSession, content_id: int) -> None:
        model = self._kind.model
        found = await db.scalar(
            select(model.id).where(model.id == content_id, live_clause(model)),
        )
        if found is None:
            raise ResourceNotFoundError(self._kind.label, str(content_id))


async def _require_targets(db: AsyncSession, link: LinkSpec, ids: list[int]) -> None:
    if not ids:
        return
    target = link.target_model
    result = await db.scalars(select(target.id).where(target.id.in_(ids)))
    missing = set(ids) - set(result)
    if missing:
        raise ResourceNotFoundError(
            link.target_label, ", ".join(str(i) for i in sorted(missing)),
        )
