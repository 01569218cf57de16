"""Composition Root: builds the store handle and wires every repository to it.

Invariants:
    - Exactly one DatabaseSessionManager per Repositories bundle, passed explicitly
    - Logging configured once, here, from Settings
    - create_schema is a development/test convenience; production runs Alembic

Design Decisions:
    - Pool sizing only applies to server databases; SQLite uses the dialect's default pool
"""

import logging
from dataclasses import dataclass

from sqlalchemy.pool import StaticPool

from cms_core.config import Settings, get_settings
from cms_core.core.domain_types import Clock
from cms_core.core.visibility import utc_now
from cms_core.db.base import Base
from cms_core.infrastructure.database import DatabaseSessionManager
from cms_core.infrastructure.observability import setup_logging
from cms_core.repositories import (
    ArticleRepository, PortfolioItemRepository, TagRepository, CategoryRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class Repositories:
    """Everything the HTTP/service layer needs, sharing one store handle."""
    store: DatabaseSessionManager
    articles: ArticleRepository
    portfolio_items: PortfolioItemRepository
    tags: TagRepository
    categories: CategoryRepository


def build_store(settings: Settings) -> DatabaseSessionManager:
    if not settings.is_sqlite:
        return DatabaseSessionManager(
            settings.database_url,
            echo=settings.database_echo,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
    if ":memory:" in settings.database_url:
        # One shared connection, otherwise every checkout sees an empty database
        return DatabaseSessionManager(
            settings.database_url, echo=settings.database_echo, poolclass=StaticPool,
        )
    return DatabaseSessionManager(settings.database_url, echo=settings.database_echo)


def build_repositories(
    store: DatabaseSessionManager, clock: Clock = utc_now,
) -> Repositories:
    return Repositories(
        store=store,
        articles=ArticleRepository(store, clock),
        portfolio_items=PortfolioItemRepository(store, clock),
        tags=TagRepository(store),
        categories=CategoryRepository(store),
    )


async def create_schema(store: DatabaseSessionManager) -> None:
    async with store.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def bootstrap(settings: Settings | None = None) -> Repositories:
    """Configure logging, open the store and return the wired repositories."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)
    store = build_store(settings)
    if settings.app_env != "prod":
        await create_schema(store)
    logger.info(
        f"CMS repositories ready ({settings.app_env})",
        extra={"operation": "bootstrap"},
    )
    return build_repositories(store)
