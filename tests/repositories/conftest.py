"""Repository test fixtures: in-memory SQLite store and wired repositories.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Repositories share one store handle and a fixed clock (NOW)

Design Decisions:
    - StaticPool: one connection, so the schema created by create_schema is the
      one every repository session sees
"""

from datetime import datetime

import pytest
from sqlalchemy.pool import StaticPool

from cms_core.bootstrap import build_repositories, create_schema
from cms_core.core.records import Article, Category, Tag
from cms_core.infrastructure.database import DatabaseSessionManager

from tests.repositories.timeline import HOUR, NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
async def store():
    manager = DatabaseSessionManager(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool,
    )
    await create_schema(manager)
    yield manager
    await manager.dispose()


@pytest.fixture
def repos(store, clock):
    return build_repositories(store, clock)


@pytest.fixture
def articles(repos):
    return repos.articles


@pytest.fixture
def portfolio_items(repos):
    return repos.portfolio_items


@pytest.fixture
def tags(repos):
    return repos.tags


@pytest.fixture
def categories(repos):
    return repos.categories


@pytest.fixture
async def go_tag(tags):
    return await tags.create(Tag(title="Go"))


@pytest.fixture
async def backend_category(categories):
    return await categories.create(Category(title="Backend"))


@pytest.fixture
def make_article(articles):
    """Create an article with a slug derived from the title."""
    async def _make(title: str, posted_at: datetime | None = NOW - HOUR, **fields):
        return await articles.create(Article(
            title=title,
            slug=title.lower().replace(" ", "-"),
            posted_at=posted_at,
            **fields,
        ))
    return _make
