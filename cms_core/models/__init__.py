"""ORM Models: SQLAlchemy declarative models for content, taxonomy and link rows.

Invariants:
    - All models inherit from Base (db/base.py)
    - Content rows own their link rows; tags and categories are only referenced

Design Decisions:
    - All models imported here so string-based relationship() and secondary=
      references resolve before any query runs
"""

from cms_core.models.taxonomy import TagModel, CategoryModel  # noqa: F401
from cms_core.models.links import (  # noqa: F401
    ArticleTagLink, ArticleCategoryLink,
    PortfolioItemTagLink, PortfolioItemCategoryLink,
)
from cms_core.models.article import ArticleModel  # noqa: F401
from cms_core.models.portfolio_item import PortfolioItemModel  # noqa: F401
