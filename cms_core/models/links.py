"""Link ORM: explicit join rows between content and taxonomy.

Invariants:
    - Composite primary key (content_id, target id): a pair is linked at most once
    - Rows are written only by AssociationReplacer (repositories/associations.py)
    - Deleting a content or taxonomy row cascades to its links at the store level
"""

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from cms_core.db.base import Base


class ArticleTagLink(Base):
    __tablename__ = "article_tags"

    content_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True,
    )
    tag_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True,
    )


class ArticleCategoryLink(Base):
    __tablename__ = "article_categories"

    content_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True,
    )
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True,
    )


class PortfolioItemTagLink(Base):
    __tablename__ = "portfolio_item_tags"

    content_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("portfolio_items.id", ondelete="CASCADE"), primary_key=True,
    )
    tag_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True,
    )


class PortfolioItemCategoryLink(Base):
    __tablename__ = "portfolio_item_categories"

    content_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("portfolio_items.id", ondelete="CASCADE"), primary_key=True,
    )
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True,
    )
