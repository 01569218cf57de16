"""PortfolioItem ORM: project showcase entries, listed newest-created first.

Invariants:
    - Same content schema as Article plus demo_url and repo_url
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cms_core.db.base import Base
from cms_core.models.links import PortfolioItemTagLink, PortfolioItemCategoryLink
from cms_core.models.content import ContentColumns, live_unique_index
from cms_core.models.taxonomy import TagModel, CategoryModel


class PortfolioItemModel(ContentColumns, Base):
    __tablename__ = "portfolio_items"
    __table_args__ = (
        live_unique_index("portfolio_items", "title"),
        live_unique_index("portfolio_items", "slug"),
    )

    demo_url: Mapped[str] = mapped_column(String(2000), nullable=False, default="")
    repo_url: Mapped[str] = mapped_column(String(2000), nullable=False, default="")

    tags: Mapped[list[TagModel]] = relationship(
        TagModel, secondary=PortfolioItemTagLink.__table__,
        viewonly=True, lazy="selectin", order_by=TagModel.title,
    )
    categories: Mapped[list[CategoryModel]] = relationship(
        CategoryModel, secondary=PortfolioItemCategoryLink.__table__,
        viewonly=True, lazy="selectin", order_by=CategoryModel.title,
    )
