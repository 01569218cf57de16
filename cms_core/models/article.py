"""Article ORM: blog posts, listed newest-published first."""

from sqlalchemy.orm import Mapped, relationship

from cms_core.db.base import Base
from cms_core.models.links import ArticleTagLink, ArticleCategoryLink
from cms_core.models.content import ContentColumns, live_unique_index
from cms_core.models.taxonomy import TagModel, CategoryModel


class ArticleModel(ContentColumns, Base):
    __tablename__ = "articles"
    __table_args__ = (
        live_unique_index("articles", "title"),
        live_unique_index("articles", "slug"),
    )

    # Read-only views over the link rows; writes go through AssociationReplacer
    tags: Mapped[list[TagModel]] = relationship(
        TagModel, secondary=ArticleTagLink.__table__,
        viewonly=True, lazy="selectin", order_by=TagModel.title,
    )
    categories: Mapped[list[CategoryModel]] = relationship(
        CategoryModel, secondary=ArticleCategoryLink.__table__,
        viewonly=True, lazy="selectin", order_by=CategoryModel.title,
    )
