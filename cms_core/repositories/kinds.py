"""Content Kinds: the per-kind wiring one ContentRepository is parameterized by.

Invariants:
    - Each kind names its ORM model, record type, link tables and list ordering
    - mutable_fields are the columns update() replaces (never posted_at, never links)
"""

from dataclasses import dataclass
from typing import Any, Mapping

from cms_core.core.domain_types import AssociationKind
from cms_core.core.records import Article, ContentRecord, PortfolioItem
from cms_core.models import (
    ArticleModel, PortfolioItemModel, TagModel, CategoryModel,
    ArticleTagLink, ArticleCategoryLink,
    PortfolioItemTagLink, PortfolioItemCategoryLink,
)

BASE_MUTABLE_FIELDS = ("title", "slug", "short_description", "body")
READ_FIELDS = (
    "id", "title", "slug", "short_description", "body",
    "posted_at", "created_at", "updated_at", "deleted_at",
)


@dataclass(frozen=True)
class LinkSpec:
    """One join table between a content kind and a taxonomy table."""
    model: type
    target_column: str
    target_model: type
    target_label: str

    @property
    def content_attr(self):
        return self.model.content_id

    @property
    def target_attr(self):
        return getattr(self.model, self.target_column)


@dataclass(frozen=True)
class ContentKind:
    label: str
    model: Any
    record_type: type[ContentRecord]
    links: Mapping[AssociationKind, LinkSpec]
    list_order: tuple
    extra_fields: tuple[str, ...] = ()

    @property
    def mutable_fields(self) -> tuple[str, ...]:
        return BASE_MUTABLE_FIELDS + self.extra_fields

    @property
    def read_fields(self) -> tuple[str, ...]:
        return READ_FIELDS + self.extra_fields


ARTICLE = ContentKind(
    label="Article",
    model=ArticleModel,
    record_type=Article,
    links={
        AssociationKind.TAG: LinkSpec(ArticleTagLink, "tag_id", TagModel, "Tag"),
        AssociationKind.CATEGORY: LinkSpec(
            ArticleCategoryLink, "category_id", CategoryModel, "Category",
        ),
    },
    list_order=(ArticleModel.posted_at.desc().nulls_last(), ArticleModel.id.desc()),
)

PORTFOLIO_ITEM = ContentKind(
    label="PortfolioItem",
    model=PortfolioItemModel,
    record_type=PortfolioItem,
    links={
        AssociationKind.TAG: LinkSpec(PortfolioItemTagLink, "tag_id", TagModel, "Tag"),
        AssociationKind.CATEGORY: LinkSpec(
            PortfolioItemCategoryLink, "category_id", CategoryModel, "Category",
        ),
    },
    list_order=(PortfolioItemModel.created_at.desc(), PortfolioItemModel.id.desc()),
    extra_fields=("demo_url", "repo_url"),
)
