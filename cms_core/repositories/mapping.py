"""Row to Record mapping: turns loaded ORM rows into plain dataclasses."""

from cms_core.core.records import Category, ContentRecord, Tag
from cms_core.models import CategoryModel, TagModel
from cms_core.repositories.kinds import ContentKind


def to_tag(row: TagModel) -> Tag:
    return Tag(
        id=row.id, title=row.title,
        created_at=row.created_at, updated_at=row.updated_at,
    )


def to_category(row: CategoryModel) -> Category:
    return Category(
        id=row.id, title=row.title,
        created_at=row.created_at, updated_at=row.updated_at,
    )


def to_content_record(kind: ContentKind, row) -> ContentRecord:
    """Build the kind's record; tags/categories must already be loaded on the row."""
    values = {name: getattr(row, name) for name in kind.read_fields}
    return kind.record_type(
        **values,
        tags=[to_tag(t) for t in row.tags],
        categories=[to_category(c) for c in row.categories],
    )
