"""Initial schema: content kinds, taxonomy and link tables.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LIVE = sa.text("deleted_at IS NULL")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def _content_table(name: str, *extra: sa.Column) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("short_description", sa.String(500), nullable=False, server_default=""),
        sa.Column("body", sa.Text, nullable=False, server_default=""),
        *extra,
        *_timestamps(),
        sa.Column("posted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(f"ix_{name}_posted_at", name, ["posted_at"])
    op.create_index(f"ix_{name}_deleted_at", name, ["deleted_at"])
    for column in ("title", "slug"):
        op.create_index(
            f"uq_{name}_{column}_live", name, [column], unique=True,
            sqlite_where=LIVE, postgresql_where=LIVE,
        )


def _link_table(name: str, content_table: str, target_column: str, target_table: str) -> None:
    op.create_table(
        name,
        sa.Column(
            "content_id", sa.Integer,
            sa.ForeignKey(f"{content_table}.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column(
            target_column, sa.Integer,
            sa.ForeignKey(f"{target_table}.id", ondelete="CASCADE"), primary_key=True,
        ),
    )


def upgrade() -> None:
    for taxonomy in ("tags", "categories"):
        op.create_table(
            taxonomy,
            sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
            sa.Column("title", sa.String(255), nullable=False, unique=True),
            *_timestamps(),
        )

    _content_table("articles")
    _content_table(
        "portfolio_items",
        sa.Column("demo_url", sa.String(2000), nullable=False, server_default=""),
        sa.Column("repo_url", sa.String(2000), nullable=False, server_default=""),
    )

    _link_table("article_tags", "articles", "tag_id", "tags")
    _link_table("article_categories", "articles", "category_id", "categories")
    _link_table("portfolio_item_tags", "portfolio_items", "tag_id", "tags")
    _link_table("portfolio_item_categories", "portfolio_items", "category_id", "categories")


def downgrade() -> None:
    for name in (
        "portfolio_item_categories", "portfolio_item_tags",
        "article_categories", "article_tags",
        "portfolio_items", "articles", "categories", "tags",
    ):
        op.drop_table(name)
