"""Query Predicates: tombstone and visibility rules expressed as SQL.

Invariants:
    - live_clause excludes tombstoned rows; every default read includes it
    - visible_clause mirrors core.visibility.is_visible so counts and offsets
      are computed over the filtered set, never post-filtered
"""

from datetime import datetime

from sqlalchemy import and_, true
from sqlalchemy.sql.elements import ColumnElement


def live_clause(model) -> ColumnElement[bool]:
    return model.deleted_at.is_(None)


def visible_clause(model, now: datetime, only_published: bool) -> ColumnElement[bool]:
    if not only_published:
        return true()
    return and_(model.posted_at.is_not(None), model.posted_at <= now)
