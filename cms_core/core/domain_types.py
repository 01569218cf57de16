"""Domain Types: identity aliases and enums shared by records and repositories.

Invariants:
    - ContentId, TagId, CategoryId wrap store-assigned integers (immutable once assigned)
    - NO_FILTER (0) is a sentinel, never a real id
"""

from datetime import datetime
from enum import Enum
from typing import Callable, NewType


# ─── Identity Types ──────────────────────────────────────────────

ContentId = NewType("ContentId", int)
TagId = NewType("TagId", int)
CategoryId = NewType("CategoryId", int)

NO_FILTER = 0

Clock = Callable[[], datetime]


# ─── Enums ───────────────────────────────────────────────────────

class AssociationKind(str, Enum):
    """Many-to-many dimensions a content row owns links for."""
    TAG = "tag"
    CATEGORY = "category"
