"""Repository Layer: stateless persistence operations over plain data records.

Invariants:
    - Every repository takes the store handle (DatabaseSessionManager) in its constructor
    - Every read applies the tombstone predicate explicitly; only
      get_by_id_including_deleted skips it
    - Records in, records out: ORM rows never leave this package
"""

from cms_core.repositories.content import (  # noqa: F401
    ContentRepository, ArticleRepository, PortfolioItemRepository,
)
from cms_core.repositories.taxonomy import (  # noqa: F401
    TaxonomyRepository, TagRepository, CategoryRepository,
)
