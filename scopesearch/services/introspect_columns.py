"""Schema Introspector — memoized searchable column set per entity table.

Invariants:
    - Result cached under "searchable_columns_<table>" for the process lifetime
    - Cached tuple returned as-is: repeated calls are reference-identical even
      if the schema changes underneath, until forget_columns()
    - Listing failures propagate (UnknownTableError / DatabaseError)

Design Decisions:
    - Lister and cache injected: the process-wide state is the cache object
      the caller hands in, not an ambient global
"""

import logging

from scopesearch.core.errors import NotSearchableError
from scopesearch.core.resolve_columns import cache_key_for, resolve_searchable_columns
from scopesearch.core.search_protocols import ColumnCache, ColumnLister, SearchableDescriptor

logger = logging.getLogger(__name__)


def require_searchable(entity: type) -> SearchableDescriptor:
    """Reject entity types that do not implement the search capability."""
    for attr in ("search_config", "search_exclusions", "search_table_name"):
        if not callable(getattr(entity, attr, None)):
            raise NotSearchableError(getattr(entity, "__name__", repr(entity)))
    return entity


class SchemaIntrospector:
    """Resolves and memoizes the own columns an entity search compares."""

    def __init__(self, lister: ColumnLister, cache: ColumnCache):
        self.lister = lister
        self.cache = cache

    def resolve_columns(self, entity: type) -> tuple[str, ...]:
        descriptor = require_searchable(entity)
        table = descriptor.search_table_name()

        def compute() -> tuple[str, ...]:
            columns = resolve_searchable_columns(
                descriptor.search_config().columns,
                lambda: self.lister.list_columns(table),
                descriptor.search_exclusions(),
            )
            logger.debug(
                f"Resolved {len(columns)} searchable columns",
                extra={"entity": entity.__name__, "table": table},
            )
            return columns

        return self.cache.remember_forever(cache_key_for(table), compute)

    def forget_columns(self, entity: type) -> bool:
        """Invalidate the memoized column set after a runtime schema change."""
        table = require_searchable(entity).search_table_name()
        return self.cache.forget(cache_key_for(table))
