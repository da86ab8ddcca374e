"""Searchable Column Rule — which own columns a search compares against.

Invariants:
    - Pure function: no IO; the column listing is passed in lazily
    - Explicit declarations are returned verbatim, never filtered
    - Auto-detected columns keep table order, minus every excluded name

Design Decisions:
    - listing passed as a callable: explicit declarations never touch the schema
"""

from collections.abc import Callable, Iterable


def resolve_searchable_columns(
    declared: tuple[str, ...] | None,
    list_columns: Callable[[], Iterable[str]],
    exclusions: frozenset[str],
) -> tuple[str, ...]:
    if declared:
        return tuple(declared)
    return tuple(c for c in list_columns() if c not in exclusions)


def cache_key_for(table_name: str) -> str:
    return f"searchable_columns_{table_name}"
