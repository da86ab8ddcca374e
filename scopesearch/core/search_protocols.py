"""Boundary Protocols — contracts between the pure core and the shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Schema listing and memoization accessed through Protocol types only
    - Implementations provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, entity classes and test fakes
      satisfy the contracts without inheriting from anything
    - SearchableDescriptor methods are classmethods on the entity type:
      reading declarations never requires an instance
"""

from collections.abc import Callable
from typing import Protocol, TypeVar

from scopesearch.core.search_types import SearchableConfig

T = TypeVar("T")


class SearchableDescriptor(Protocol):
    """Capability contract every searchable entity type implements."""

    @classmethod
    def search_config(cls) -> SearchableConfig: ...

    @classmethod
    def search_exclusions(cls) -> frozenset[str]: ...

    @classmethod
    def search_table_name(cls) -> str: ...


class ColumnLister(Protocol):
    """Lists every column name of a table, in table order.

    Raises UnknownTableError when the table does not exist.
    """
    def list_columns(self, table_name: str) -> list[str]: ...


class ColumnCache(Protocol):
    """Get-or-compute-and-store-forever store keyed by string."""
    def remember_forever(self, key: str, compute: Callable[[], T]) -> T: ...
    def forget(self, key: str) -> bool: ...
    def flush(self) -> None: ...
