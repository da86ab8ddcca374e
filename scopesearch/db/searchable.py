"""Searchable Mixin — the search capability an ORM model declares on its class.

Invariants:
    - Declarations are class state; nothing here needs an instance
    - __searchable__ unset or empty -> columns auto-detected from the schema
    - Auto-detection excludes primary key columns, the created/updated
      timestamp columns, and every name in __hidden__
    - __created_at_column__ / __updated_at_column__ set to None drop the
      corresponding exclusion

Design Decisions:
    - Dunder class attributes, like other declarative options: the
      declarative scan ignores them, so they never become mapped attributes
    - Model.search() delegates to the process Searcher (get_searcher())

Usage:
    class Widget(SearchableMixin, Base):
        __tablename__ = "widgets"
        __searchable_concat__ = [["first_name", "last_name"]]
        __searchable_relations__ = {"tags": ["name"]}
        __hidden__ = ["api_token"]

    stmt = Widget.search(select(Widget), "office")
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import ClassVar

from sqlalchemy import Select, inspect

from scopesearch.core.search_types import SearchableConfig, parse_names
from scopesearch.services.search_orchestrator import get_searcher


class SearchableMixin:
    """Mixin implementing SearchableDescriptor for declarative models."""

    __searchable__: ClassVar[str | Sequence[str] | None] = None
    __searchable_concat__: ClassVar[Sequence[Sequence[str]]] = ()
    __searchable_relations__: ClassVar[
        Mapping[str, Sequence[str | Sequence[str]]]
    ] = {}
    __hidden__: ClassVar[str | Iterable[str]] = ()
    __created_at_column__: ClassVar[str | None] = "created_at"
    __updated_at_column__: ClassVar[str | None] = "updated_at"

    @classmethod
    def searchable_columns_declared(cls) -> tuple[str, ...] | None:
        return parse_names(cls.__searchable__) or None

    @classmethod
    def searchable_concatenations(cls) -> Sequence[Sequence[str]]:
        return cls.__searchable_concat__ or ()

    @classmethod
    def searchable_relations(cls) -> Mapping[str, Sequence[str | Sequence[str]]]:
        return cls.__searchable_relations__ or {}

    @classmethod
    def search_config(cls) -> SearchableConfig:
        return SearchableConfig.from_declarations(
            columns=cls.searchable_columns_declared(),
            concatenations=cls.searchable_concatenations(),
            relations=cls.searchable_relations(),
            hidden=cls.__hidden__,
        )

    @classmethod
    def search_identity_keys(cls) -> tuple[str, ...]:
        return tuple(c.name for c in inspect(cls).primary_key)

    @classmethod
    def search_exclusions(cls) -> frozenset[str]:
        """Column names auto-detection must skip."""
        timestamps = (cls.__created_at_column__, cls.__updated_at_column__)
        return frozenset(
            [*cls.search_identity_keys(), *(t for t in timestamps if t)]
        ) | cls.search_config().hidden

    @classmethod
    def search_table_name(cls) -> str:
        return inspect(cls).local_table.fullname

    @classmethod
    def search(
        cls, statement: Select, term: str | None, match_all_columns: bool = False,
    ) -> Select:
        """Attach the search filter for this model to statement."""
        return get_searcher().search(
            statement, term, match_all_columns, entity=cls,
        )
