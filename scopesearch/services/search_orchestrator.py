"""Search Orchestrator — one free-text term into one grouped filter on a Select.

Invariants:
    - None or "" term -> the statement is returned unchanged (same object)
    - Sources folded in order: own columns -> concatenations -> relations
    - Own columns and concatenations combine per match_all_columns;
      relation EXISTS clauses always OR into the same group
    - The group is attached with Select.where(), so it ANDs with any filter,
      ordering or pagination the caller already put on the statement
    - An entity that declares nothing searchable leaves the statement as-is

Design Decisions:
    - Searcher holds the injected SchemaIntrospector; the module-level
      singleton (init_search / get_searcher) mirrors a DB session manager:
      built once at startup, never on import; init_search also installs
      the log handler from settings and reset_search removes it
"""

import logging

from sqlalchemy import MetaData, Select, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.sql.elements import ColumnElement

from scopesearch.config import Settings, get_settings
from scopesearch.core.build_expression import build_expression
from scopesearch.core.compose_predicate import PredicateTree, add_condition
from scopesearch.core.errors import NoStatementEntityError
from scopesearch.core.expand_relation import add_relation_condition
from scopesearch.core.search_protocols import ColumnCache, ColumnLister
from scopesearch.core.search_types import Column, MatchMode
from scopesearch.infrastructure.column_cache import InMemoryColumnCache
from scopesearch.infrastructure.observability import setup_logging
from scopesearch.infrastructure.schema_listing import (
    InspectorColumnLister, MetadataColumnLister,
)
from scopesearch.services.introspect_columns import SchemaIntrospector, require_searchable

logger = logging.getLogger(__name__)


def statement_entity(statement: Select) -> type:
    """The first ORM entity a Select statement returns."""
    descriptions = statement.column_descriptions
    entity = descriptions[0].get("entity") if descriptions else None
    if entity is None:
        raise NoStatementEntityError([d.get("name") for d in descriptions])
    return entity


class Searcher:
    """Builds and attaches search filters for searchable entities."""

    def __init__(self, introspector: SchemaIntrospector):
        self.introspector = introspector

    def build_filter(
        self, entity: type, term: str | None, match_all_columns: bool = False,
    ) -> ColumnElement[bool] | None:
        """The grouped search predicate, or None when there is nothing to filter."""
        if not term:
            return None
        descriptor = require_searchable(entity)
        config = descriptor.search_config()
        mode = MatchMode.from_flag(match_all_columns)

        tree: PredicateTree = None
        for name in self.introspector.resolve_columns(entity):
            tree = add_condition(tree, build_expression(entity, Column(name)), term, mode)
        for group in config.concatenations:
            tree = add_condition(tree, build_expression(entity, group), term, mode)
        for relation_name, targets in config.relations:
            tree = add_relation_condition(tree, entity, relation_name, targets, term, mode)

        if tree is None:
            logger.warning(
                "Entity declares no searchable columns, concatenations or relations",
                extra={"entity": entity.__name__},
            )
            return None
        logger.debug(
            "Built search filter",
            extra={"entity": entity.__name__, "match_mode": mode.value},
        )
        return tree.self_group()

    def search(
        self,
        statement: Select,
        term: str | None,
        match_all_columns: bool = False,
        entity: type | None = None,
    ) -> Select:
        """Attach the search filter to statement; entity defaults to its first entity."""
        if not term:
            return statement
        if entity is None:
            entity = statement_entity(statement)
        predicate = self.build_filter(entity, term, match_all_columns)
        if predicate is None:
            return statement
        return statement.where(predicate)

    def forget_columns(self, entity: type) -> bool:
        return self.introspector.forget_columns(entity)


# Singleton (initialized on startup)
_searcher: Searcher | None = None
_log_handler: logging.Handler | None = None


def build_searcher(
    settings: Settings | None = None,
    engine: Engine | None = None,
    metadata: MetaData | None = None,
    cache: ColumnCache | None = None,
    lister: ColumnLister | None = None,
) -> Searcher:
    """Wire a Searcher from settings; explicit collaborators take precedence."""
    settings = settings or get_settings()
    if lister is None:
        if settings.column_source == "metadata":
            if metadata is None:
                raise ValueError("column_source 'metadata' requires metadata")
            lister = MetadataColumnLister(metadata)
        else:
            if engine is None:
                engine = create_engine(
                    settings.database_url,
                    echo=settings.database_echo,
                    pool_pre_ping=settings.database_pool_pre_ping,
                )
            lister = InspectorColumnLister(engine)
    return Searcher(SchemaIntrospector(lister, cache or InMemoryColumnCache()))


def init_search(
    settings: Settings | None = None, configure_logging: bool = True, **kwargs,
) -> Searcher:
    """Startup hook: logging from settings, then the process Searcher."""
    global _searcher, _log_handler
    settings = settings or get_settings()
    if configure_logging:
        if _log_handler is not None:
            logging.root.removeHandler(_log_handler)
        _log_handler = setup_logging(settings.log_level, settings.log_format)
    _searcher = build_searcher(settings=settings, **kwargs)
    return _searcher


def reset_search() -> None:
    global _searcher, _log_handler
    _searcher = None
    if _log_handler is not None:
        logging.root.removeHandler(_log_handler)
        _log_handler = None


def get_searcher() -> Searcher:
    if _searcher is None:
        raise RuntimeError("Search not initialized (call init_search on startup)")
    return _searcher


def search(
    statement: Select, term: str | None, match_all_columns: bool = False,
) -> Select:
    """Attach a search filter for the statement's entity using the process Searcher."""
    return get_searcher().search(statement, term, match_all_columns)
