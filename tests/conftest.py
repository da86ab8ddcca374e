"""Root conftest — shared engine, session and searcher fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database with all test tables
    - The process Searcher singleton is reset after tests that install it

Design Decisions:
    - SQLite in-memory: fast, no external dependency
"""

import os

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from scopesearch.config import Settings
from scopesearch.infrastructure.column_cache import InMemoryColumnCache
from scopesearch.infrastructure.schema_listing import InspectorColumnLister
from scopesearch.services.introspect_columns import SchemaIntrospector
from scopesearch.services.search_orchestrator import Searcher, init_search, reset_search
from tests.models import Base

# Ensure tests never pick up a developer database
os.environ.setdefault("SCOPESEARCH_DATABASE_URL", "sqlite:///:memory:")


@pytest.fixture
def engine():
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    with Session(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def column_cache():
    return InMemoryColumnCache()


@pytest.fixture
def searcher(engine, column_cache):
    return Searcher(SchemaIntrospector(InspectorColumnLister(engine), column_cache))


@pytest.fixture
def process_searcher(engine):
    """Installs the module-level Searcher used by Model.search()."""
    searcher = init_search(
        settings=Settings(column_source="database"), engine=engine,
        configure_logging=False,
    )
    yield searcher
    reset_search()
