"""scopesearch — free-text search filters for SQLAlchemy models.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Explicit imports only, no star exports: callers import from
      scopesearch.services.search_orchestrator and scopesearch.db.searchable
"""
