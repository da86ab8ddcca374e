"""Core Layer — pure predicate construction, no IO, no engine, no session.

Invariants:
    - No module in core/ imports from services/, infrastructure/, or db/
    - Functions build SQLAlchemy expression objects only; nothing is executed

Design Decisions:
    - Functional core separated from imperative shell: schema listing and
      caching live in the shell and are injected through core/search_protocols.py
"""
