"""Infrastructure Layer — schema listing, caching, logging.

Invariants:
    - Infrastructure never imports from services/
    - All SQLAlchemy failures mapped to core/errors.py types at this boundary
"""
