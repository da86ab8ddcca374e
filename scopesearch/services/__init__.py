"""Service Layer — wires the pure core to the injected schema lister and cache.

Invariants:
    - Services own no SQL text; every predicate is built by core/
"""
