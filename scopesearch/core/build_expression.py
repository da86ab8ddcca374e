"""Expression Builder — one case-folded scalar expression per search target.

Invariants:
    - Column(name)  -> UPPER(col)
    - Concat(names) -> UPPER(COALESCE(a, '') || ' ' || COALESCE(b, '') ...)
    - The search term is folded by the same database UPPER() as the column,
      so both sides agree on non-ASCII letters whatever the dialect does
    - Non-string columns are cast to text before folding
    - Field names resolve against mapped columns only; unknown names raise

Design Decisions:
    - Concatenation built with the dialect's string concat operator (String
      "+"), so SQLite, PostgreSQL and MySQL all render it natively
    - NULL fields contribute an empty string, order is preserved, and the
      separator is always a single space
"""

from functools import reduce

from sqlalchemy import Text, String, cast, func, inspect, literal
from sqlalchemy.sql.elements import ColumnElement

from scopesearch.core.errors import UnknownColumnError
from scopesearch.core.search_types import Column, SearchTarget

CONCAT_SEPARATOR = " "


def _fold(expr: ColumnElement) -> ColumnElement[str]:
    return func.upper(expr, type_=Text)


def fold_value(value: str) -> ColumnElement[str]:
    """Bind value and fold it the same way build_expression folds columns."""
    return _fold(literal(value, Text))


def _mapped_columns(entity: type) -> dict[str, ColumnElement]:
    mapper = inspect(entity)
    return {c.name: c for c in mapper.columns if getattr(c, "name", None)}


def column_ref(entity: type, name: str) -> ColumnElement:
    """Resolve a field name to the entity's mapped column."""
    col = _mapped_columns(entity).get(name)
    if col is None:
        raise UnknownColumnError(entity.__name__, name)
    return col


def _as_text(col: ColumnElement) -> ColumnElement[str]:
    if isinstance(col.type, String):
        return col
    return cast(col, Text)


def build_expression(entity: type, target: SearchTarget) -> ColumnElement[str]:
    """Build the normalized expression for one column or concatenation."""
    if isinstance(target, Column):
        return _fold(_as_text(column_ref(entity, target.name)))

    parts = [
        func.coalesce(_as_text(column_ref(entity, name)), "", type_=Text)
        for name in target.names
    ]
    joined = reduce(lambda acc, part: acc + CONCAT_SEPARATOR + part, parts)
    return _fold(joined)
