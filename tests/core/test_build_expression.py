"""Expression Builder — case-folded column and concatenation expressions.

Tests cover:
    - Single string column wrapped in upper()
    - Non-string column cast to text before folding
    - Concatenation coalesces NULLs, joins with one space, keeps order
    - Concatenation uses the dialect's concat operator (|| / concat())
    - Unmapped field name raises UnknownColumnError
    - Bound values fold through the same upper() as columns

Design Decisions:
    - Expressions compiled with literal_binds so assertions read as SQL
"""

import pytest
from sqlalchemy.dialects import mysql, postgresql, sqlite

from scopesearch.core.build_expression import (
    build_expression, column_ref, fold_value,
)
from scopesearch.core.errors import UnknownColumnError
from scopesearch.core.search_types import Column, Concat
from tests.models import Widget


def _sql(expr, dialect=None) -> str:
    return str(expr.compile(
        dialect=dialect or sqlite.dialect(),
        compile_kwargs={"literal_binds": True},
    ))


def test_single_column_is_upper_folded():
    assert _sql(build_expression(Widget, Column("location"))) == "upper(widgets.location)"


def test_non_string_column_is_cast_before_folding():
    sql = _sql(build_expression(Widget, Column("category_id")))
    assert sql.startswith("upper(CAST(widgets.category_id AS")


def test_concatenation_coalesces_and_separates_with_space():
    sql = _sql(build_expression(Widget, Concat(("first_name", "last_name"))))
    assert sql.startswith("upper(")
    assert "coalesce(widgets.first_name, '')" in sql
    assert "coalesce(widgets.last_name, '')" in sql
    assert "' '" in sql
    assert "||" in sql


def test_concatenation_preserves_declared_order():
    sql = _sql(build_expression(Widget, Concat(("last_name", "first_name"))))
    assert sql.index("widgets.last_name") < sql.index("widgets.first_name")


def test_concatenation_renders_per_dialect():
    group = Concat(("first_name", "last_name"))
    assert "||" in _sql(build_expression(Widget, group), postgresql.dialect())
    assert "concat(" in _sql(build_expression(Widget, group), mysql.dialect())


def test_single_field_concatenation_has_no_separator():
    sql = _sql(build_expression(Widget, Concat(("first_name",))))
    assert sql == "upper(coalesce(widgets.first_name, ''))"


def test_unknown_column_raises():
    with pytest.raises(UnknownColumnError) as exc_info:
        build_expression(Widget, Column("nope"))
    assert exc_info.value.code == "UNKNOWN_COLUMN"
    assert exc_info.value.context.entity == "Widget"


def test_column_ref_resolves_mapped_column():
    assert column_ref(Widget, "content") is Widget.__table__.c.content


def test_fold_value_uses_database_upper():
    sql = _sql(fold_value("Café"))
    assert sql == "upper('Café')"
