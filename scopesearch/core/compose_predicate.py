"""Predicate Composer — folds one "contains" comparison into a boolean tree.

Invariants:
    - Pure: returns a new clause, the incoming tree is never modified
    - MatchMode.ALL conjoins (narrows), MatchMode.ANY disjoins (widens)
    - The first condition seeds an empty tree whatever the mode
    - Term wildcards (% and _) are escaped: matching is plain substring containment
    - The term pattern goes through the database UPPER(), like the expression

Design Decisions:
    - Left fold with and_/or_: ((a AND b) OR c) reproduces SQL precedence for
      the sequential where/or-where chains this replaces
    - Escaping happens before folding; UPPER() leaves '%', '_' and '/' alone
"""

from sqlalchemy import and_, or_
from sqlalchemy.sql.elements import ColumnElement

from scopesearch.core.build_expression import fold_value
from scopesearch.core.search_types import MatchMode

LIKE_ESCAPE = "/"

PredicateTree = ColumnElement[bool] | None


def escape_like(term: str) -> str:
    """Make LIKE wildcards in term match literally under ESCAPE '/'."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def contains(expression: ColumnElement[str], term: str) -> ColumnElement[bool]:
    """expression LIKE UPPER('%term%') with LIKE wildcards in term matched literally."""
    pattern = fold_value(f"%{escape_like(term)}%")
    return expression.like(pattern, escape=LIKE_ESCAPE)


def fold(
    tree: PredicateTree, condition: ColumnElement[bool], mode: MatchMode,
) -> ColumnElement[bool]:
    if tree is None:
        return condition
    if mode is MatchMode.ALL:
        return and_(tree, condition)
    return or_(tree, condition)


def add_condition(
    tree: PredicateTree,
    expression: ColumnElement[str],
    term: str,
    mode: MatchMode,
) -> ColumnElement[bool]:
    """Fold `expression contains term` into tree using mode."""
    return fold(tree, contains(expression, term), mode)
