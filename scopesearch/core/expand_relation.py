"""Relation Expander — EXISTS sub-conditions over related entities.

Invariants:
    - One EXISTS per declared relationship, always OR-ed into the parent tree,
      whatever the match mode: a related match alone qualifies the parent
    - Inside one relationship the first target seeds the sub-condition
      unconditionally; later targets follow the match mode
    - Undefined relationship names raise UnknownRelationError at first use
    - A relationship with no targets raises MalformedTargetError

Design Decisions:
    - rel.any() for collections, rel.has() for scalar relationships; SQLAlchemy
      correlates the subquery to the parent row
    - Dotted paths ("author.company") nest one EXISTS per hop
"""

from collections.abc import Sequence

from sqlalchemy import inspect
from sqlalchemy.orm import RelationshipProperty
from sqlalchemy.sql.elements import ColumnElement

from scopesearch.core.build_expression import build_expression
from scopesearch.core.compose_predicate import PredicateTree, add_condition, fold
from scopesearch.core.errors import ErrorContext, MalformedTargetError, UnknownRelationError
from scopesearch.core.search_types import MatchMode, SearchTarget


def resolve_relation_path(
    entity: type, relation_name: str,
) -> list[RelationshipProperty]:
    """Walk a (possibly dotted) relationship path from entity."""
    hops: list[RelationshipProperty] = []
    current = entity
    for segment in relation_name.split("."):
        rel = inspect(current).relationships.get(segment)
        if rel is None:
            raise UnknownRelationError(entity.__name__, relation_name)
        hops.append(rel)
        current = rel.mapper.class_
    return hops


def build_target_conditions(
    related: type,
    targets: Sequence[SearchTarget],
    term: str,
    mode: MatchMode,
) -> ColumnElement[bool]:
    """Compose the related entity's targets; the first one always seeds."""
    sub: PredicateTree = None
    for index, target in enumerate(targets):
        step_mode = MatchMode.ALL if index == 0 else mode
        sub = add_condition(sub, build_expression(related, target), term, step_mode)
    return sub


def _exists(rel: RelationshipProperty, criterion: ColumnElement[bool]) -> ColumnElement[bool]:
    attr = rel.class_attribute
    if rel.uselist:
        return attr.any(criterion)
    return attr.has(criterion)


def build_relation_condition(
    entity: type,
    relation_name: str,
    targets: Sequence[SearchTarget],
    term: str,
    mode: MatchMode,
) -> ColumnElement[bool]:
    """EXISTS(related row matching targets) for one declared relationship."""
    if not targets:
        raise MalformedTargetError(
            targets,
            ErrorContext(entity=entity.__name__, relation=relation_name),
        )
    hops = resolve_relation_path(entity, relation_name)
    condition = build_target_conditions(hops[-1].mapper.class_, targets, term, mode)
    for rel in reversed(hops):
        condition = _exists(rel, condition)
    return condition


def add_relation_condition(
    tree: PredicateTree,
    entity: type,
    relation_name: str,
    targets: Sequence[SearchTarget],
    term: str,
    mode: MatchMode,
) -> ColumnElement[bool]:
    """Fold one relationship's EXISTS into tree with OR."""
    return fold(
        tree,
        build_relation_condition(entity, relation_name, targets, term, mode),
        MatchMode.ANY,
    )
