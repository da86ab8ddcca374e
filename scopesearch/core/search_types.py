"""Search Types — typed search targets and configuration values.

Invariants:
    - A SearchTarget is exactly one of Column(name) or Concat(names)
    - Concat always holds at least one field name
    - SearchableConfig is frozen: built once per entity class, never mutated
    - MatchMode.ANY is the default (OR among same-level sources)

Design Decisions:
    - Tagged variant over raw str | list: expression building dispatches on
      type, and no field name is ever interpolated into SQL text
    - str Enum for MatchMode: logs and error envelopes serialize it as-is
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from scopesearch.core.errors import MalformedTargetError


class MatchMode(str, Enum):
    """How same-level search sources combine."""
    ANY = "any"   # OR
    ALL = "all"   # AND

    @classmethod
    def from_flag(cls, match_all_columns: bool) -> "MatchMode":
        return cls.ALL if match_all_columns else cls.ANY


@dataclass(frozen=True)
class Column:
    """A single field compared on its own."""
    name: str


@dataclass(frozen=True)
class Concat:
    """An ordered group of fields compared as one space-joined string."""
    names: tuple[str, ...]


SearchTarget = Union[Column, Concat]


def parse_target(raw: str | Sequence[str] | Column | Concat) -> SearchTarget:
    """Turn a declared field name or field-name group into a SearchTarget."""
    if isinstance(raw, (Column, Concat)):
        return raw
    if isinstance(raw, str):
        if not raw:
            raise MalformedTargetError(raw)
        return Column(raw)
    if isinstance(raw, Iterable):
        names = tuple(raw)
        if not names or not all(isinstance(n, str) and n for n in names):
            raise MalformedTargetError(raw)
        return Concat(names)
    raise MalformedTargetError(raw)


def parse_group(raw: str | Sequence[str] | Concat) -> Concat:
    """Concatenation declarations are always groups, even with one field."""
    if isinstance(raw, str):
        raw = (raw,)
    target = parse_target(raw)
    if isinstance(target, Column):
        return Concat((target.name,))
    return target


def _as_list(raw):
    return (raw,) if isinstance(raw, str) else raw


def parse_names(raw: str | Iterable[str] | None) -> tuple[str, ...]:
    """A field-name list declaration; a bare string is one name, not its letters."""
    if raw is None:
        return ()
    raw = _as_list(raw)
    if not isinstance(raw, Iterable):
        raise MalformedTargetError(raw)
    names = tuple(raw)
    if not all(isinstance(n, str) and n for n in names):
        raise MalformedTargetError(raw)
    return names


@dataclass(frozen=True)
class SearchableConfig:
    """Static search declaration of one entity."""
    columns: tuple[str, ...] | None = None
    concatenations: tuple[Concat, ...] = ()
    relations: tuple[tuple[str, tuple[SearchTarget, ...]], ...] = ()
    hidden: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_declarations(
        cls,
        columns: Iterable[str] | None = None,
        concatenations: Iterable[Sequence[str]] | None = None,
        relations: Mapping[str, Iterable[str | Sequence[str]]] | None = None,
        hidden: Iterable[str] | None = None,
    ) -> "SearchableConfig":
        """Normalize class-level declarations; malformed entries raise here."""
        return cls(
            columns=parse_names(columns) or None,
            concatenations=tuple(parse_group(g) for g in _as_list(concatenations or ())),
            relations=tuple(
                (name, tuple(parse_target(t) for t in _as_list(targets)))
                for name, targets in (relations or {}).items()
            ),
            hidden=frozenset(parse_names(hidden)),
        )
