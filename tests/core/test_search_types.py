"""Search Types — parsing declared targets into the Column | Concat variant.

Tests cover:
    - Field name parses to Column
    - Field-name group parses to Concat, order preserved
    - Empty name / empty group / non-string member rejected
    - Concatenation declarations are always groups
    - MatchMode maps the boolean flag
    - SearchableConfig normalizes declarations; empty columns fall back to None
    - Bare-string name lists are one name, never split into letters
"""

import pytest

from scopesearch.core.errors import MalformedTargetError
from scopesearch.core.search_types import (
    Column, Concat, MatchMode, SearchableConfig, parse_group, parse_names, parse_target,
)


def test_field_name_parses_to_column():
    assert parse_target("location") == Column("location")


def test_field_group_parses_to_concat_in_order():
    assert parse_target(["last_name", "first_name"]) == Concat(("last_name", "first_name"))


def test_parse_target_passes_typed_targets_through():
    target = Concat(("a", "b"))
    assert parse_target(target) is target


@pytest.mark.parametrize("raw", ["", [], ["name", ""], ["name", 3], 42])
def test_malformed_targets_are_rejected(raw):
    with pytest.raises(MalformedTargetError):
        parse_target(raw)


def test_single_name_concatenation_is_still_a_group():
    assert parse_group("first_name") == Concat(("first_name",))
    assert parse_group(["first_name"]) == Concat(("first_name",))


def test_match_mode_from_flag():
    assert MatchMode.from_flag(True) is MatchMode.ALL
    assert MatchMode.from_flag(False) is MatchMode.ANY


def test_config_from_declarations_normalizes_every_kind():
    config = SearchableConfig.from_declarations(
        columns=["location"],
        concatenations=[["first_name", "last_name"]],
        relations={"tags": ["name", ["code", "name"]]},
        hidden=["api_token"],
    )
    assert config.columns == ("location",)
    assert config.concatenations == (Concat(("first_name", "last_name")),)
    assert config.relations == (
        ("tags", (Column("name"), Concat(("code", "name")))),
    )
    assert config.hidden == frozenset({"api_token"})


def test_empty_column_declaration_means_auto_detect():
    assert SearchableConfig.from_declarations(columns=[]).columns is None
    assert SearchableConfig.from_declarations().columns is None


def test_relation_order_is_declaration_order():
    config = SearchableConfig.from_declarations(
        relations={"tags": ["name"], "category": ["name"]},
    )
    assert [name for name, _ in config.relations] == ["tags", "category"]


def test_parse_names_keeps_bare_string_whole():
    assert parse_names("title") == ("title",)
    assert parse_names(["title", "body"]) == ("title", "body")
    assert parse_names(None) == ()


@pytest.mark.parametrize("raw", [[""], ["title", 3], 3])
def test_parse_names_rejects_bad_members(raw):
    with pytest.raises(MalformedTargetError):
        parse_names(raw)


def test_config_accepts_bare_string_declarations():
    config = SearchableConfig.from_declarations(
        columns="title", relations={"tags": "name"}, hidden="api_token",
    )
    assert config.columns == ("title",)
    assert config.relations == (("tags", (Column("name"),)),)
    assert config.hidden == frozenset({"api_token"})
