"""Searchable Mixin — class-level declarations read without an instance.

Tests cover:
    - Exclusions: primary key, timestamps, hidden fields
    - A bare-string __hidden__ hides that one column
    - Timestamp exclusions can be switched off
    - Declarations normalized into SearchableConfig
    - Defaults when nothing is declared
    - Table name and identity keys from the mapper
"""

from scopesearch.core.search_types import Column, Concat
from tests.models import Article, Gadget, Marker, Memo, Note, Widget


def test_widget_exclusions():
    assert Widget.search_exclusions() == frozenset(
        {"id", "created_at", "updated_at", "api_token"},
    )


def test_disabled_timestamps_leave_only_identity_key():
    assert Article.search_exclusions() == frozenset({"id"})


def test_bare_string_hidden_is_one_column_name():
    assert Memo.search_config().hidden == frozenset({"body"})
    assert Memo.search_exclusions() == frozenset({"id", "body"})


def test_widget_config_from_declarations():
    config = Widget.search_config()
    assert config.columns is None
    assert config.concatenations == (Concat(("first_name", "last_name")),)
    assert config.relations == (
        ("tags", (Column("name"),)),
        ("category", (Column("name"), Concat(("code", "name")))),
    )
    assert config.hidden == frozenset({"api_token"})


def test_explicit_columns_declared():
    assert Gadget.searchable_columns_declared() == ("id", "label", "serial")
    assert Gadget.search_config().columns == ("id", "label", "serial")


def test_defaults_when_nothing_declared():
    assert Note.searchable_columns_declared() is None
    assert Note.searchable_concatenations() == ()
    assert Note.searchable_relations() == {}
    assert Marker.search_config().relations == ()


def test_table_name_and_identity_keys():
    assert Widget.search_table_name() == "widgets"
    assert Widget.search_identity_keys() == ("id",)
