"""Tests for colltree.render."""

from __future__ import annotations

from typing import Any

from colltree.models import Collection, CollectionInfo, CollectionListItem, ItemTree
from colltree.parser.decoder import parse
from colltree.parser.extractor import extract_collection
from colltree.render import (
    TABLE_HEADERS,
    describe_collection,
    format_script_suffix,
    info_table,
    list_table,
    render_tree,
)


class TestFormatScriptSuffix:
    def test_no_events(self) -> None:
        assert format_script_suffix(()) == ""

    def test_single_phase(self) -> None:
        assert format_script_suffix(("test",)) == " (scripts: test)"

    def test_sorted_and_deduplicated(self) -> None:
        assert format_script_suffix(("test", "prerequest", "test")) == " (scripts: prerequest,test)"


class TestRenderTree:
    """Indented text form of the item tree."""

    def test_auth_login_ping(self) -> None:
        tree = parse([
            {"name": "Auth", "item": [{"name": "Login", "event": [{"listen": "test"}]}]},
            {"name": "Ping"},
        ])
        assert render_tree(tree) == "Auth\n  Login (scripts: test)\nPing"

    def test_folder_scripts_shown(self, nested_collection_raw: dict[str, Any]) -> None:
        tree = parse(nested_collection_raw["collection"]["item"])
        assert render_tree(tree).splitlines() == [
            "Orders (scripts: prerequest,test)",
            "  List orders",
            "  Line items",
            "    Add line item (scripts: prerequest)",
            "  Archive",
            "Health",
        ]

    def test_custom_indent(self) -> None:
        tree = parse([{"name": "A", "item": [{"name": "B", "item": [{"name": "C"}]}]}])
        assert render_tree(tree, indent=4) == "A\n    B\n        C"

    def test_empty_tree(self) -> None:
        assert render_tree(ItemTree()) == ""


class TestDescribeCollection:
    def test_auth_collection_block(self, auth_collection_raw: dict[str, Any]) -> None:
        collection = extract_collection(auth_collection_raw)
        assert describe_collection(collection).splitlines() == [
            "Info:",
            "  ID:      8f3c2a51-6d0e-4b7a-9c41-2f5e7d1a0b11",
            "  Name:    Auth API",
            "  Schema:  https://schema.getpostman.com/json/collection/v2.1.0/collection.json",
            "Scripts:",
            "  PreRequest:  true",
            "  Test:        false",
            "Variables:  baseUrl, token",
            "Items:",
            "  Auth",
            "    Login (scripts: test)",
            "  Ping",
        ]

    def test_empty_sections(self) -> None:
        collection = Collection(info=CollectionInfo(name="Bare"))
        assert describe_collection(collection).splitlines() == [
            "Info:",
            "  ID:",
            "  Name:    Bare",
            "  Schema:",
            "Scripts:",
            "  PreRequest:  false",
            "  Test:        false",
            "Variables:",
            "Items:",
        ]


class TestTables:
    def test_info_table(self, auth_collection_raw: dict[str, Any]) -> None:
        headers, rows = info_table([extract_collection(auth_collection_raw)])
        assert headers == TABLE_HEADERS == ["ID", "Name"]
        assert rows == [["8f3c2a51-6d0e-4b7a-9c41-2f5e7d1a0b11", "Auth API"]]

    def test_list_table(self) -> None:
        entries = [
            CollectionListItem(id="1", name="One", owner="o", uid="o-1"),
            CollectionListItem(id="2", name="Two"),
        ]
        _, rows = list_table(entries)
        assert rows == [["1", "One"], ["2", "Two"]]
