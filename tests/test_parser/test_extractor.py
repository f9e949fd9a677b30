"""Tests for colltree.parser.extractor."""

from __future__ import annotations

from typing import Any

import pytest

from colltree.exceptions import CollectionLoadError, DecodeError, DepthLimitExceededError
from colltree.models import Collection, CollectionListItem, ItemGroup
from colltree.parser.extractor import (
    extract_collection,
    extract_collection_list,
    extract_document,
)


# ---------------------------------------------------------------------------
# extract_collection
# ---------------------------------------------------------------------------


class TestExtractCollection:
    """Build Collection records from collection documents."""

    def test_info_fields(self, auth_collection_raw: dict[str, Any]) -> None:
        collection = extract_collection(auth_collection_raw)
        assert collection.info.id == "8f3c2a51-6d0e-4b7a-9c41-2f5e7d1a0b11"
        assert collection.info.name == "Auth API"
        assert collection.info.schema_.endswith("/v2.1.0/collection.json")

    def test_collection_level_events_and_variables(
        self, auth_collection_raw: dict[str, Any]
    ) -> None:
        collection = extract_collection(auth_collection_raw)
        assert collection.listen_events == ("prerequest",)
        assert collection.variables == ("baseUrl", "token")

    def test_item_tree_decoded(self, auth_collection_raw: dict[str, Any]) -> None:
        collection = extract_collection(auth_collection_raw)
        names = [node.name for _, node in collection.items.traverse(include_root=False)]
        assert names == ["Auth", "Login", "Ping"]
        assert isinstance(collection.items.root.children[0], ItemGroup)

    def test_envelope_is_unwrapped(self, nested_collection_raw: dict[str, Any]) -> None:
        collection = extract_collection(nested_collection_raw)
        assert collection.info.name == "Orders"
        assert collection.info.id == "0b7e4d2c-1f3a-4c5e-8d9f-a1b2c3d4e5f6"
        assert collection.items.count_groups() == 3
        assert collection.items.count_items() == 3

    def test_plain_id_accepted(self) -> None:
        collection = extract_collection({"info": {"id": "abc", "name": "Plain"}, "item": []})
        assert collection.info.id == "abc"

    def test_missing_optional_sections(self) -> None:
        collection = extract_collection({"info": {"name": "Bare"}, "item": []})
        assert collection.listen_events == ()
        assert collection.variables == ()
        assert collection.info.id == ""
        assert collection.items.root.children == ()

    def test_missing_info_raises(self) -> None:
        with pytest.raises(CollectionLoadError, match="missing 'info'"):
            extract_collection({"item": []})

    def test_missing_item_raises(self) -> None:
        with pytest.raises(CollectionLoadError, match="missing 'item'"):
            extract_collection({"info": {"name": "No items"}})

    def test_invalid_info_raises(self) -> None:
        with pytest.raises(CollectionLoadError, match="Invalid collection info"):
            extract_collection({"info": {"name": ["not", "a", "string"]}, "item": []})

    def test_item_errors_propagate_unchanged(self, fixture_path: Any) -> None:
        import json

        with open(fixture_path("broken_collection.json"), encoding="utf-8") as f:
            document = json.load(f)
        with pytest.raises(DecodeError) as exc_info:
            extract_collection(document)
        assert exc_info.value.path == (2, 1, 0)
        assert exc_info.value.exit_code == 8

    def test_max_depth_passed_to_decoder(self, nested_collection_raw: dict[str, Any]) -> None:
        with pytest.raises(DepthLimitExceededError):
            extract_collection(nested_collection_raw, max_depth=2)
        assert extract_collection(nested_collection_raw, max_depth=3).items.max_depth() == 3

    def test_malformed_collection_events(self) -> None:
        with pytest.raises(CollectionLoadError, match="Invalid collection events"):
            extract_collection({"info": {"name": "x"}, "item": [], "event": [{"script": {}}]})

    def test_variable_without_key_is_skipped(self) -> None:
        collection = extract_collection({
            "info": {"name": "x"},
            "item": [],
            "variable": [{"key": "a"}, {"value": "orphan"}, {"key": "b"}],
        })
        assert collection.variables == ("a", "b")

    def test_variable_not_a_list(self) -> None:
        with pytest.raises(CollectionLoadError, match="'variable' must be a list"):
            extract_collection({"info": {"name": "x"}, "item": [], "variable": {"key": "a"}})

    def test_variable_entry_not_an_object(self) -> None:
        with pytest.raises(CollectionLoadError, match=r"variable\[1\] must be an object"):
            extract_collection({"info": {"name": "x"}, "item": [], "variable": [{"key": "a"}, "b"]})


# ---------------------------------------------------------------------------
# extract_collection_list
# ---------------------------------------------------------------------------


class TestExtractCollectionList:
    """Validate listing entries."""

    def test_entries(self, collection_list_raw: dict[str, Any]) -> None:
        entries = extract_collection_list(collection_list_raw)
        assert [e.name for e in entries] == ["Auth API", "Orders"]
        assert entries[0].owner == "631643"
        assert entries[1].uid == "631643-0b7e4d2c-1f3a-4c5e-8d9f-a1b2c3d4e5f6"

    def test_numeric_owner_coerced(self) -> None:
        entries = extract_collection_list({"collections": [{"id": "1", "name": "n", "owner": 42}]})
        assert entries[0].owner == "42"

    def test_empty_listing(self) -> None:
        assert extract_collection_list({"collections": []}) == []

    def test_collections_not_a_list(self) -> None:
        with pytest.raises(CollectionLoadError, match="'collections' must be a list"):
            extract_collection_list({"collections": {"id": "1"}})

    def test_invalid_entry(self) -> None:
        with pytest.raises(CollectionLoadError, match="Invalid collection listing"):
            extract_collection_list({"collections": [{"name": {"nested": True}}]})


# ---------------------------------------------------------------------------
# extract_document
# ---------------------------------------------------------------------------


class TestExtractDocument:
    """Dispatch on the document's shape."""

    def test_collection_document(self, auth_collection_raw: dict[str, Any]) -> None:
        assert isinstance(extract_document(auth_collection_raw), Collection)

    def test_listing_document(self, collection_list_raw: dict[str, Any]) -> None:
        result = extract_document(collection_list_raw)
        assert isinstance(result, list)
        assert all(isinstance(entry, CollectionListItem) for entry in result)

    def test_unrecognised_document(self) -> None:
        with pytest.raises(CollectionLoadError, match="Not a collection"):
            extract_document({"openapi": "3.0.3"})
