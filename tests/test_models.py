"""Tests for colltree.models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from colltree.models import (
    CollectionInfo,
    GlobalConfig,
    Item,
    ItemGroup,
    ItemTree,
)


@pytest.fixture()
def sample_tree() -> ItemTree:
    return ItemTree(
        root=ItemGroup(
            name="",
            children=(
                ItemGroup(
                    name="Auth",
                    children=(
                        Item(name="Login", listen_events=("test",)),
                        ItemGroup(name="Empty"),
                    ),
                ),
                Item(name="Ping"),
            ),
        )
    )


class TestItemTreeTraverse:
    """Pre-order walking of the item tree."""

    def test_pre_order_with_depths(self, sample_tree: ItemTree) -> None:
        visited = [(depth, node.name) for depth, node in sample_tree.traverse()]
        assert visited == [(0, ""), (1, "Auth"), (2, "Login"), (2, "Empty"), (1, "Ping")]

    def test_exclude_root(self, sample_tree: ItemTree) -> None:
        visited = [node.name for _, node in sample_tree.traverse(include_root=False)]
        assert visited == ["Auth", "Login", "Empty", "Ping"]

    def test_restartable(self, sample_tree: ItemTree) -> None:
        first = list(sample_tree.traverse())
        second = list(sample_tree.traverse())
        assert first == second

    def test_empty_tree(self) -> None:
        tree = ItemTree()
        assert list(tree.traverse(include_root=False)) == []
        assert [depth for depth, _ in tree.traverse()] == [0]


class TestItemTreeCounts:
    """Aggregate helpers used by the ``tree`` summary line."""

    def test_counts(self, sample_tree: ItemTree) -> None:
        assert sample_tree.count_groups() == 2
        assert sample_tree.count_items() == 2
        assert sample_tree.max_depth() == 2

    def test_empty_counts(self) -> None:
        tree = ItemTree()
        assert tree.count_groups() == 0
        assert tree.count_items() == 0
        assert tree.max_depth() == 0


class TestNodes:
    """Node variants are frozen and tagged."""

    def test_item_is_frozen(self) -> None:
        item = Item(name="Ping")
        with pytest.raises(ValidationError):
            item.name = "Pong"

    def test_kind_tags(self) -> None:
        assert Item(name="a").kind == "item"
        assert ItemGroup(name="b").kind == "group"

    def test_children_validated_by_kind(self) -> None:
        group = ItemGroup.model_validate({
            "name": "Folder",
            "children": [{"kind": "item", "name": "Leaf"}, {"kind": "group", "name": "Sub"}],
        })
        assert isinstance(group.children[0], Item)
        assert isinstance(group.children[1], ItemGroup)


class TestCollectionInfo:
    def test_postman_id_alias(self) -> None:
        info = CollectionInfo.model_validate({"_postman_id": "x1", "name": "N", "schema": "s"})
        assert info.id == "x1"
        assert info.schema_ == "s"


class TestGlobalConfig:
    def test_defaults(self) -> None:
        config = GlobalConfig()
        assert config.decoder.max_depth == 1000
        assert config.output.format == "auto"
        assert config.output.indent == 2

    def test_rejects_non_positive_depth(self) -> None:
        with pytest.raises(ValidationError):
            GlobalConfig.model_validate({"decoder": {"max_depth": 0}})

    def test_rejects_unknown_format(self) -> None:
        with pytest.raises(ValidationError):
            GlobalConfig.model_validate({"output": {"format": "json"}})


class TestDeepTree:
    """Trees at the default depth limit are walked without recursion."""

    def test_thousand_levels_traverse_and_render(self) -> None:
        from colltree.parser.decoder import DEFAULT_MAX_DEPTH, parse
        from colltree.render import tree_lines

        innermost: dict = {"name": f"level-{DEFAULT_MAX_DEPTH}"}
        node = innermost
        for level in range(DEFAULT_MAX_DEPTH - 1, 0, -1):
            node = {"name": f"level-{level}", "item": [node]}
        tree = parse([node])

        assert tree.max_depth() == DEFAULT_MAX_DEPTH
        assert tree.count_groups() == DEFAULT_MAX_DEPTH - 1
        lines = tree_lines(tree)
        assert len(lines) == DEFAULT_MAX_DEPTH
        assert lines[-1] == " " * (2 * (DEFAULT_MAX_DEPTH - 1)) + f"level-{DEFAULT_MAX_DEPTH}"
