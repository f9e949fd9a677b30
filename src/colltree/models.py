"""Canonical Pydantic models shared across all colltree modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`DecoderConfig`, :class:`OutputConfig`, and :class:`GlobalConfig`.

**Item tree models** -- produced by :func:`colltree.parser.decoder.parse` and
consumed by the renderers:
    :class:`Item`, :class:`ItemGroup`, the :data:`ItemNode` union, and
    :class:`ItemTree`.

**Collection records** -- produced by the extractor:
    :class:`CollectionInfo`, :class:`Collection`, and
    :class:`CollectionListItem`.

Tree and collection models are frozen: once the decoder has built them they
cannot be modified.
"""

from __future__ import annotations

from typing import Annotated, Iterator, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# --- Config ---


class DecoderConfig(BaseModel):
    """Limits applied while decoding a collection's item tree."""

    max_depth: int = Field(
        default=1000, ge=1, description="Maximum folder nesting depth accepted"
    )


class OutputConfig(BaseModel):
    """Default output preferences stored in :class:`GlobalConfig`."""

    format: Literal["auto", "plain", "rich"] = Field(
        default="auto", description="Output format: auto, plain, rich"
    )
    indent: int = Field(
        default=2, ge=1, description="Spaces per nesting level in tree output"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/colltree/config.json``.

    Loaded and saved by :func:`~colltree.config.load_global_config` and
    :func:`~colltree.config.save_global_config`. Fields here have the
    lowest precedence and can be overridden by project config, environment
    variables, or CLI flags. See :func:`~colltree.config.resolve_config`
    for the full precedence chain.
    """

    decoder: DecoderConfig = Field(default_factory=DecoderConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Item tree ---


class Item(BaseModel):
    """A single request in a collection (a leaf of the item tree).

    ``listen_events`` holds the ``listen`` phase of every script event
    attached to this request, in source order.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["item"] = "item"
    name: str
    listen_events: tuple[str, ...] = ()


class ItemGroup(BaseModel):
    """A folder in a collection, holding further folders and requests.

    ``listen_events`` covers only the folder's own scripts; the scripts of
    its children live on the children.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["group"] = "group"
    name: str
    listen_events: tuple[str, ...] = ()
    children: tuple[ItemNode, ...] = ()


ItemNode = Annotated[Union[ItemGroup, Item], Field(discriminator="kind")]
"""Either variant of a tree node, discriminated by its ``kind`` tag."""

ItemGroup.model_rebuild()


class ItemTree(BaseModel):
    """The decoded folder/request structure of a collection.

    ``root`` is an unnamed :class:`ItemGroup` standing for the collection's
    top-level ``item`` array. It is always present, possibly with no
    children.

    Walk the tree with :meth:`traverse`. ``model_dump`` and
    ``model_dump_json`` recurse per level in pydantic-core, which refuses
    trees well short of the decoder's default depth limit.

    Example::

        tree = parse(document["item"])
        for depth, node in tree.traverse(include_root=False):
            print("  " * (depth - 1) + node.name)
    """

    model_config = ConfigDict(frozen=True)

    root: ItemGroup = Field(default_factory=lambda: ItemGroup(name=""))

    def traverse(self, include_root: bool = True) -> Iterator[tuple[int, ItemNode]]:
        """Walk the tree depth-first in pre-order.

        A group is yielded before its children and children follow source
        order. The root is at depth 0, its children at depth 1. Each call
        returns a fresh generator; walking never changes the tree.

        Args:
            include_root: Whether to yield ``(0, root)`` first.

        Yields:
            ``(depth, node)`` pairs.
        """
        stack: list[tuple[int, ItemNode]] = [(0, self.root)]
        while stack:
            depth, node = stack.pop()
            if depth or include_root:
                yield depth, node
            if isinstance(node, ItemGroup):
                stack.extend((depth + 1, child) for child in reversed(node.children))

    def count_groups(self) -> int:
        """Number of folders below the root."""
        return sum(
            1 for _, node in self.traverse(include_root=False)
            if isinstance(node, ItemGroup)
        )

    def count_items(self) -> int:
        """Number of requests in the whole tree."""
        return sum(
            1 for _, node in self.traverse(include_root=False)
            if isinstance(node, Item)
        )

    def max_depth(self) -> int:
        """Depth of the deepest node, 0 for an empty tree."""
        return max((depth for depth, _ in self.traverse()), default=0)


# --- Collection records ---


class CollectionInfo(BaseModel):
    """The flat ``info`` record of a collection.

    The API names the identifier ``_postman_id``; plain ``id`` is accepted
    as well. ``schema`` is stored as ``schema_`` so it does not shadow the
    ``BaseModel`` attribute.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default="", validation_alias=AliasChoices("_postman_id", "id"))
    name: str = ""
    schema_: str = Field(default="", alias="schema")


class Collection(BaseModel):
    """A decoded collection: info record, item tree, and collection-level metadata."""

    model_config = ConfigDict(frozen=True)

    info: CollectionInfo
    items: ItemTree = Field(default_factory=ItemTree)
    listen_events: tuple[str, ...] = ()
    variables: tuple[str, ...] = ()


class CollectionListItem(BaseModel):
    """One entry of a ``{"collections": [...]}`` listing."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str = ""
    name: str = ""
    owner: str = ""
    uid: str = ""
