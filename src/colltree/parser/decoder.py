"""Decode a collection's nested ``item`` array into an :class:`~colltree.models.ItemTree`.

A collection document mixes two kinds of nodes in one recursive array:
folders, which carry a nested ``item`` array of their own, and requests,
which do not. Nothing else tells them apart, so the decision is made here,
once per node, from the presence of the ``item`` key:

* ``item`` present (even ``[]``) -> :class:`~colltree.models.ItemGroup`
* ``item`` absent -> :class:`~colltree.models.Item`

Every node must have a string ``name``. Script events are read from the
node's own ``event`` array only; a folder never inherits its children's
events, nor they its.

The walk uses an explicit stack instead of recursion so that the configured
depth ceiling, not the interpreter's recursion limit, decides how deep a
collection may nest. Nodes are built bottom-up and handed out frozen: a
failure anywhere aborts the whole decode and nothing partial escapes.

The single public entry point is :func:`parse`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from colltree.exceptions import DecodeError, DepthLimitExceededError, MissingFieldError
from colltree.models import Item, ItemGroup, ItemNode, ItemTree

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 1000
"""Deepest nesting accepted when no other limit is configured."""


@dataclass
class _Frame:
    """An open folder whose children are still being decoded."""

    elements: list[Any]
    path: tuple[int, ...]
    name: str = ""
    listen_events: tuple[str, ...] = ()
    children: list[ItemNode] = field(default_factory=list)
    cursor: int = 0

    def close(self) -> ItemGroup:
        return ItemGroup(
            name=self.name,
            listen_events=self.listen_events,
            children=tuple(self.children),
        )


def parse(items: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> ItemTree:
    """Decode the value of a collection's top-level ``item`` key.

    Args:
        items: The already JSON-decoded ``item`` array -- a list of dicts,
            each with a ``name`` and optionally ``item`` and ``event``.
        max_depth: Deepest nesting accepted. Top-level elements are at
            depth 1.

    Returns:
        A frozen :class:`~colltree.models.ItemTree` whose root's children
        mirror *items* one-to-one, recursively.

    Raises:
        MissingFieldError: If a node has no ``name``.
        DepthLimitExceededError: If a node is nested deeper than *max_depth*.
        DecodeError: If any node, ``item`` or ``event`` value has the wrong
            shape. The error's ``path`` locates the offending node.

    Example::

        tree = parse([{"name": "Auth", "item": [{"name": "Login"}]}])
        [node.name for _, node in tree.traverse(include_root=False)]
        # ['Auth', 'Login']
    """
    if not isinstance(items, list):
        raise DecodeError(f"expected a list of items, got {_type_name(items)}")

    stack = [_Frame(elements=items, path=())]
    while True:
        frame = stack[-1]

        if frame.cursor == len(frame.elements):
            stack.pop()
            group = frame.close()
            if not stack:
                tree = ItemTree(root=group)
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug(
                        "Decoded item tree: %d groups, %d items, depth %d",
                        tree.count_groups(),
                        tree.count_items(),
                        tree.max_depth(),
                    )
                return tree
            stack[-1].children.append(group)
            continue

        index = frame.cursor
        frame.cursor += 1
        raw = frame.elements[index]
        path = frame.path + (index,)

        if len(path) > max_depth:
            raise DepthLimitExceededError(max_depth, path)

        name, listen_events = _read_node(raw, path)

        if "item" in raw:
            nested = raw["item"]
            if not isinstance(nested, list):
                raise DecodeError(
                    f"'item' must be a list, got {_type_name(nested)}", path
                )
            stack.append(
                _Frame(
                    elements=nested,
                    path=path,
                    name=name,
                    listen_events=listen_events,
                )
            )
        else:
            frame.children.append(Item(name=name, listen_events=listen_events))


def collect_listen_events(raw_events: Any, path: tuple[int, ...] = ()) -> tuple[str, ...]:
    """Return the ``listen`` phases of an ``event`` array, in source order.

    Duplicates are kept. ``None`` (no ``event`` key) yields an empty tuple.

    Args:
        raw_events: The value of an ``event`` key.
        path: Index path of the owning node, used in error messages.

    Raises:
        DecodeError: If the value is not a list, an entry is not a dict, or
            an entry has no string ``listen``.
    """
    if raw_events is None:
        return ()
    if not isinstance(raw_events, list):
        raise DecodeError(
            f"'event' must be a list, got {_type_name(raw_events)}", path
        )

    phases: list[str] = []
    for position, event in enumerate(raw_events):
        if not isinstance(event, dict):
            raise DecodeError(
                f"event[{position}] must be an object, got {_type_name(event)}",
                path,
            )
        listen = event.get("listen")
        if not isinstance(listen, str):
            raise DecodeError(f"event[{position}] has no 'listen' phase", path)
        phases.append(listen)
    return tuple(phases)


def _read_node(raw: Any, path: tuple[int, ...]) -> tuple[str, tuple[str, ...]]:
    """Validate one element and return its name and own listen phases."""
    if not isinstance(raw, dict):
        raise DecodeError(f"expected an object, got {_type_name(raw)}", path)

    if "name" not in raw:
        raise MissingFieldError("name", path)
    name = raw["name"]
    if not isinstance(name, str):
        raise DecodeError(f"'name' must be a string, got {_type_name(name)}", path)

    if "event" in raw and raw["event"] is None:
        raise DecodeError("'event' must be a list, got null", path)
    return name, collect_listen_events(raw.get("event"), path)


def _type_name(value: Any) -> str:
    """JSON-flavoured type name for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (int, float)):
        return "number"
    return type(value).__name__
