"""Text projections of decoded collections.

Everything here is a pure function from the frozen models in
:mod:`colltree.models` to strings or table rows; the
:class:`~colltree.output.OutputManager` decides where they go.

* :func:`render_tree` -- the indented item tree, one node per line.
* :func:`describe_collection` -- the ``describe collections`` block.
* :func:`info_table` / :func:`list_table` -- ``(headers, rows)`` for the
  ``get collections`` summary, built from flat info records only.

Script phases are shown sorted and de-duplicated (``(scripts: prerequest,test)``)
whatever order the document listed them in; the models keep source order.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from colltree.models import Collection, CollectionListItem, ItemTree

TABLE_HEADERS = ["ID", "Name"]


def format_script_suffix(listen_events: Iterable[str]) -> str:
    """Return ``" (scripts: a,b)"`` for a node's phases, or ``""`` if it has none."""
    phases = sorted(set(listen_events))
    if not phases:
        return ""
    return f" (scripts: {','.join(phases)})"


def render_tree(tree: ItemTree, indent: int = 2) -> str:
    """Render *tree* as indented text.

    The root itself is not printed: its children start at column 0 and each
    further level adds *indent* spaces. Folders and requests both carry their
    script suffix.

    Example::

        Auth
          Login (scripts: test)
        Ping
    """
    return "\n".join(tree_lines(tree, indent))


def tree_lines(tree: ItemTree, indent: int = 2) -> list[str]:
    """The lines of :func:`render_tree`, without joining."""
    pad = " " * indent
    return [
        f"{pad * (depth - 1)}{node.name}{format_script_suffix(node.listen_events)}"
        for depth, node in tree.traverse(include_root=False)
    ]


def describe_collection(collection: Collection, indent: int = 2) -> str:
    """Render the ``describe`` block for one collection.

    Sections: ``Info`` (ID, Name, Schema), ``Scripts`` (whether the
    collection itself has pre-request and test scripts), ``Variables``
    (variable keys) and ``Items`` (the indented tree).
    """
    pad = " " * indent
    info = collection.info
    phases = set(collection.listen_events)

    lines = ["Info:"]
    lines += _aligned(
        [("ID:", info.id), ("Name:", info.name), ("Schema:", info.schema_)], pad
    )
    lines.append("Scripts:")
    lines += _aligned(
        [
            ("PreRequest:", _bool_text("prerequest" in phases)),
            ("Test:", _bool_text("test" in phases)),
        ],
        pad,
    )
    lines.append(f"Variables:  {', '.join(collection.variables)}".rstrip())
    lines.append("Items:")
    lines += [pad + line for line in tree_lines(collection.items, indent)]
    return "\n".join(lines)


def info_table(collections: Sequence[Collection]) -> tuple[list[str], list[list[str]]]:
    """Headers and one ``[id, name]`` row per collection."""
    return TABLE_HEADERS, [[c.info.id, c.info.name] for c in collections]


def list_table(entries: Sequence[CollectionListItem]) -> tuple[list[str], list[list[str]]]:
    """Headers and one ``[id, name]`` row per listing entry."""
    return TABLE_HEADERS, [[e.id, e.name] for e in entries]


def _aligned(fields: list[tuple[str, str]], pad: str) -> list[str]:
    width = max(len(label) for label, _ in fields) + 2
    return [f"{pad}{label.ljust(width)}{value}".rstrip() for label, value in fields]


def _bool_text(value: bool) -> str:
    return "true" if value else "false"
