"""Tree command -- print a collection's folder/request structure."""

from __future__ import annotations

import typer

from colltree.commands.common import finish, get_settings, iter_documents
from colltree.exceptions import ColltreeError
from colltree.output import info, print_tree, warning


def tree_command(
    ctx: typer.Context,
    source: str = typer.Argument(
        ..., metavar="SOURCE", help="Collection file, URL, or '-' for stdin."
    ),
) -> None:
    """Show the item tree of a collection.

    Folders and requests are listed depth-first in document order, each
    followed by its script phases. A summary line goes to stderr, or a
    warning if the collection has no items at all.

    Example::

        colltree tree orders.json
        curl -s "$EXPORT_URL" | colltree tree -
    """
    config = get_settings(ctx)
    failures: list[ColltreeError] = []

    for _, collection in iter_documents([source], config.decoder.max_depth, failures):
        items = collection.items
        if not items.root.children:
            warning(f"{source}: collection has no items")
            continue
        print_tree(items, indent=config.output.indent, title=collection.info.name)
        info(
            f"{items.count_items()} requests in {items.count_groups()} folders, "
            f"depth {items.max_depth()}"
        )

    finish(failures)
