"""Describe commands -- detailed view of collections.

Provides the ``colltree describe`` sub-command group. ``describe collections``
prints, for each collection, its info record, whether the collection itself
carries pre-request and test scripts, its variable keys, and the indented
item tree with every node's script phases.
"""

from __future__ import annotations

import typer

from colltree.commands.common import finish, get_settings, iter_documents
from colltree.exceptions import ColltreeError
from colltree.output import print_data
from colltree.render import describe_collection


describe_app = typer.Typer(no_args_is_help=True)


@describe_app.command("collections")
def describe_collections(
    ctx: typer.Context,
    sources: list[str] = typer.Argument(
        ..., metavar="SOURCE...", help="Collection files, URLs, or '-' for stdin."
    ),
) -> None:
    """Describe one or more collections.

    Blocks are printed in argument order, separated by a blank line.

    Example::

        colltree describe collections orders.json
    """
    config = get_settings(ctx)
    failures: list[ColltreeError] = []

    printed = 0
    for _, collection in iter_documents(sources, config.decoder.max_depth, failures):
        if printed:
            print_data("")
        print_data(describe_collection(collection, indent=config.output.indent))
        printed += 1

    finish(failures)


describe_app.command("collection", hidden=True)(describe_collections)
