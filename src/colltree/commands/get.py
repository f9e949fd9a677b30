"""Get commands -- summary tables of collections.

Provides the ``colltree get`` sub-command group. ``get collections`` prints a
two-column table (ID, Name) built from the flat ``info`` record of each
collection document, or from every entry of a ``{"collections": [...]}``
listing. The item tree is decoded (so a malformed collection is reported)
but not displayed.
"""

from __future__ import annotations

import typer

from colltree.commands.common import finish, get_settings, iter_documents
from colltree.exceptions import ColltreeError
from colltree.output import get_output
from colltree.render import TABLE_HEADERS, info_table, list_table


get_app = typer.Typer(no_args_is_help=True)


@get_app.command("collections")
def get_collections(
    ctx: typer.Context,
    sources: list[str] = typer.Argument(
        ..., metavar="SOURCE...", help="Collection files, URLs, or '-' for stdin."
    ),
) -> None:
    """List collections as an ID/Name table.

    Rows follow the order of the arguments. Sources that fail are reported
    and left out of the table.

    Example::

        colltree get collections orders.json billing.json
        colltree get collections listing.json
    """
    config = get_settings(ctx)
    failures: list[ColltreeError] = []

    rows: list[list[str]] = []
    for _, document in iter_documents(
        sources, config.decoder.max_depth, failures, allow_listing=True
    ):
        if isinstance(document, list):
            _, new_rows = list_table(document)
        else:
            _, new_rows = info_table([document])
        rows.extend(new_rows)

    if rows or not failures:
        get_output().print_table(
            TABLE_HEADERS, rows, title=f"Collections ({len(rows)})"
        )
    finish(failures)


get_app.command("collection", hidden=True)(get_collections)
