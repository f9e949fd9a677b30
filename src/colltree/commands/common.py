"""Helpers shared by the collection commands.

Every collection command accepts one or more sources and processes them in
argument order. A source that fails to load or decode is reported on stderr
and skipped; the remaining sources still run, and the command exits with the
first failure's exit code once all of them are done.
"""

from __future__ import annotations

from typing import Iterator, Union

import typer

from colltree.exceptions import (
    CollectionLoadError,
    ColltreeError,
    ConfigError,
    DepthLimitExceededError,
    InvalidUsageError,
)
from colltree.models import Collection, CollectionListItem, GlobalConfig
from colltree.output import debug, error, suggest

Document = Union[Collection, list[CollectionListItem]]


def get_settings(ctx: typer.Context) -> GlobalConfig:
    """Return the configuration resolved by the root callback.

    Raises:
        typer.Exit: If the configuration could not be resolved; the error
            has already been reported.
    """
    obj = ctx.obj or {}
    config_error = obj.get("config_error")
    if config_error is not None:
        error(str(config_error))
        raise typer.Exit(code=config_error.exit_code)
    config = obj.get("config")
    if config is None:
        from colltree.config import resolve_config

        try:
            config = resolve_config()
        except ConfigError as exc:
            error(str(exc))
            raise typer.Exit(code=exc.exit_code) from None
    return config


def iter_documents(
    sources: list[str],
    max_depth: int,
    failures: list[ColltreeError],
    allow_listing: bool = False,
) -> Iterator[tuple[str, Document]]:
    """Load and extract each source in order, yielding the ones that succeed.

    Args:
        sources: File paths, URLs, or ``-`` for stdin.
        max_depth: Nesting limit passed to the decoder.
        failures: Receives the error of every failed source, in order.
        allow_listing: Whether ``{"collections": [...]}`` listings are
            acceptable; otherwise they count as failures.

    Yields:
        ``(source, document)`` pairs.

    Raises:
        typer.Exit: With code 2 if ``-`` appears more than once.
    """
    from colltree.parser import extract_document, load_document

    if sources.count("-") > 1:
        usage = InvalidUsageError("stdin ('-') can only be given once")
        error(str(usage))
        raise typer.Exit(code=usage.exit_code)

    for source in sources:
        debug(f"Loading {source}")
        try:
            document = extract_document(load_document(source), max_depth)
            if isinstance(document, list) and not allow_listing:
                raise CollectionLoadError(
                    "Expected a collection, got a collection listing "
                    "(use: colltree get collections)"
                )
        except ColltreeError as exc:
            report_failure(source, exc)
            failures.append(exc)
            continue
        yield source, document


def report_failure(source: str, exc: ColltreeError) -> None:
    """Print a failed source's error, with a hint where one helps."""
    error(f"{source}: {exc}")
    if isinstance(exc, DepthLimitExceededError):
        suggest(
            "Raise the limit with --max-depth or: "
            f"colltree config set decoder.max_depth {exc.limit * 2}"
        )


def finish(failures: list[ColltreeError]) -> None:
    """Exit with the first failure's code if any source failed."""
    if failures:
        raise typer.Exit(code=failures[0].exit_code)
