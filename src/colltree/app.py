"""Typer application and CLI entry point for colltree.

This module wires together the top-level Typer application and registers the
built-in sub-commands (``get``, ``describe``, ``tree``, ``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
Unhandled exceptions are written to a crash log under the data directory.

See Also:
    :mod:`colltree.config`: Configuration resolution used by
        :func:`main_callback`.
    :mod:`colltree.output`: Output formatting initialised in
        :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from colltree import __version__
from colltree.commands.config import config_app
from colltree.commands.describe import describe_app
from colltree.commands.get import get_app
from colltree.commands.tree import tree_command
from colltree.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="colltree",
    help="Decode and display the folder/request trees of API collections.",
    no_args_is_help=True,
    add_completion=True,
    rich_markup_mode="rich",
)

app.add_typer(get_app, name="get", help="Summary tables of collections.")
app.add_typer(describe_app, name="describe", help="Detailed view of collections.")
app.command("tree")(tree_command)
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"colltree {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Skip confirmations."
    ),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Output file path."
    ),
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth", min=1, help="Maximum folder nesting depth to decode."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Resolves the effective configuration, initialises the global
    :class:`~colltree.output.OutputManager` from it and the CLI flags, and
    stores shared state in ``ctx.obj``: the resolved ``config`` (or the
    ``config_error`` that prevented it) and the ``force`` flag.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        plain_output: Force plain-text output format.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential diagnostic output.
        verbose: Enable debug-level diagnostic output and log records.
        force: Skip interactive confirmations.
        output_file: Append primary data output to a file path.
        max_depth: Decoder nesting limit override (highest precedence).
    """
    from colltree.config import resolve_config
    from colltree.exceptions import ConfigError
    from colltree.output import OutputFormat, OutputManager, set_output

    ctx.ensure_object(dict)
    config = None
    fmt = OutputFormat.AUTO
    try:
        config = resolve_config(
            cli_max_depth=max_depth,
            cli_format="plain" if plain_output else None,
        )
        fmt = OutputFormat(config.output.format)
    except ConfigError as exc:
        # ``config`` commands must still run on a broken config.
        ctx.obj["config_error"] = exc

    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
        output_file=output_file,
    )
    set_output(output)
    if verbose:
        _setup_logging()

    ctx.obj["config"] = config
    ctx.obj["force"] = force
    ctx.obj["verbose"] = verbose


def _setup_logging() -> None:
    """Send library log records to stderr through Rich at DEBUG level."""
    from rich.console import Console
    from rich.logging import RichHandler

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    root = logging.getLogger("colltree")
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from colltree.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``colltree`` console script.

    Installs signal handlers and invokes the Typer application. Unhandled
    :class:`~colltree.exceptions.ColltreeError` instances cause a clean exit
    with the error's ``exit_code``. All other exceptions produce a crash log
    and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from colltree.exceptions import ColltreeError
        from colltree.output import error

        if isinstance(exc, ColltreeError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
