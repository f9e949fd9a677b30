"""Config commands -- view and modify global configuration.

Provides the ``colltree config`` sub-command group over the user's global
:class:`~colltree.models.GlobalConfig` file. Every setting is addressed as
``section.field``: ``decoder.max_depth``, ``output.format`` and
``output.indent``. Project config and environment variables are not
touched by these commands.
"""

from __future__ import annotations

from typing import Any

import typer
from pydantic import ValidationError

from colltree.exceptions import ConfigError
from colltree.exit_codes import EXIT_INVALID_USAGE
from colltree.models import GlobalConfig
from colltree.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


def _load_or_exit() -> GlobalConfig:
    from colltree.config import load_global_config

    try:
        return load_global_config()
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _split_key(key: str) -> tuple[str, str]:
    """Split ``section.field`` and check both halves name a real setting."""
    section, _, field = key.partition(".")
    section_model = GlobalConfig.model_fields.get(section)
    if section_model is None or not field:
        error(f"Unknown config key: {key} (expected section.field)")
        raise typer.Exit(code=EXIT_INVALID_USAGE)
    if field not in section_model.annotation.model_fields:
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=EXIT_INVALID_USAGE)
    return section, field


@config_app.command("show")
def config_show() -> None:
    """Show the global configuration and where it is stored.

    Example::

        colltree config show
    """
    from colltree.config import get_config_dir

    config = _load_or_exit()
    info(f"Config directory: {get_config_dir()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Setting as section.field, e.g. 'decoder.max_depth'."),
    value: str = typer.Argument(help="New value."),
) -> None:
    """Set one configuration value.

    The value is passed to :class:`~colltree.models.GlobalConfig` validation
    as given, so ``"64"`` becomes an integer for ``decoder.max_depth`` and
    ``output.format`` only accepts ``auto``, ``plain`` or ``rich``.

    Raises:
        typer.Exit: With code 2 if the key is unknown or the value is
            rejected.

    Example::

        colltree config set decoder.max_depth 200
        colltree config set output.format plain
    """
    from colltree.config import save_global_config

    section, field = _split_key(key)
    data: dict[str, Any] = _load_or_exit().model_dump(mode="json")
    data[section][field] = value

    try:
        new_config = GlobalConfig.model_validate(data)
    except ValidationError as exc:
        error(f"Validation error for {key}: {exc.errors()[0]['msg']}")
        raise typer.Exit(code=EXIT_INVALID_USAGE) from None

    save_global_config(new_config)
    success(f"Set {key} = {getattr(getattr(new_config, section), field)}")


@config_app.command("reset")
def config_reset(ctx: typer.Context) -> None:
    """Restore the default configuration.

    Asks for confirmation unless ``--force`` is active.

    Example::

        colltree --force config reset
    """
    from colltree.config import save_global_config

    if not (ctx.obj or {}).get("force", False):
        if not typer.confirm("Reset all config to defaults?"):
            info("Cancelled.")
            raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
