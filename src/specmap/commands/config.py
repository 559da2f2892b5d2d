"""Config commands -- view and modify global configuration.

Provides the ``specmap config`` sub-command group for reading and updating
the user's global configuration file
(:class:`~specmap.config.GlobalConfig`).
"""

from __future__ import annotations

import typer

from specmap.exceptions import ConfigError
from specmap.output import error, info, print_record, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the configuration stored on disk.

    Example::

        specmap config show
        specmap --json config show
    """
    from specmap.config import get_config_dir, load_global_config

    try:
        config = load_global_config()
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    info(f"Config directory: {get_config_dir()}")
    record = {
        f"{section}.{field}": value
        for section, fields in config.model_dump(mode="json").items()
        for field, value in fields.items()
    }
    print_record(record, title="Configuration")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g., 'loader.timeout')."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    The value is validated against the field's type before it is saved.

    Example::

        specmap config set loader.timeout 10
        specmap config set output.format json
    """
    from specmap.config import set_config_value

    try:
        set_config_value(key, value)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=2) from None
    success(f"Set {key} = {value}")
