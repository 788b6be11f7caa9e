"""Config commands -- view the effective configuration.

Provides the ``authchain config`` sub-command group.
"""

from __future__ import annotations

import typer

from authchain.output import format_response, info


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the effective configuration and where it was loaded from.

    Example::

        authchain config show
        authchain --config ./staging.json config show --json
    """
    from authchain.config import load_config, resolve_config_path

    explicit = ctx.obj.get("config_path") if ctx.obj else None
    source = resolve_config_path(explicit)
    info(f"Config source: {source if source is not None else '(defaults)'}")
    format_response(load_config(explicit).model_dump(mode="json"))


@config_app.command("path")
def config_path() -> None:
    """Print the path of the user configuration file."""
    from authchain.config import user_config_path
    from authchain.output import get_output

    get_output().print_data(str(user_config_path()))
