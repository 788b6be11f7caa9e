"""Plugin commands -- inspect the plugins authchain would register.

Provides the ``authchain plugins`` sub-command group. Both commands run
entry-point discovery with the effective configuration (see
:func:`authchain.config.load_config`) and report what the resulting
:class:`~authchain.service.AuthenticationService` would contain.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from authchain.exceptions import PluginError
from authchain.output import debug, error, format_response, info, print_table

if TYPE_CHECKING:
    from authchain.plugins.manager import PluginManager


plugins_app = typer.Typer(no_args_is_help=True)


def _discover(ctx: typer.Context) -> PluginManager:
    from authchain.config import load_config
    from authchain.plugins.manager import PluginManager

    config_path = ctx.obj.get("config_path") if ctx.obj else None
    manager = PluginManager(load_config(config_path))
    loaded = manager.discover()
    debug(f"Discovered {len(loaded)} plugin(s): {', '.join(loaded) or '(none)'}")
    return manager


@plugins_app.command("list")
def plugins_list(ctx: typer.Context) -> None:
    """List discovered plugins in registration order.

    Example::

        authchain plugins list
        authchain --json plugins list
    """
    manager = _discover(ctx)
    rows = []
    for name in manager.ordered_names():
        described = manager.describe_plugin(name)
        rows.append([described["name"], described["type"], ", ".join(described["capabilities"])])

    if not rows:
        info("No plugins discovered in the 'authchain.plugins' entry-point group.")
        return
    print_table(["name", "type", "capabilities"], rows, title="Plugins")


@plugins_app.command("show")
def plugins_show(
    ctx: typer.Context,
    name: str = typer.Argument(help="Plugin name as declared in its entry point."),
) -> None:
    """Show the class and capabilities of one plugin.

    Exits with code 10 when no plugin with *name* was discovered.

    Example::

        authchain plugins show http-basic
    """
    manager = _discover(ctx)
    try:
        described = manager.describe_plugin(name)
    except PluginError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    format_response(described)
