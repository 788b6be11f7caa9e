"""Typer application and console-script entry point for ``authchain``.

The CLI is an inspection tool: it reports which entry-point plugins a
service would be built from and what configuration is in effect. It does
not authenticate anything itself.

:func:`main` is the console-script entry point declared in
``pyproject.toml``. :class:`~authchain.exceptions.AuthChainError` raised by
a command is printed to stderr and turned into the matching exit code.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import click
import typer

from authchain import __version__
from authchain.commands.config import config_app
from authchain.commands.plugins import plugins_app
from authchain.exceptions import AuthChainError
from authchain.exit_codes import EXIT_SUCCESS


app = typer.Typer(
    name="authchain",
    help="Inspect authchain plugins and configuration.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.add_typer(plugins_app, name="plugins", help="List and inspect discovered plugins.")
app.add_typer(config_app, name="config", help="Show the effective configuration.")


class _DiagnosticsHandler(logging.Handler):
    """Forwards ``authchain`` log records to the output layer's debug stream."""

    def emit(self, record: logging.LogRecord) -> None:
        from authchain.output import debug

        debug(f"{record.name}: {record.getMessage()}")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"authchain {__version__}")
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
    config_path: Optional[str] = typer.Option(
        None, "--config", "-c", help="Config file to use."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Initialise output and store shared options in ``ctx.obj``."""
    from authchain.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    if verbose:
        package_logger = logging.getLogger("authchain")
        if not any(isinstance(h, _DiagnosticsHandler) for h in package_logger.handlers):
            package_logger.addHandler(_DiagnosticsHandler())
        package_logger.setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose


def main() -> None:
    """Console-script entry point."""
    from authchain.output import error

    try:
        rv = app(standalone_mode=False)
    except AuthChainError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except click.ClickException as exc:
        exc.show()
        sys.exit(exc.exit_code)
    except click.Abort:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    sys.exit(rv if isinstance(rv, int) else EXIT_SUCCESS)
