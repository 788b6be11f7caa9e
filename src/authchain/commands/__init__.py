"""Built-in CLI sub-commands for authchain.

* :mod:`~authchain.commands.plugins` -- list and inspect discovered plugins.
* :mod:`~authchain.commands.config` -- show the effective configuration.

Each module exports a :class:`typer.Typer` sub-application that
:mod:`authchain.app` mounts on the root application.
"""
