"""Numeric process exit codes used by the ``authchain`` CLI.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~authchain.exceptions.AuthChainError` subclass.
Shell wrappers can inspect the exit code to determine the failure class
without parsing stderr.

Example::

    $ authchain plugins show missing
    $ echo $?
    10  # EXIT_PLUGIN_ERROR -- no such plugin was discovered
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_PLUGIN = 2
"""An object without any known plugin capability was registered."""

EXIT_NO_RESULT = 3
"""The authentication pipeline finished without producing a result."""

EXIT_PLUGIN_ERROR = 10
"""A plugin failed to load, was not found, or broke its contract."""
