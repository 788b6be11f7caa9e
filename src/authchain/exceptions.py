"""Exception hierarchy for authchain.

All exceptions inherit from :class:`AuthChainError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`authchain.exit_codes`.
The CLI entry point catches ``AuthChainError`` and exits with the matching
code. Library callers usually catch the more specific subclasses, which also
derive from the closest built-in exception so that ``except ValueError`` and
``except RuntimeError`` keep working.

Subclass hierarchy::

    AuthChainError (exit 1)
    +-- InvalidPluginError  (exit 2, also ValueError)
    +-- NoResultError       (exit 3, also RuntimeError)
    +-- PluginError         (exit 10)
    +-- ConfigError         (exit 1)

Exceptions raised by plugin implementations themselves are never wrapped in
this hierarchy; they propagate to the caller unchanged.
"""

from authchain.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_PLUGIN,
    EXIT_NO_RESULT,
    EXIT_PLUGIN_ERROR,
)


class AuthChainError(Exception):
    """Base exception for all authchain errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidPluginError(AuthChainError, ValueError):
    """Raised when a registered object implements no known plugin interface."""

    exit_code = EXIT_INVALID_PLUGIN


class NoResultError(AuthChainError, RuntimeError):
    """Raised when every phase of :meth:`AuthenticationService.authenticate` came up empty."""

    exit_code = EXIT_NO_RESULT


class PluginError(AuthChainError):
    """Raised when a plugin fails to load, is unknown, or returns a value outside its contract."""

    exit_code = EXIT_PLUGIN_ERROR


class ConfigError(AuthChainError):
    """Raised for configuration problems (missing file, invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE
