"""authchain -- pluggable authentication orchestration.

An :class:`AuthenticationService` runs an ordered chain of plugins over a
request/response pair and returns one :class:`Result`: success, failure, or
challenge. Plugins implement narrow capability interfaces (extraction,
authentication, challenge, reset, event-aware); the service owns the plugin
registry and an :class:`EventBus` whose ``authenticate.pre`` and
``authenticate.post`` events can short-circuit the workflow.

Typical usage::

    from authchain import AuthenticationService

    service = AuthenticationService()
    service.add_plugin(extractor).add_plugin(verifier).add_plugin(challenger)
    result = service.authenticate(request, response)

Modules:
    service: The authentication and reset workflows.
    events: Event names, context object, and the event bus.
    result: The immutable :class:`Result` value.
    plugins: Capability interfaces, registry, and entry-point discovery.
    config: Configuration loading and precedence.
    exceptions: Exception hierarchy with exit-code mapping.
"""

from authchain.events import AuthenticationEvent, AuthEvent, EventBus
from authchain.exceptions import (
    AuthChainError,
    ConfigError,
    InvalidPluginError,
    NoResultError,
    PluginError,
)
from authchain.result import Result, ResultState
from authchain.service import AuthenticationService

__version__ = "0.1.0"

__all__ = [
    "AuthChainError",
    "AuthEvent",
    "AuthenticationEvent",
    "AuthenticationService",
    "ConfigError",
    "EventBus",
    "InvalidPluginError",
    "NoResultError",
    "PluginError",
    "Result",
    "ResultState",
]
