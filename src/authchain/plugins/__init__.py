"""Plugin layer for authchain -- capability interfaces, registry, and discovery.

A plugin is any object implementing at least one capability interface:

* :class:`EventAwarePlugin` -- attaches listeners to the event bus.
* :class:`ExtractionPlugin` -- extracts credentials from a request.
* :class:`AuthenticationPlugin` -- verifies credentials.
* :class:`ChallengePlugin` -- prompts the client for credentials.
* :class:`ResetPlugin` -- forgets stored credentials.

Third-party packages expose plugins through the ``authchain.plugins``
entry-point group; :class:`~authchain.plugins.manager.PluginManager`
discovers and loads them.
"""

from authchain.plugins.base import (
    AuthenticationPlugin,
    Capability,
    ChallengePlugin,
    Credentials,
    EventAwarePlugin,
    ExtractionPlugin,
    ResetPlugin,
    classify,
)
from authchain.plugins.registry import PluginRegistry

__all__ = [
    "AuthenticationPlugin",
    "Capability",
    "ChallengePlugin",
    "Credentials",
    "EventAwarePlugin",
    "ExtractionPlugin",
    "PluginRegistry",
    "ResetPlugin",
    "classify",
]
