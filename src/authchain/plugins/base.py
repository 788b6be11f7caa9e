"""Capability interfaces for authchain plugins.

A plugin is any object implementing at least one of the five abstract base
classes below. Each interface is narrow and independent; a single class may
inherit from several of them (a plugin that reads HTTP Basic headers will
typically be both an :class:`ExtractionPlugin` and a
:class:`ChallengePlugin`).

* :class:`EventAwarePlugin` -- subscribes itself to the service's event bus.
* :class:`ExtractionPlugin` -- pulls credentials out of a request.
* :class:`AuthenticationPlugin` -- turns credentials into a result.
* :class:`ChallengePlugin` -- prompts the client for credentials.
* :class:`ResetPlugin` -- forgets stored credentials (logout).

:func:`classify` maps an object onto the closed :class:`Capability` set and
is the only place where authchain inspects plugin types.

Example:
    Extraction and challenge in one plugin::

        class HeaderTokenPlugin(ExtractionPlugin, ChallengePlugin):
            def extract_credentials(self, request, response):
                token = request.headers.get("X-Token")
                return {"token": token} if token else None

            def challenge(self, request, response):
                response.headers["WWW-Authenticate"] = "Token"
                return True
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional, Union

from authchain.result import Result

if TYPE_CHECKING:
    from authchain.events import EventBus

Credentials = Mapping[str, Any]
"""Opaque key/value bag passed from extraction to authentication."""


class Capability(str, enum.Enum):
    """The closed set of plugin capabilities."""

    EVENT_AWARE = "event_aware"
    EXTRACTION = "extraction"
    AUTHENTICATION = "authentication"
    CHALLENGE = "challenge"
    RESET = "reset"


class EventAwarePlugin(ABC):
    """Plugin that wires itself into the event bus instead of a fixed phase."""

    @abstractmethod
    def attach_to_events(self, events: EventBus) -> None:
        """Attach listeners to *events*.

        Called exactly once, synchronously, when the plugin is registered
        with :meth:`~authchain.service.AuthenticationService.add_plugin`.

        Args:
            events: The service's own :class:`~authchain.events.EventBus`.
        """
        ...


class ExtractionPlugin(ABC):
    """Plugin that extracts credentials from an inbound request."""

    @abstractmethod
    def extract_credentials(
        self, request: Any, response: Any
    ) -> Optional[Union[Credentials, Result]]:
        """Extract credentials from *request*.

        Returns:
            * Credentials to hand to the authentication phase.
            * A :class:`~authchain.result.Result` to end the whole
              workflow immediately.
            * ``None`` to let the next extraction plugin try.
        """
        ...


class AuthenticationPlugin(ABC):
    """Plugin that verifies extracted credentials."""

    @abstractmethod
    def authenticate_credentials(self, credentials: Credentials) -> Optional[Result]:
        """Verify *credentials*.

        Returns:
            A :class:`~authchain.result.Result`, or ``None`` to defer to
            the next authentication plugin.
        """
        ...


class ChallengePlugin(ABC):
    """Plugin that asks the client for credentials when nothing else decided."""

    @abstractmethod
    def challenge(self, request: Any, response: Any) -> bool:
        """Issue a challenge by mutating *response* (status, headers, redirect).

        Returns:
            ``True`` if a challenge was issued.
        """
        ...


class ResetPlugin(ABC):
    """Plugin that can forget credentials it stored earlier."""

    @abstractmethod
    def reset_credentials(self, request: Any) -> None:
        """Drop any credentials associated with *request*."""
        ...


CAPABILITY_INTERFACES: dict[Capability, type] = {
    Capability.EVENT_AWARE: EventAwarePlugin,
    Capability.EXTRACTION: ExtractionPlugin,
    Capability.AUTHENTICATION: AuthenticationPlugin,
    Capability.CHALLENGE: ChallengePlugin,
    Capability.RESET: ResetPlugin,
}


def classify(plugin: Any) -> frozenset[Capability]:
    """Return the capabilities *plugin* implements.

    An empty set means the object is not a plugin.
    """
    return frozenset(
        capability
        for capability, interface in CAPABILITY_INTERFACES.items()
        if isinstance(plugin, interface)
    )
