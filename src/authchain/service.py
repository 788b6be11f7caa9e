"""Authentication service -- the plugin pipeline.

:class:`AuthenticationService` owns a
:class:`~authchain.plugins.registry.PluginRegistry` and an
:class:`~authchain.events.EventBus` and runs two workflows over them:

* :meth:`~AuthenticationService.authenticate` -- ``authenticate.pre``
  event, extraction phase, authentication phase, ``authenticate.post``
  event, challenge phase. The earliest phase that produces a
  :class:`~authchain.result.Result` wins and ends the call.
* :meth:`~AuthenticationService.reset_credentials` -- every reset plugin,
  in registration order.

Exceptions raised by plugins or listeners are not caught; they reach the
caller unchanged.

Example::

    service = AuthenticationService()
    service.add_plugin(HeaderTokenPlugin()).add_plugin(TokenTablePlugin(tokens))
    result = service.authenticate(request, response)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from authchain.events import AuthenticationEvent, AuthEvent, EventBus
from authchain.exceptions import NoResultError, PluginError
from authchain.plugins.base import Capability, Credentials
from authchain.plugins.registry import PluginRegistry
from authchain.result import Result

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Extraction steps
# ------------------------------------------------------------------


@dataclass(frozen=True)
class Defer:
    """The plugin had nothing to offer; try the next one."""


@dataclass(frozen=True)
class Proceed:
    """The plugin produced credentials for the authentication phase."""

    credentials: Credentials


@dataclass(frozen=True)
class Conclude:
    """The plugin produced a final result."""

    result: Result


Step = Union[Defer, Proceed, Conclude]


def extraction_step(value: Any) -> Step:
    """Normalise an :meth:`ExtractionPlugin.extract_credentials` return value."""
    if value is None:
        return Defer()
    if isinstance(value, Result):
        return Conclude(value)
    return Proceed(value)


def _is_result(value: Any) -> bool:
    return isinstance(value, Result)


class AuthenticationService:
    """Runs registered plugins to authenticate requests.

    Plugins are evaluated strictly in registration order. Registration is
    expected to finish before the service handles requests; the service
    does no locking of its own.
    """

    def __init__(self, events: Optional[EventBus] = None) -> None:
        self._registry = PluginRegistry()
        self._events = events if events is not None else EventBus()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_plugin(self, plugin: Any) -> AuthenticationService:
        """Register *plugin* and return the service for chaining.

        Event-aware plugins get :meth:`attach_to_events` called with this
        service's event bus before they are registered, so a plugin whose
        attachment fails is not left in the registry.

        Raises:
            InvalidPluginError: If *plugin* implements none of the
                capability interfaces.
        """
        capabilities = self._registry.validate(plugin)
        if Capability.EVENT_AWARE in capabilities:
            plugin.attach_to_events(self._events)
        self._registry.add(plugin)
        logger.debug(
            "Registered plugin %s (%s)",
            type(plugin).__name__,
            ", ".join(sorted(c.value for c in capabilities)),
        )
        return self

    @property
    def plugins(self) -> tuple[Any, ...]:
        """All registered plugins, in registration order."""
        return tuple(self._registry)

    @property
    def event_manager(self) -> EventBus:
        """The event bus owned by this service."""
        return self._events

    def get_event_manager(self) -> EventBus:
        return self._events

    # ------------------------------------------------------------------
    # Workflows
    # ------------------------------------------------------------------

    def authenticate(self, request: Any, response: Any) -> Result:
        """Authenticate *request*, possibly writing a challenge to *response*.

        Phases run in this order, and the first one to yield a result ends
        the call:

        1. ``authenticate.pre`` listeners.
        2. Extraction plugins. The first one returning credentials hands
           them to step 3; one returning a result ends the call.
        3. Authentication plugins, given the extracted credentials.
        4. ``authenticate.post`` listeners.
        5. Challenge plugins. All of them run; if any issued a challenge a
           ``CHALLENGE`` result is returned.

        Raises:
            NoResultError: If no phase produced a result.
            PluginError: If an authentication plugin returned something
                other than a result or ``None``.
        """
        pre = self._events.trigger(
            AuthEvent.PRE,
            AuthenticationEvent(AuthEvent.PRE.value, request, response, self),
            until=_is_result,
        )
        if pre is not None:
            logger.debug("authenticate.pre listener produced a result")
            return pre

        result = self._extract_and_authenticate(request, response)
        if result is not None:
            return result

        post = self._events.trigger(
            AuthEvent.POST,
            AuthenticationEvent(AuthEvent.POST.value, request, response, self),
            until=_is_result,
        )
        if post is not None:
            logger.debug("authenticate.post listener produced a result")
            return post

        if self._challenge(request, response):
            return Result.challenge()

        logger.debug("No plugin was able to generate a result")
        raise NoResultError("No plugin was able to generate a result")

    def reset_credentials(self, request: Any) -> None:
        """Call every reset plugin with *request*, in registration order."""
        for plugin in self._registry.with_capability(Capability.RESET):
            plugin.reset_credentials(request)

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _extract_and_authenticate(
        self, request: Any, response: Any
    ) -> Optional[Result]:
        for plugin in self._registry.with_capability(Capability.EXTRACTION):
            step = extraction_step(plugin.extract_credentials(request, response))
            if isinstance(step, Conclude):
                logger.debug("%s short-circuited extraction", type(plugin).__name__)
                return step.result
            if isinstance(step, Proceed):
                logger.debug("%s extracted credentials", type(plugin).__name__)
                return self._authenticate_credentials(step.credentials)
        return None

    def _authenticate_credentials(self, credentials: Credentials) -> Optional[Result]:
        for plugin in self._registry.with_capability(Capability.AUTHENTICATION):
            result = plugin.authenticate_credentials(credentials)
            if result is None:
                continue
            if not isinstance(result, Result):
                raise PluginError(
                    f"{type(plugin).__name__}.authenticate_credentials returned "
                    f"{type(result).__name__}, expected Result or None"
                )
            logger.debug("%s authenticated credentials", type(plugin).__name__)
            return result
        return None

    def _challenge(self, request: Any, response: Any) -> bool:
        challenged = False
        for plugin in self._registry.with_capability(Capability.CHALLENGE):
            if plugin.challenge(request, response):
                logger.debug("%s issued a challenge", type(plugin).__name__)
                challenged = True
        return challenged
