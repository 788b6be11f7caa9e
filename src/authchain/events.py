"""Synchronous publish/subscribe bus with short-circuit semantics.

This module provides the pieces the authentication workflow uses to let
outside code take part without being a plugin phase:

* :class:`AuthEvent` -- the closed set of events the
  :class:`~authchain.service.AuthenticationService` triggers itself.
* :class:`EventBus` -- a name-keyed listener registry. Triggering an event
  calls listeners in attachment order and stops at the first accepted
  return value.
* :class:`AuthenticationEvent` -- the context object passed to listeners of
  the built-in events.

Plugins implementing
:class:`~authchain.plugins.base.EventAwarePlugin` receive the service's bus
at registration time and may attach to built-in or custom event names.

Example::

    bus = EventBus()

    @bus.attach(AuthEvent.PRE)
    def allow_health_checks(event):
        if event.request.path == "/health":
            return Result.success("anonymous")
        return None
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Union

if TYPE_CHECKING:
    from authchain.service import AuthenticationService

Listener = Callable[..., Any]


class AuthEvent(str, enum.Enum):
    """Events triggered by :meth:`AuthenticationService.authenticate`."""

    PRE = "authenticate.pre"
    POST = "authenticate.post"


EventName = Union[AuthEvent, str]


@dataclass
class AuthenticationEvent:
    """Context object handed to ``authenticate.pre`` and ``authenticate.post`` listeners.

    The request and response are passed through untouched; listeners may
    mutate the response (e.g. to add headers).

    Attributes:
        name: The event being triggered.
        request: The inbound request object.
        response: The outbound response object.
        service: The service running the workflow.
    """

    name: str
    request: Any
    response: Any
    service: AuthenticationService


def _not_none(value: Any) -> bool:
    return value is not None


def _key(name: EventName) -> str:
    return name.value if isinstance(name, AuthEvent) else name


class EventBus:
    """Name-keyed listener registry.

    Listeners are plain callables. They are invoked synchronously on the
    caller's thread, in the order they were attached.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def attach(
        self, name: EventName, listener: Optional[Listener] = None
    ) -> Any:
        """Register *listener* for the event *name*.

        Can be used directly or as a decorator (``@bus.attach("name")``).

        Returns:
            The listener itself, or a decorator when *listener* is omitted.
        """
        if listener is None:

            def decorator(func: Listener) -> Listener:
                return self.attach(name, func)

            return decorator

        self._listeners.setdefault(_key(name), []).append(listener)
        return listener

    def detach(self, name: EventName, listener: Listener) -> bool:
        """Remove *listener* from the event *name*.

        Returns:
            ``True`` if the listener was attached and has been removed.
        """
        listeners = self._listeners.get(_key(name), [])
        try:
            listeners.remove(listener)
        except ValueError:
            return False
        return True

    def listeners(self, name: EventName) -> tuple[Listener, ...]:
        """Return the listeners attached to *name* in invocation order."""
        return tuple(self._listeners.get(_key(name), ()))

    def trigger(
        self,
        name: EventName,
        *args: Any,
        until: Optional[Callable[[Any], bool]] = None,
        **kwargs: Any,
    ) -> Any:
        """Invoke the listeners of *name* until one produces an accepted value.

        Every listener is called with ``*args`` and ``**kwargs``. Iteration
        stops at the first return value for which *until* is true; that value
        is returned.

        Args:
            name: The event to trigger.
            until: Predicate deciding whether a return value short-circuits.
                Defaults to "is not ``None``".

        Returns:
            The short-circuiting value, or ``None`` if no listener produced
            one.
        """
        accept = until or _not_none
        # Snapshot so listeners may attach or detach while being triggered.
        for listener in tuple(self._listeners.get(_key(name), ())):
            value = listener(*args, **kwargs)
            if accept(value):
                return value
        return None
