"""Ordered, capability-indexed plugin registry.

:class:`PluginRegistry` keeps every registered plugin in registration order
and, next to it, one ordered sub-registry per
:class:`~authchain.plugins.base.Capability`. Plugins are classified once
when they are added, so the authentication workflow iterates typed lists
instead of checking types on every call.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from authchain.exceptions import InvalidPluginError
from authchain.plugins.base import Capability, classify


class PluginRegistry:
    """Append-only store of plugins, indexed by capability."""

    def __init__(self) -> None:
        self._plugins: list[Any] = []
        self._by_capability: dict[Capability, list[Any]] = {
            capability: [] for capability in Capability
        }

    @staticmethod
    def validate(plugin: Any) -> frozenset[Capability]:
        """Return the capabilities of *plugin* without registering it.

        Raises:
            InvalidPluginError: If *plugin* implements no known capability.
        """
        capabilities = classify(plugin)
        if not capabilities:
            raise InvalidPluginError(
                f"{type(plugin).__name__} does not implement any known plugin interface"
            )
        return capabilities

    def add(self, plugin: Any) -> frozenset[Capability]:
        """Classify and append *plugin*.

        Returns:
            The capabilities the plugin was registered under.

        Raises:
            InvalidPluginError: If *plugin* implements no known capability.
                The registry is left unchanged.
        """
        capabilities = self.validate(plugin)
        self._plugins.append(plugin)
        for capability in Capability:
            if capability in capabilities:
                self._by_capability[capability].append(plugin)
        return capabilities

    def with_capability(self, capability: Capability) -> tuple[Any, ...]:
        """Return the plugins registered under *capability*, in registration order."""
        return tuple(self._by_capability[capability])

    def __iter__(self) -> Iterator[Any]:
        return iter(tuple(self._plugins))

    def __len__(self) -> int:
        return len(self._plugins)
