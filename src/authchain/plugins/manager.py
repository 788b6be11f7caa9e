"""Plugin manager -- entry-point discovery and service construction.

This module contains :class:`PluginManager`, which discovers plugins
registered as Python entry points, applies the enable/disable filtering from
:class:`~authchain.models.PluginsConfig`, and builds a ready-to-use
:class:`~authchain.service.AuthenticationService` from them.

The entry-point group used for discovery is ``authchain.plugins``.
Distributions register plugin classes by declaring an entry point under this
group in their ``pyproject.toml``::

    [project.entry-points."authchain.plugins"]
    http-basic = "my_package.basic:HttpBasicPlugin"
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Any, Optional

from authchain.exceptions import InvalidPluginError, PluginError
from authchain.models import AuthChainConfig
from authchain.plugins.base import classify
from authchain.service import AuthenticationService

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "authchain.plugins"
"""The entry-point group name used for plugin discovery."""


class PluginManager:
    """Discovers plugins and assembles them into an authentication service.

    Example:
        Typical usage::

            manager = PluginManager(config)
            manager.discover()
            service = manager.get_service()
    """

    def __init__(self, config: Optional[AuthChainConfig] = None) -> None:
        self._config = config if config is not None else AuthChainConfig()
        self._plugins: dict[str, Any] = {}
        self._service: Optional[AuthenticationService] = None

    @property
    def config(self) -> AuthChainConfig:
        return self._config

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def discover(self) -> list[str]:
        """Discover and load plugins via Python entry points.

        Iterates over all entry points in the ``authchain.plugins`` group,
        filters them against the enabled/disabled lists, instantiates each
        plugin class with its configured options, and loads it with
        :meth:`load_plugin`.

        Returns:
            Names of the plugins that were loaded. Plugins that fail to load
            are logged as warnings and skipped.
        """
        settings = self._config.plugins
        enabled_set = set(settings.enabled)
        disabled_set = set(settings.disabled)
        loaded_names: list[str] = []

        for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            name = ep.name

            if enabled_set and name not in enabled_set:
                logger.debug("Plugin '%s' not in enabled list, skipping", name)
                continue
            if name in disabled_set:
                logger.debug("Plugin '%s' is disabled, skipping", name)
                continue

            try:
                plugin_cls = ep.load()
                plugin = plugin_cls(**settings.options.get(name, {}))
                self.load_plugin(name, plugin)
                loaded_names.append(name)
            except Exception as exc:
                logger.warning("Failed to load plugin '%s': %s", name, exc)

        return loaded_names

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_plugin(self, name: str, plugin: Any) -> None:
        """Register a plugin instance under *name*.

        Invalidates the cached service so the next :meth:`get_service` call
        includes the new plugin.

        Raises:
            PluginError: If a plugin with the same *name* is already loaded.
            InvalidPluginError: If *plugin* implements no known capability.
        """
        if name in self._plugins:
            raise PluginError(f"Plugin '{name}' is already loaded")
        if not classify(plugin):
            raise InvalidPluginError(
                f"{type(plugin).__name__} does not implement any known plugin interface"
            )

        self._plugins[name] = plugin
        self._service = None
        logger.info("Loaded plugin '%s' (%s)", name, type(plugin).__name__)

    # ------------------------------------------------------------------
    # Querying
    # ------------------------------------------------------------------

    def get_plugin(self, name: str) -> Any:
        """Return the plugin loaded under *name*.

        Raises:
            PluginError: If no plugin with the given *name* is loaded.
        """
        try:
            return self._plugins[name]
        except KeyError:
            raise PluginError(f"Plugin '{name}' is not loaded") from None

    def describe_plugin(self, name: str) -> dict[str, Any]:
        """Describe one loaded plugin: name, class path, and capabilities."""
        plugin = self.get_plugin(name)
        plugin_type = type(plugin)
        return {
            "name": name,
            "type": f"{plugin_type.__module__}.{plugin_type.__qualname__}",
            "capabilities": sorted(c.value for c in classify(plugin)),
        }

    def list_plugins(self) -> list[dict[str, Any]]:
        """Describe every loaded plugin, in load order."""
        return [self.describe_plugin(name) for name in self._plugins]

    def ordered_names(self) -> list[str]:
        """Plugin names in registration order.

        Names listed in ``plugins.order`` come first, in that order; the
        remaining plugins follow in load order. Names in ``order`` that were
        not loaded are ignored.
        """
        ordered = [name for name in self._config.plugins.order if name in self._plugins]
        ordered.extend(name for name in self._plugins if name not in ordered)
        return ordered

    # ------------------------------------------------------------------
    # Service
    # ------------------------------------------------------------------

    def get_service(self) -> AuthenticationService:
        """Return an :class:`AuthenticationService` with all loaded plugins.

        The service is created lazily and cached until another plugin is
        loaded.
        """
        if self._service is None:
            service = AuthenticationService()
            for name in self.ordered_names():
                service.add_plugin(self._plugins[name])
            self._service = service
        return self._service


def create_service(config: Optional[AuthChainConfig] = None) -> AuthenticationService:
    """Discover entry-point plugins and return a configured service.

    Args:
        config: Configuration to apply; defaults to
            :func:`authchain.config.load_config`.
    """
    if config is None:
        from authchain.config import load_config

        config = load_config()
    manager = PluginManager(config)
    manager.discover()
    return manager.get_service()
