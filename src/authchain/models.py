"""Pydantic configuration models for authchain.

The configuration describes which entry-point plugins a
:class:`~authchain.plugins.manager.PluginManager` loads, in what order they
are registered with the service, and which keyword arguments each plugin
class is constructed with. It is stored as JSON; see :mod:`authchain.config`
for loading and precedence.

Example::

    {
      "plugins": {
        "enabled": [],
        "disabled": ["legacy-cookie"],
        "order": ["session", "http-basic"],
        "options": {"http-basic": {"realm": "intranet"}}
      }
    }
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PluginsConfig(BaseModel):
    """Plugin discovery and ordering settings.

    When ``enabled`` is non-empty it acts as an allowlist and only those
    plugins are loaded; otherwise every discovered plugin that is not in
    ``disabled`` is loaded. Plugins named in ``order`` are registered first,
    in that order; the rest follow in discovery order.
    """

    enabled: list[str] = Field(
        default_factory=list, description="Allowlist of plugin names (empty = all)"
    )
    disabled: list[str] = Field(
        default_factory=list, description="Plugin names never to load"
    )
    order: list[str] = Field(
        default_factory=list, description="Plugin names registered first, in order"
    )
    options: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Keyword arguments passed to each plugin's constructor",
    )


class AuthChainConfig(BaseModel):
    """Top-level authchain configuration.

    Unknown top-level keys are preserved in ``model_extra`` so applications
    can keep their own settings in the same file.
    """

    model_config = ConfigDict(extra="allow")

    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
