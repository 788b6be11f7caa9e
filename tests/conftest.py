"""Shared test fixtures for authchain.

Provides stand-in request/response objects, a fresh service, and automatic
reset of the global CLI output state. Plugin doubles are built from
``unittest.mock`` with the capability interfaces as ``spec`` so that
classification sees them exactly as it would see a real plugin.
"""

from __future__ import annotations

from collections.abc import Iterator
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest

from authchain.output import reset_output
from authchain.service import AuthenticationService


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> Iterator[None]:
    """Reset the global OutputManager after every test.

    The OutputManager binds its stderr console at creation time; CliRunner
    swaps the streams per invocation.
    """
    yield
    reset_output()


@pytest.fixture
def request_() -> SimpleNamespace:
    """An inbound request stand-in with a headers dict."""
    return SimpleNamespace(path="/", headers={})


@pytest.fixture
def response() -> SimpleNamespace:
    """An outbound response stand-in with mutable status and headers."""
    return SimpleNamespace(status=200, headers={})


@pytest.fixture
def service() -> AuthenticationService:
    """A fresh service with no plugins and no listeners."""
    return AuthenticationService()


@pytest.fixture
def make_plugin():
    """Factory for spec'd plugin mocks: ``make_plugin(ExtractionPlugin, ...)``."""

    def _make(*interfaces: type, **return_values: Any) -> MagicMock:
        if len(interfaces) == 1:
            plugin = MagicMock(spec=interfaces[0])
        else:
            combined = type("CombinedPlugin", interfaces, {})
            plugin = MagicMock(spec=combined)
        for method, value in return_values.items():
            getattr(plugin, method).return_value = value
        return plugin

    return _make
