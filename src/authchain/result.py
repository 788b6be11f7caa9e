"""The outcome of an authentication attempt.

A :class:`Result` is the single value returned by
:meth:`~authchain.service.AuthenticationService.authenticate`. It is a
tagged value with three states:

* ``SUCCESS`` -- an identity was established; ``identity`` and
  ``metadata`` describe it.
* ``FAILURE`` -- credentials were presented but rejected; ``reason`` says
  why.
* ``CHALLENGE`` -- no definitive answer; at least one challenge plugin
  prompted the client for credentials on the response.

Results are frozen Pydantic models. Build them through the
:meth:`Result.success`, :meth:`Result.failure` and :meth:`Result.challenge`
constructors rather than setting ``state`` by hand.

Example::

    result = Result.success("alice", {"roles": ["admin"]})
    assert result.is_success()
    assert result.identity == "alice"
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class ResultState(str, enum.Enum):
    """Discriminator for the three result variants."""

    SUCCESS = "success"
    FAILURE = "failure"
    CHALLENGE = "challenge"


class Result(BaseModel):
    """Immutable authentication outcome.

    Attributes:
        state: Which variant this result is.
        identity: The authenticated identity for ``SUCCESS`` results. Any
            object the authentication plugin chooses (a user id, a user
            record, a claims dict).
        metadata: Free-form extra information attached by the plugin. Stored
            as a read-only copy of the mapping passed in.
        reason: Human-readable rejection reason for ``FAILURE`` results.
        marker: Optional value describing the challenge that was issued.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    state: ResultState
    identity: Any = None
    metadata: Mapping[str, Any] = Field(default_factory=dict)
    reason: Optional[str] = None
    marker: Any = None

    @field_validator("metadata", mode="after")
    @classmethod
    def _freeze_metadata(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @field_serializer("metadata")
    def _dump_metadata(self, value: Mapping[str, Any]) -> dict[str, Any]:
        return dict(value)

    @classmethod
    def success(
        cls, identity: Any, metadata: Optional[Mapping[str, Any]] = None
    ) -> Result:
        """Build a ``SUCCESS`` result for *identity*."""
        return cls(state=ResultState.SUCCESS, identity=identity, metadata=metadata or {})

    @classmethod
    def failure(
        cls, reason: Optional[str] = None, metadata: Optional[Mapping[str, Any]] = None
    ) -> Result:
        """Build a ``FAILURE`` result with an optional *reason*."""
        return cls(state=ResultState.FAILURE, reason=reason, metadata=metadata or {})

    @classmethod
    def challenge(cls, marker: Any = None) -> Result:
        """Build a ``CHALLENGE`` result."""
        return cls(state=ResultState.CHALLENGE, marker=marker)

    def is_success(self) -> bool:
        return self.state is ResultState.SUCCESS

    def is_failure(self) -> bool:
        return self.state is ResultState.FAILURE

    def is_challenge(self) -> bool:
        return self.state is ResultState.CHALLENGE
