"""
Error taxonomy for the authoring client.

Two kinds of failure reach callers:

- ``ProtocolMisuseError``: the caller broke a precondition. Raised
  synchronously, before any request is built or sent.
- ``TransportError``: the server answered with a non-2xx status or the
  request never completed. The server payload is carried through untouched.

Superseded or duplicate live-search calls are not errors at all; they are
dropped and only logged.
"""

from __future__ import annotations

from typing import Any


class AuthoringError(RuntimeError):
    """Base class for every error raised by this package."""


class ProtocolMisuseError(AuthoringError):
    pass


class EmptyAssociationError(ProtocolMisuseError):
    """An association request was built from an empty list."""


class CollectionAlreadySettledError(ProtocolMisuseError):
    """A deferred collection was resolved or rejected a second time."""


class UnknownStatusError(ProtocolMisuseError):
    """A status filter was asked to toggle a name it does not track."""


class FetchCancelledError(AuthoringError):
    """The task populating a deferred collection was cancelled before it finished."""


class TransportError(AuthoringError):
    def __init__(
        self,
        payload: Any,
        *,
        status_code: int | None = None,
        method: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(f"{method or '?'} {url or '?'} failed ({status_code or 'no response'}): {payload!r}")
        self.payload = payload
        self.status_code = status_code
        self.method = method
        self.url = url

    @property
    def is_network_error(self) -> bool:
        return self.status_code is None

    def to_log_message(self) -> str:
        """Format error for logging."""
        status = self.status_code if self.status_code is not None else "network"
        return f"[{status}] {self.method} {self.url}: {self.payload!r}"
