"""Client-side error taxonomy."""

from __future__ import annotations


class ClientError(Exception):
    """Base class for failures a view controller must compensate for."""


class TransportFailure(ClientError):
    """Network error or aborted request; no HTTP response was received."""


class RequestFailed(ClientError):
    """The server answered with a non-success status."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class StaleResponse(ClientError):
    """A list-fetch response superseded by a newer request."""


__all__ = ["ClientError", "TransportFailure", "RequestFailed", "StaleResponse"]
