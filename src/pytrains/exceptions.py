"""Custom exception hierarchy for pytrains."""

from __future__ import annotations


class TrainsError(Exception):
    """Base exception for all pytrains errors."""


class TrainsConfigError(TrainsError):
    """Invalid or missing configuration."""


class TrainsTransportError(TrainsError):
    """HTTP-level failure (network, non-200, timeout, invalid JSON).

    A transport error aborts the current poll cycle before any state is
    touched; the client reports it and schedules the next cycle as usual.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)
