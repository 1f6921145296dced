"""
NER Intel Exceptions
"""

from __future__ import annotations


class NerIntelError(Exception):
    """Base class for service errors."""


class ExternalServiceError(NerIntelError):
    """
    Raised when an outbound call fails.

    Covers transport errors, non-2xx responses and undecodable bodies.
    ``status_code`` is None when no response was received.
    """

    def __init__(self, service: str, message: str, status_code: int | None = None):
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service}: {message}")


class UnknownEntrypointError(NerIntelError):
    """Raised when no entrypoint is registered under the requested key."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown entrypoint: {key}")
