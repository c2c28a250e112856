"""Exceptions raised by the client.

Transport-tier and decode failures are exceptions that propagate to the caller
of the operation. Protocol-tier failures (``ok: false``) are not exceptions;
they come back as a normal response envelope.
"""

from typing import Optional


class SlackRpcError(Exception):
    """Base class for every error raised by slack_rpc."""


class TransportError(SlackRpcError):
    """The HTTP call could not be completed (DNS, TLS, timeout, reset)."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class DecodeError(SlackRpcError):
    """The response body is not a valid envelope."""

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message)
        self.raw = raw


class UploadFailed(SlackRpcError):
    def __init__(self, step: str, error: Optional[str]):
        super().__init__(f"upload failed at {step}: {error}")
        self.step = step
        self.error = error
