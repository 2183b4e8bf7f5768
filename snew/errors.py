from __future__ import annotations

from typing import Optional


class SnewError(Exception):
    """
    Base class for every error raised by this library.

    Callers that do not care about the failure kind can catch this one.
    """


class TransportError(SnewError):
    """
    The underlying HTTP transport failed (DNS, connection, timeout,
    malformed header value). Never retried here.
    """


class AuthenticationError(SnewError):
    """
    Authentication failed or an authenticated call returned a status we
    do not handle.

    Covers:
    - credentials rejected at the token exchange,
    - a token missing after a login that reported success,
    - unexpected status codes on authenticated calls,
    - a challenge that survived the single re-authentication retry.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class DecodeError(SnewError):
    """
    A response body could not be decoded into the expected shape.
    """
