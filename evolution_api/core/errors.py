"""
Error taxonomy for the Evolution API client.

Every failure surfaced by the client is an ``EvolutionAPIError`` subclass, so
callers can catch the base class or match on a specific kind while still reading
the shared fields (message, response envelope, status code, error code).
"""

from __future__ import annotations

import builtins
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ResponseEnvelope:
    """Raw HTTP response as received from the remote service."""

    status_code: int
    raw_body: str = ""


class EvolutionAPIError(Exception):
    """Base class for all Evolution API client errors."""

    default_message = "Evolution API error"
    default_status_code: int | None = None

    def __init__(
        self,
        message: str | None = None,
        response: ResponseEnvelope | None = None,
        status_code: int | None = None,
        error_code: str | None = None,
    ):
        self.message = message or self.default_message
        self.response = response
        self.status_code = (
            status_code if status_code is not None else self.default_status_code
        )
        self.error_code = error_code
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for structured logging."""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "status_code": self.status_code,
            "error_code": self.error_code,
        }

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"status_code={self.status_code!r}, error_code={self.error_code!r})"
        )


class AuthenticationError(EvolutionAPIError):
    """The api key was missing or rejected (401)."""

    default_message = "Authentication failed"
    default_status_code = 401


class AuthorizationError(EvolutionAPIError):
    """The api key is valid but not allowed to perform the operation (403)."""

    default_message = "Access denied"
    default_status_code = 403


class NotFoundError(EvolutionAPIError):
    """The requested resource does not exist (404)."""

    default_message = "Resource not found"
    default_status_code = 404


class ValidationError(EvolutionAPIError):
    """The remote service rejected the request payload (400 or 422)."""

    default_message = "Validation failed"
    default_status_code = 422

    def __init__(
        self,
        message: str | None = None,
        response: ResponseEnvelope | None = None,
        status_code: int | None = None,
        errors: Any = None,
    ):
        super().__init__(message, response, status_code)
        self.errors = errors if errors is not None else {}

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["errors"] = self.errors
        return data


class RateLimitError(EvolutionAPIError):
    """Too many requests (429)."""

    default_message = "Rate limit exceeded"
    default_status_code = 429


class ServerError(EvolutionAPIError):
    """The remote service failed (5xx)."""

    default_message = "Internal server error"
    default_status_code = 500


class TimeoutError(EvolutionAPIError, builtins.TimeoutError):
    """No response arrived before the configured timeout."""

    default_message = "Request timed out"


class ConnectionError(EvolutionAPIError, builtins.ConnectionError):
    """Network-level failure that persisted after every retry."""

    default_message = "Connection failed"

    def __init__(
        self,
        message: str | None = None,
        response: ResponseEnvelope | None = None,
        attempts: int = 0,
    ):
        super().__init__(message, response)
        self.attempts = attempts

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["attempts"] = self.attempts
        return data


class ProtocolError(EvolutionAPIError):
    """The exchange failed without a usable response (undecodable body, redirect loop)."""

    default_message = "Protocol error"


class UnexpectedStatusError(EvolutionAPIError):
    """Any non-2xx status not covered by a more specific error."""

    default_message = "Unexpected response status"


class InstanceNotConnectedError(EvolutionAPIError):
    """The instance is not in the ``open`` connection state."""

    def __init__(self, instance_name: str):
        super().__init__(
            f"Instance '{instance_name}' is not connected",
            error_code="INSTANCE_NOT_CONNECTED",
        )
        self.instance_name = instance_name


class QRCodeExpiredError(EvolutionAPIError):
    """The pairing QR code is no longer valid."""

    def __init__(self):
        super().__init__("QR code expired", error_code="QR_CODE_EXPIRED")


class InvalidNumberError(EvolutionAPIError):
    """The phone number is not registered on the messaging platform."""

    def __init__(self, number: str):
        super().__init__(f"Number '{number}' is invalid", error_code="INVALID_NUMBER")
        self.number = number


def error_for_status(
    status_code: int, response: ResponseEnvelope, errors: Any = None
) -> EvolutionAPIError | None:
    """Map a response status to the matching error, or ``None`` for 2xx."""
    if 200 <= status_code < 300:
        return None
    if status_code in (400, 422):
        return ValidationError(response=response, status_code=status_code, errors=errors)
    if status_code == 401:
        return AuthenticationError(response=response)
    if status_code == 403:
        return AuthorizationError(response=response)
    if status_code == 404:
        return NotFoundError(response=response)
    if status_code == 429:
        return RateLimitError(response=response)
    if 500 <= status_code <= 599:
        return ServerError(response=response, status_code=status_code)
    return UnexpectedStatusError(
        f"Unexpected response status: {status_code}",
        response=response,
        status_code=status_code,
    )
