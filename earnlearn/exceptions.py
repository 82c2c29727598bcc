"""Exceptions raised by the Earn-n-Learn wallet client."""

from __future__ import annotations

from typing import Optional


class EarnLearnError(Exception):
    """Base class for all client errors."""


class MissingTokenError(EarnLearnError):
    """No bearer token is stored for the current session."""

    def __init__(self, message: str = "No auth token found"):
        super().__init__(message)


class ValidationError(EarnLearnError, ValueError):
    """Request input rejected before anything was sent."""


class ApiError(EarnLearnError):
    """The backend answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str, path: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.path = path
        super().__init__(f"{status_code} {message}" + (f" ({path})" if path else ""))

    @property
    def is_auth_error(self) -> bool:
        return self.status_code in (401, 403)


class ResponseFormatError(EarnLearnError, ValueError):
    """A 2xx response whose body does not have the expected shape."""

    def __init__(self, path: str, expected: str, body=None):
        self.path = path
        self.body = body
        super().__init__(f"Unexpected response from {path}: expected {expected}, got {type(body).__name__}")
