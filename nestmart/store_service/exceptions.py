"""
Exception classes for the store service.

Route handlers and dependencies raise these; the handlers registered in
``main.create_app`` turn them into HTTP responses.
"""
from typing import Any, Optional


class StoreServiceError(Exception):
    """Base exception for all store service errors."""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(StoreServiceError):
    """Missing secret material or an unknown role in a route declaration."""


# ---------------- Authentication ----------------

class InvalidCredentials(StoreServiceError):
    """Login failed. Unknown email and wrong password look the same."""

    status_code = 401

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class Unauthenticated(StoreServiceError):
    """No usable bearer token on the request."""

    status_code = 401

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, code="UNAUTHENTICATED")


class TokenInvalid(StoreServiceError):
    """Token signature, structure or claims are wrong."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, code="TOKEN_INVALID")


class TokenExpired(StoreServiceError):
    """Token is past its exp claim."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class Forbidden(StoreServiceError):
    """Authenticated, but the role is not allowed on this route."""

    status_code = 403

    def __init__(self):
        super().__init__("Forbidden", code="FORBIDDEN")


# ---------------- Resources ----------------

class NotFoundError(StoreServiceError):
    status_code = 404


class EmailAlreadyRegistered(StoreServiceError):
    status_code = 400

    def __init__(self):
        super().__init__("Email already registered", code="EMAIL_TAKEN")


class PasswordPolicyError(StoreServiceError):
    status_code = 422
