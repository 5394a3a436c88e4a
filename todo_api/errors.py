"""Domain errors raised by the stores, the token service and the access gate.

Every error carries the HTTP status the API layer should answer with, but
nothing in here builds a response; see ``error_handlers``.
"""

from typing import Any, Dict


class TodoApiError(Exception):
    """Base exception for all Mini Todo API errors."""

    def __init__(self, message: str, code: str = "TODO_API_ERROR", status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to API response dict."""
        return {"error": self.message, "code": self.code}


class InvalidInputError(TodoApiError):
    """Raised when a required field is missing or empty."""

    def __init__(self, message: str = "invalid input"):
        super().__init__(message, code="INVALID_INPUT", status_code=400)


class DuplicateUsernameError(TodoApiError):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str):
        super().__init__("username taken", code="USERNAME_TAKEN", status_code=409)
        self.username = username


class InvalidCredentialsError(TodoApiError):
    """Raised for an unknown username or a wrong password (deliberately the same error)."""

    def __init__(self):
        super().__init__("invalid credentials", code="INVALID_CREDENTIALS", status_code=401)


class UnauthorizedError(TodoApiError):
    """Raised when a protected operation is called without a valid token.

    ``reason`` is for logs only; clients always see the same message.
    """

    def __init__(self, reason: str = "unauthorized"):
        super().__init__("unauthorized", code="UNAUTHORIZED", status_code=401)
        self.reason = reason


class TokenError(UnauthorizedError):
    """Base for token verification failures."""


class MalformedTokenError(TokenError):
    def __init__(self, reason: str = "malformed token"):
        super().__init__(reason)


class BadSignatureError(TokenError):
    def __init__(self, reason: str = "bad signature"):
        super().__init__(reason)


class TokenExpiredError(TokenError):
    def __init__(self, reason: str = "token expired"):
        super().__init__(reason)


class NotFoundError(TodoApiError):
    """Raised when a task does not exist or belongs to another user."""

    def __init__(self):
        super().__init__("not found", code="NOT_FOUND", status_code=404)
