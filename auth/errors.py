"""
Authentication error taxonomy.

Each error carries the HTTP status and the JSON key its message is
returned under, so the exception handler in ``api.errors`` can render
any of them without a lookup table.
"""

from __future__ import annotations


class AuthError(Exception):
    status_code = 400
    body_key = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict:
        return {self.body_key: self.message}


class ValidationError(AuthError):
    """A required field is missing or empty."""


class DuplicateEmail(AuthError):
    """The store rejected the insert on the unique email constraint."""


class NotFound(AuthError):
    status_code = 404
    body_key = "message"


class InvalidCredentials(AuthError):
    status_code = 401
    body_key = "message"


class MissingToken(AuthError):
    status_code = 401
    body_key = "message"


class InvalidToken(AuthError):
    status_code = 403
    body_key = "message"
