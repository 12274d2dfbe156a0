"""
Error taxonomy for Aka Platform.

Every failure the service can report maps to exactly one HTTP status.
The resolver raises these from its validation helpers and converts them
into a `ResolverResult` at its entry point; the API layer raises the
store-related ones and turns them into responses with an exception handler.

LLM Prompt Example:
    "Show how a small exception hierarchy carrying HTTP status codes keeps
    business logic framework-free while still producing precise responses."
"""

from http import HTTPStatus

__all__ = [
    "AliasError",
    "InvalidAlias",
    "InvalidBody",
    "Unauthorized",
    "NotFound",
    "StoreConflict",
    "StoreFailure",
]


class AliasError(Exception):
    """Base class for all alias handling errors."""

    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message: str = "Alias request failed."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidAlias(AliasError):
    status = HTTPStatus.BAD_REQUEST
    default_message = "Alias must not be empty."


class InvalidBody(AliasError):
    status = HTTPStatus.BAD_REQUEST
    default_message = "Request body must be a valid absolute URL."


class Unauthorized(AliasError):
    status = HTTPStatus.UNAUTHORIZED
    default_message = "Missing or invalid X-Authorization header."


class NotFound(AliasError):
    status = HTTPStatus.NOT_FOUND
    default_message = "Alias not found."


class StoreConflict(AliasError):
    """Raised when an optimistic-concurrency check fails on upsert."""

    status = HTTPStatus.CONFLICT
    default_message = "Alias was modified concurrently; retry the request."


class StoreFailure(AliasError):
    status = HTTPStatus.SERVICE_UNAVAILABLE
    default_message = "Alias store unavailable."
