"""Errors the controllers raise; the API layer maps them to HTTP responses."""


class ApiError(Exception):
    """Base class for errors that carry an HTTP status and a client-safe message."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code}, message={self.message!r})"


class ValidationError(ApiError):
    status_code = 400


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    status_code = 409


class UpstreamError(ApiError):
    """Unexpected failure talking to the database or the file store."""

    status_code = 500


__all__ = [
    "ApiError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "UpstreamError",
]
