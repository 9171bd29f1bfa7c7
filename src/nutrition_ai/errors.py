"""Application error types mapped onto HTTP responses."""


class AppError(Exception):
    """Base error carrying the status code and a caller-safe message."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Missing or invalid request fields."""

    status_code = 400

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = list(fields or [])


class NotFoundError(AppError):
    """Requested record does not exist."""

    status_code = 404


class UpstreamError(AppError):
    """An external service failed or returned unusable data."""

    status_code = 500


class AuthError(AppError):
    """Password mismatch (401) or missing server-side secret (500)."""

    def __init__(self, message: str, status_code: int = 401) -> None:
        super().__init__(message)
        self.status_code = status_code
