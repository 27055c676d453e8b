"""Domain errors raised by services and mapped to HTTP responses in src.main."""

from fastapi import status


class ServiceError(Exception):
    """Base class for errors a service reports back to the API layer."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(ServiceError):
    """Missing, malformed or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class NotFoundError(ServiceError):
    """Referenced row does not exist (or does not belong to the caller)."""

    status_code = status.HTTP_404_NOT_FOUND


class UpstreamError(ServiceError):
    """A call to an external provider failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
