"""Service-layer errors mapped to HTTP responses in src.main."""

from fastapi import status


class ServiceError(Exception):
    """Base class for errors raised by the household services."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class Forbidden(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You don't have permission to perform this action"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class Conflict(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


class Expired(ServiceError):
    status_code = status.HTTP_410_GONE
    default_detail = "Invitation has expired"


class DependencyFailure(ServiceError):
    """An external collaborator (email, datastore) failed."""


class EmailDeliveryError(DependencyFailure):
    default_detail = "Email delivery failed"
