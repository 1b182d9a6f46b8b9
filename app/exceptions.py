from typing import Any, Mapping, Optional


class ServiceError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Unexpected error"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"error": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(ServiceError):
    """Raised when input data is missing or malformed. http_status is 400."""

    http_status = 400
    default_message = "Invalid input"


class NotFoundError(ServiceError):
    """Raised when a referenced entity does not exist. http_status is 404."""

    http_status = 404
    default_message = "Not found"


class ConflictError(ServiceError):
    """Raised on a uniqueness or dependency violation (duplicate consumer name,
    deleting a consumer that still has bills). http_status is 400.
    """

    http_status = 400
    default_message = "Conflict"


class UnexpectedError(ServiceError):
    """Raised when the store or other infrastructure fails. http_status is 500."""

    http_status = 500
    default_message = "Unexpected error"


class AggregationError(UnexpectedError):
    """Raised when a summary cannot be computed; no partial result is returned."""

    default_message = "Aggregation failed"
