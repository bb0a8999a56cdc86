"""
Error taxonomy shared by the service and API layers.

Services raise subclasses of ``ServiceError``; each carries an
``ErrorKind`` which the exception handler in ``core.middleware`` maps
to an HTTP status code.  Classification never depends on the message
text.
"""

from enum import Enum
from typing import List, Optional


class ErrorKind(str, Enum):
    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    FORBIDDEN = "forbidden"
    INTERNAL = "internal"


STATUS_BY_KIND = {
    ErrorKind.VALIDATION_FAILED: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.INTERNAL: 500,
}


class ServiceError(Exception):
    """Base class for expected failures of an API operation."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class ValidationFailed(ServiceError):
    """Entity validation rejected the data; ``errors`` lists every violation."""

    kind = ErrorKind.VALIDATION_FAILED

    def __init__(self, errors: List[str], message: str = "Validation failed") -> None:
        super().__init__(message, list(errors))


class BadRequest(ServiceError):
    """A request gate or the body parser rejected the request."""

    kind = ErrorKind.VALIDATION_FAILED


class NotFound(ServiceError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, entity_id) -> None:
        super().__init__(f"{entity} with ID {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class Conflict(ServiceError):
    kind = ErrorKind.CONFLICT


class Forbidden(ServiceError):
    kind = ErrorKind.FORBIDDEN
