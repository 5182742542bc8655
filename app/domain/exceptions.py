"""Domain exceptions.

Errors raised below the HTTP layer. Each carries the HTTP status and
machine-readable error code the global exception handler responds with.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    status_code: int = 500
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, details: list[dict[str, Any]] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional list of error detail entries.
        """
        super().__init__(message)
        self.message = message
        self.details = details or []


class ValidationError(DomainError):
    """Raised when a request is malformed or misses a required field.

    Details hold one ``{"field": ..., "message": ...}`` entry per field.
    """

    status_code = 400
    error_code = "VALIDATION_ERROR"


class NotFoundError(DomainError):
    """Raised when an entity id is not present."""

    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        """Initialize not found error.

        Args:
            entity_type: Type of entity (e.g., "CatalogBrand").
            entity_id: ID of the missing entity.
        """
        super().__init__(f"{entity_type} {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class ConflictError(DomainError):
    """Raised when a write violates a foreign-key or uniqueness constraint."""

    status_code = 409
    error_code = "CONFLICT"
