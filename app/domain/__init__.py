"""Domain layer - error taxonomy shared by services and the HTTP layer."""

from app.domain.exceptions import ConflictError, DomainError, NotFoundError, ValidationError

__all__ = [
    "ConflictError",
    "DomainError",
    "NotFoundError",
    "ValidationError",
]
