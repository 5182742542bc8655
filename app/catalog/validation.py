"""Request validation for catalog writes.

Validators return a ``ValidationResult`` instead of raising, so services
can decide how to report failures.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from pydantic.alias_generators import to_camel

from app.catalog.dtos import CreateItemRequest, UpdateItemRequest
from app.catalog.models import (
    MAX_DESCRIPTION_LENGTH,
    MAX_INTEGER,
    MAX_PICTURE_FILE_NAME_LENGTH,
    MAX_PRICE,
)

MAX_NAME_LENGTH = 100


@dataclass(frozen=True)
class FieldError:
    """Validation failure of a single field."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass
class ValidationResult:
    """Outcome of validating a request: ok, or a list of field errors."""

    errors: list[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, field_name: str, message: str) -> None:
        self.errors.append(FieldError(field_name, message))

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.extend(other.errors)
        return self


def validate_name(field_name: str, value: Any, label: str | None = None) -> ValidationResult:
    """Require a non-blank string of at most ``MAX_NAME_LENGTH`` characters."""
    result = ValidationResult()
    label = label or field_name

    if value is None or not isinstance(value, str) or not value.strip():
        result.add(field_name, f"You should specify the {label}")
    elif len(value.strip()) > MAX_NAME_LENGTH:
        result.add(field_name, f"{label} must be at most {MAX_NAME_LENGTH} characters")
    return result


def validate_id(field_name: str, value: Any, label: str = "ID") -> ValidationResult:
    """Require a positive integer id that fits the id column."""
    result = ValidationResult()

    if value is None:
        result.add(field_name, f"You should specify the {label}")
    elif isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= MAX_INTEGER:
        result.add(field_name, f"You should correctly specify the {label}")
    return result


def validate_non_negative(field_name: str, value: Any) -> ValidationResult:
    result = ValidationResult()
    if value is None:
        return result
    if value < 0:
        result.add(field_name, f"{field_name} must not be negative")
    elif value > MAX_INTEGER:
        result.add(field_name, f"{field_name} must be at most {MAX_INTEGER}")
    return result


def validate_max_length(field_name: str, value: str | None, max_length: int) -> ValidationResult:
    """Optional text must fit its column."""
    result = ValidationResult()
    if value is not None and len(value) > max_length:
        result.add(field_name, f"{field_name} must be at most {max_length} characters")
    return result


def validate_item(request: CreateItemRequest) -> ValidationResult:
    """Validate the fields of a create or update item request."""
    result = ValidationResult()

    if isinstance(request, UpdateItemRequest):
        result.merge(validate_id("id", request.id))

    result.merge(validate_name("name", request.name, "Item Name"))
    result.merge(validate_max_length("description", request.description, MAX_DESCRIPTION_LENGTH))

    if request.price is None:
        result.add("price", "You should specify the Price")
    elif request.price < Decimal("0"):
        result.add("price", "Price must not be negative")
    elif request.price > MAX_PRICE:
        result.add("price", f"Price must be at most {MAX_PRICE}")

    result.merge(
        validate_max_length(
            "pictureFileName", request.picture_file_name, MAX_PICTURE_FILE_NAME_LENGTH
        )
    )
    result.merge(validate_id("catalogBrandId", request.catalog_brand_id, "Brand ID"))
    result.merge(validate_id("catalogTypeId", request.catalog_type_id, "Type ID"))

    for name in ("available_stock", "restock_threshold", "max_stock_threshold"):
        result.merge(validate_non_negative(to_camel(name), getattr(request, name)))

    return result
