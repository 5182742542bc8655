"""Tests for catalog request validation."""

from decimal import Decimal

import pytest

from app.catalog.dtos import CreateItemRequest, UpdateItemRequest
from app.catalog.models import (
    MAX_DESCRIPTION_LENGTH,
    MAX_INTEGER,
    MAX_PICTURE_FILE_NAME_LENGTH,
    MAX_PRICE,
)
from app.catalog.validation import (
    ValidationResult,
    validate_id,
    validate_item,
    validate_name,
)


def fields_of(result: ValidationResult) -> list[str]:
    return [error.field for error in result.errors]


def valid_item(**overrides) -> CreateItemRequest:
    values = {
        "name": "Mug",
        "description": "A mug",
        "price": Decimal("8.50"),
        "catalog_brand_id": 1,
        "catalog_type_id": 1,
    }
    values.update(overrides)
    return CreateItemRequest(**values)


class TestValidateName:
    """Tests for name validation."""

    def test_valid(self) -> None:
        assert validate_name("brand", "Acme").is_valid

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_names_rejected(self, value) -> None:
        result = validate_name("brand", value, "Brand Name")

        assert not result.is_valid
        assert result.errors[0].message == "You should specify the Brand Name"

    def test_too_long_rejected(self) -> None:
        result = validate_name("brand", "x" * 101)

        assert fields_of(result) == ["brand"]

    def test_max_length_accepted(self) -> None:
        assert validate_name("brand", "x" * 100).is_valid


class TestValidateId:
    """Tests for id validation."""

    def test_valid(self) -> None:
        assert validate_id("id", 1).is_valid

    def test_missing(self) -> None:
        result = validate_id("id", None)
        assert result.errors[0].message == "You should specify the ID"

    @pytest.mark.parametrize("value", [0, -1, True, "3", 2_147_483_648])
    def test_invalid(self, value) -> None:
        result = validate_id("id", value)
        assert result.errors[0].message == "You should correctly specify the ID"


class TestValidateItem:
    """Tests for item request validation."""

    def test_valid_create(self) -> None:
        assert validate_item(valid_item()).is_valid

    def test_missing_fields_reported_together(self) -> None:
        result = validate_item(CreateItemRequest())

        assert fields_of(result) == ["name", "price", "catalogBrandId", "catalogTypeId"]

    def test_negative_price(self) -> None:
        result = validate_item(valid_item(price=Decimal("-0.01")))
        assert fields_of(result) == ["price"]

    def test_zero_price_allowed(self) -> None:
        assert validate_item(valid_item(price=Decimal("0"))).is_valid

    def test_negative_stock(self) -> None:
        result = validate_item(valid_item(available_stock=-1, restock_threshold=-2))
        assert fields_of(result) == ["availableStock", "restockThreshold"]

    def test_description_too_long(self) -> None:
        result = validate_item(valid_item(description="x" * (MAX_DESCRIPTION_LENGTH + 1)))
        assert fields_of(result) == ["description"]

    def test_description_at_limit_allowed(self) -> None:
        assert validate_item(valid_item(description="x" * MAX_DESCRIPTION_LENGTH)).is_valid

    def test_picture_file_name_too_long(self) -> None:
        name = "p" * MAX_PICTURE_FILE_NAME_LENGTH + ".png"

        result = validate_item(valid_item(picture_file_name=name))

        assert fields_of(result) == ["pictureFileName"]

    def test_price_above_column_precision(self) -> None:
        result = validate_item(valid_item(price=MAX_PRICE + Decimal("0.01")))

        assert fields_of(result) == ["price"]
        assert result.errors[0].message == "Price must be at most 99999999.99"

    def test_max_price_allowed(self) -> None:
        assert validate_item(valid_item(price=MAX_PRICE)).is_valid

    def test_stock_above_integer_range(self) -> None:
        result = validate_item(valid_item(available_stock=MAX_INTEGER + 1))
        assert fields_of(result) == ["availableStock"]

    def test_unstorable_brand_id(self) -> None:
        result = validate_item(valid_item(catalog_brand_id=10**20))
        assert fields_of(result) == ["catalogBrandId"]

    def test_update_requires_id(self) -> None:
        request = UpdateItemRequest(**valid_item().model_dump())

        result = validate_item(request)

        assert fields_of(result) == ["id"]

    def test_valid_update(self) -> None:
        request = UpdateItemRequest(id=3, **valid_item().model_dump())
        assert validate_item(request).is_valid


class TestValidationResult:
    """Tests for result merging."""

    def test_merge_collects_errors(self) -> None:
        result = validate_id("id", None).merge(validate_name("brand", ""))

        assert fields_of(result) == ["id", "brand"]
        assert result.errors[1].to_dict() == {
            "field": "brand",
            "message": "You should specify the brand",
        }
