"""Tests for domain exceptions."""

from app.domain import ConflictError, DomainError, NotFoundError, ValidationError


class TestDomainErrors:
    """Tests for the error taxonomy."""

    def test_status_codes(self) -> None:
        assert ValidationError("bad").status_code == 400
        assert NotFoundError("CatalogItem", 1).status_code == 404
        assert ConflictError("taken").status_code == 409
        assert DomainError("boom").status_code == 500

    def test_not_found_message(self) -> None:
        error = NotFoundError("CatalogType", 7)

        assert error.message == "CatalogType 7 not found"
        assert error.entity_type == "CatalogType"
        assert error.entity_id == 7

    def test_details_default_to_empty(self) -> None:
        assert ValidationError("bad").details == []

    def test_details_kept(self) -> None:
        details = [{"field": "name", "message": "required"}]

        error = ValidationError("bad", details=details)

        assert error.details == details
        assert isinstance(error, DomainError)
