"""Tests for the application exception hierarchy."""

from core.exceptions import BaseApplicationError, DatabaseError, NotFoundError, ValidationError


class TestBaseApplicationError:
    def test_defaults_error_code_from_class(self):
        assert ValidationError("bad").error_code == "VALIDATION_ERROR"
        assert NotFoundError("gone").error_code == "NOT_FOUND"
        assert DatabaseError("down").error_code == "DATABASE_ERROR"

    def test_explicit_error_code_wins(self):
        error = ValidationError("bad amount", error_code="INVALID_AMOUNT")
        assert error.error_code == "INVALID_AMOUNT"

    def test_to_dict_includes_details_only_when_present(self):
        assert ValidationError("bad").to_dict() == {
            "error": "bad",
            "error_code": "VALIDATION_ERROR",
        }
        error = NotFoundError("Invoice 4 not found", details={"invoice_id": 4})
        assert error.to_dict()["details"] == {"invoice_id": 4}

    def test_str_carries_error_code(self):
        assert str(NotFoundError("Vendor missing")) == "[NOT_FOUND] Vendor missing"

    def test_subclasses_share_base(self):
        assert issubclass(ValidationError, BaseApplicationError)
        assert issubclass(DatabaseError, BaseApplicationError)
