"""Tests for import row validation."""

from decimal import Decimal

import pytest

from sam_ledger.models.dto.import_dto import RowValidationFailure, RowValidationSuccess
from sam_ledger.utils.validation import validate_row

VALID_ROW = {
    "productName": "Adobe Photoshop",
    "personEmail": "Jane@X.com",
    "personName": "Jane Doe",
    "vendorName": "Adobe",
    "cost": "105,00",
}


class TestValidateRow:
    """Test row validation rules and their order."""

    def test_valid_row_normalized(self) -> None:
        result = validate_row(VALID_ROW)

        assert isinstance(result, RowValidationSuccess)
        assert result.data.person_email == "jane@x.com"
        assert result.data.vendor_name == "Adobe"
        assert result.data.cost == Decimal("105.00")

    def test_optional_fields_absent(self) -> None:
        result = validate_row({"productName": "Wiki", "personEmail": "a@b.co", "personName": "A"})

        assert isinstance(result, RowValidationSuccess)
        assert result.data.vendor_name is None
        assert result.data.cost is None

    def test_blank_vendor_becomes_none(self) -> None:
        result = validate_row({**VALID_ROW, "vendorName": "   "})

        assert isinstance(result, RowValidationSuccess)
        assert result.data.vendor_name is None

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"productName": ""}, "'Product Name' is required."),
            ({"personEmail": "  "}, "'User Email' is required."),
            ({"personEmail": "not-an-email"}, "Email 'not-an-email' is invalid."),
            ({"personName": ""}, "'User Name' is required."),
            ({"cost": "abc"}, "Cost 'abc' is not a valid number."),
        ],
    )
    def test_rule_messages(self, overrides: dict[str, str], message: str) -> None:
        result = validate_row({**VALID_ROW, **overrides})

        assert isinstance(result, RowValidationFailure)
        assert result.error == message

    def test_negative_cost_parses(self) -> None:
        """Negative costs are judged later, against the product they target."""
        result = validate_row({**VALID_ROW, "cost": "-5"})

        assert isinstance(result, RowValidationSuccess)
        assert result.data.cost == Decimal("-5")

    def test_only_first_failure_reported(self) -> None:
        """A row failing every rule reports the product name rule."""
        result = validate_row({"productName": "", "personEmail": "bad", "personName": "", "cost": "x"})

        assert isinstance(result, RowValidationFailure)
        assert result.error == "'Product Name' is required."

    def test_email_format_checked_before_name(self) -> None:
        result = validate_row({"productName": "P", "personEmail": "bad", "personName": ""})

        assert isinstance(result, RowValidationFailure)
        assert result.error == "Email 'bad' is invalid."
