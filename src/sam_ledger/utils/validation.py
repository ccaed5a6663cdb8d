"""Row validation for allocation imports."""

from sam_ledger.models.dto.import_dto import (
    RowValidation,
    RowValidationFailure,
    RowValidationSuccess,
    ValidatedRow,
)
from sam_ledger.utils.file_parser import parse_cost, validate_email


def validate_row(row: dict[str, str]) -> RowValidation:
    """Validate one mapped import row.

    Rules run in a fixed order and the first failure is the only error
    reported: product name, email presence, email format, person name, cost.
    A negative cost parses here; it is only rejected for rows that would
    create a new product (see ``ImportService``).

    Args:
        row: Field id -> raw cell value

    Returns:
        Success carrying the normalized row, or failure carrying one message
    """
    product_name = (row.get("productName") or "").strip()
    person_email = (row.get("personEmail") or "").strip()
    person_name = (row.get("personName") or "").strip()
    vendor_name = (row.get("vendorName") or "").strip()
    cost_raw = (row.get("cost") or "").strip()

    if not product_name:
        return RowValidationFailure(error="'Product Name' is required.")
    if not person_email:
        return RowValidationFailure(error="'User Email' is required.")
    if not validate_email(person_email):
        return RowValidationFailure(error=f"Email '{person_email}' is invalid.")
    if not person_name:
        return RowValidationFailure(error="'User Name' is required.")

    cost = None
    if cost_raw:
        try:
            cost = parse_cost(cost_raw)
        except ValueError:
            return RowValidationFailure(error=f"Cost '{cost_raw}' is not a valid number.")

    return RowValidationSuccess(
        data=ValidatedRow(
            product_name=product_name,
            person_email=person_email.lower(),
            person_name=person_name,
            vendor_name=vendor_name or None,
            cost=cost,
        )
    )
