"""Import DTOs for allocation imports."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


class ImportColumn(BaseModel):
    """Logical import field with its label and known header aliases."""

    id: str
    name: str
    aliases: list[str]


class ValidatedRow(BaseModel):
    """Row whose fields passed validation, trimmed and normalized."""

    product_name: str
    person_email: str  # lower-cased
    person_name: str
    vendor_name: str | None = None
    cost: Decimal | None = None


class RowValidationSuccess(BaseModel):
    """Validation outcome for an accepted row."""

    ok: Literal[True] = True
    data: ValidatedRow


class RowValidationFailure(BaseModel):
    """Validation outcome for a rejected row (first failing rule only)."""

    ok: Literal[False] = False
    error: str


RowValidation = RowValidationSuccess | RowValidationFailure


class ImportIssue(BaseModel):
    """Error, warning or duplicate attached to one input row."""

    row_index: int  # 1-based line number in the file, header included
    row_data: dict[str, str]
    message: str


class ImportResult(BaseModel):
    """Aggregate outcome of an import run."""

    ok: int = 0
    errors: list[ImportIssue] = Field(default_factory=list)
    warnings: list[ImportIssue] = Field(default_factory=list)
    duplicates: list[ImportIssue] = Field(default_factory=list)
