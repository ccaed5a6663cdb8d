"""CSV parsing and column auto-mapping for allocation imports.

The import dialect is deliberately simple: comma-delimited, first non-blank
line is the header, one leading and one trailing double quote are stripped
from every cell. Quoted commas and escaped quotes are not supported.
"""

import re
from decimal import Decimal
from typing import Any

import chardet

from sam_ledger.exceptions import ImportParseError
from sam_ledger.models.dto.import_dto import ImportColumn

# Line breaks of any style; consecutive breaks collapse
LINE_SPLIT_PATTERN = re.compile(r"[\r\n]+")

# Very basic address check: something@something.something, no whitespace
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Plain decimal, optional minus sign, one "." or "," separator
COST_PATTERN = re.compile(r"^-?\d+(?:[.,]\d+)?$")

REQUIRED_COLUMNS: list[ImportColumn] = [
    ImportColumn(
        id="productName",
        name="Product Name",
        aliases=[
            "product_name",
            "product",
            "software",
            "license_name",
            "nome licença",
            "produto",
            "nome licençaa - z",
        ],
    ),
    ImportColumn(
        id="personEmail",
        name="User Email",
        aliases=[
            "person_email",
            "user_email",
            "email",
            "e-mail",
            "mail",
            "e-mail do usuário",
        ],
    ),
    ImportColumn(
        id="personName",
        name="User Name",
        aliases=[
            "person_name",
            "user_name",
            "display_name",
            "name",
            "user",
            "nome a - z",
            "nome",
            "usuário",
        ],
    ),
]

OPTIONAL_COLUMNS: list[ImportColumn] = [
    ImportColumn(
        id="vendorName",
        name="Vendor",
        aliases=["vendor_name", "vendor", "manufacturer", "fornecedor", "fabricante"],
    ),
    ImportColumn(
        id="cost",
        name="Unit Cost",
        aliases=["unit_cost", "cost", "price", "amount", "valor", "custo"],
    ),
]

IMPORT_COLUMNS: list[ImportColumn] = REQUIRED_COLUMNS + OPTIONAL_COLUMNS


def detect_encoding(file_content: bytes) -> str:
    """Detect file encoding using chardet.

    Args:
        file_content: Raw file bytes

    Returns:
        Detected encoding (defaults to utf-8)
    """
    result = chardet.detect(file_content[:10000])  # Check first 10KB
    encoding = result.get("encoding") or "utf-8"
    confidence = result.get("confidence") or 0

    # Default to utf-8 if confidence is low
    if confidence < 0.5:
        return "utf-8"

    encoding_lower = encoding.lower()
    if encoding_lower in ("ascii", "utf-8-sig"):
        return "utf-8"
    if encoding_lower in ("windows-1252", "cp1252"):
        return "cp1252"

    return encoding


def decode_content(file_content: bytes, encoding: str | None = None) -> str:
    """Decode raw file bytes to text, dropping a UTF-8 byte order mark.

    Args:
        file_content: Raw file bytes
        encoding: File encoding (auto-detect if None)

    Returns:
        Decoded text

    Raises:
        ImportParseError: If the content cannot be decoded
    """
    if encoding is None:
        encoding = detect_encoding(file_content)

    try:
        content = file_content.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise ImportParseError(
            "File could not be decoded",
            {"encoding": encoding, "reason": type(e).__name__},
        ) from e

    if content.startswith("\ufeff"):
        content = content[1:]
    return content


def clean_cell(value: str) -> str:
    """Trim a cell and strip one surrounding double quote on each side."""
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def parse_csv_text(text: str) -> dict[str, Any]:
    """Split import text into header and data rows.

    Args:
        text: Decoded file content

    Returns:
        Dict with ``columns`` (header names) and ``rows`` (lists of cells)

    Raises:
        ImportParseError: If the text holds no non-blank line
    """
    lines = [line for line in LINE_SPLIT_PATTERN.split(text) if line.strip()]
    if not lines:
        raise ImportParseError("File is empty")

    columns = [clean_cell(cell) for cell in lines[0].split(",")]
    rows = [[clean_cell(cell) for cell in line.split(",")] for line in lines[1:]]

    return {
        "columns": columns,
        "rows": rows,
        "total_rows": len(rows),
    }


def row_to_dict(columns: list[str], row: list[str]) -> dict[str, str]:
    """Pair header names with cells; missing trailing cells become empty."""
    return {column: row[i] if i < len(row) else "" for i, column in enumerate(columns)}


def apply_column_mapping(
    columns: list[str],
    row: list[str],
    mapping: dict[str, str],
) -> dict[str, str]:
    """Extract logical fields from a data row.

    Args:
        columns: Header names
        row: Data cells
        mapping: Logical field id -> header name

    Returns:
        Dict of field id -> cell value for every mapped header present in
        the file; unmapped fields are absent
    """
    mapped: dict[str, str] = {}
    for field_id, header in mapping.items():
        if header in columns:
            index = columns.index(header)
            mapped[field_id] = row[index] if index < len(row) else ""
    return mapped


def normalize_column_name(name: str) -> str:
    """Normalize column name for matching.

    Args:
        name: Original column name

    Returns:
        Normalized lowercase name with separators collapsed to underscores
    """
    normalized = name.lower().strip()
    normalized = re.sub(r"[\s\-\.]+", "_", normalized)
    return normalized


def suggest_column_mapping(columns: list[str]) -> dict[str, str]:
    """Suggest a header for each logical import field.

    Each header is used for at most one field. Fields are resolved in
    declaration order, required fields first.

    Args:
        columns: Header names from the file

    Returns:
        Dict mapping field id -> header name, for the fields that matched
    """
    mapping: dict[str, str] = {}
    used_columns: set[str] = set()
    normalized_columns = [(column, normalize_column_name(column)) for column in columns]

    for import_column in IMPORT_COLUMNS:
        aliases = [normalize_column_name(a) for a in [import_column.name, *import_column.aliases]]

        # Exact matches win over substring matches
        for exact in (True, False):
            match = next(
                (
                    column
                    for column, normalized in normalized_columns
                    if column not in used_columns
                    and any(
                        normalized == alias if exact else alias in normalized
                        for alias in aliases
                    )
                ),
                None,
            )
            if match is not None:
                mapping[import_column.id] = match
                used_columns.add(match)
                break

    return mapping


def missing_required_columns(mapping: dict[str, str]) -> list[str]:
    """List required field ids that have no header mapped."""
    return [c.id for c in REQUIRED_COLUMNS if not mapping.get(c.id)]


def parse_cost(value: str) -> Decimal:
    """Parse a cost accepting ``.`` or ``,`` as the decimal separator.

    Args:
        value: Cost string

    Returns:
        Parsed amount

    Raises:
        ValueError: If the value is not a plain decimal number
    """
    cleaned = value.strip()
    if not COST_PATTERN.match(cleaned):
        raise ValueError(f"Invalid number: {value!r}")
    return Decimal(cleaned.replace(",", "."))


def validate_email(value: str) -> bool:
    """Validate email format.

    Args:
        value: Email string

    Returns:
        True if valid email format
    """
    if not value:
        return False
    return bool(EMAIL_PATTERN.match(value))
