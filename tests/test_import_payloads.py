"""Hostile cell content in import files.

Imported text is stored as plain data and never interpreted. These tests
check that injection-style payloads survive an import unchanged, are not
mistaken for valid emails, and cannot smuggle in extra columns.
"""

import pytest

from sam_ledger.config import Settings
from sam_ledger.database import LedgerStore
from sam_ledger.services.import_service import ImportService
from sam_ledger.utils.file_parser import validate_email
from sam_ledger.utils.validation import validate_row

# Payloads without commas or double quotes, which the import dialect reserves
INJECTION_PAYLOADS = [
    "'; DROP TABLE users; --",
    "1' OR '1'='1",
    "' UNION SELECT * FROM admin_users --",
    "1'; WAITFOR DELAY '0:0:5' --",
    "%27%20OR%201%3D1%20--",
    "ʼ OR 1=1 --",
    "1'/**/OR/**/1=1--",
    "$$; DROP TABLE users; $$",
]

XSS_PAYLOADS = [
    "<script>alert('XSS')</script>",
    "<img src=x onerror=alert('XSS')>",
    "javascript:alert('XSS')",
    "<svg onload=alert('XSS')>",
    "'><script>alert('XSS')</script>",
]

MAPPING = {"productName": "Product", "personEmail": "Email", "personName": "Name"}


class TestPayloadsStoredVerbatim:
    """Test that payloads are kept as opaque text."""

    @pytest.mark.parametrize("payload", INJECTION_PAYLOADS + XSS_PAYLOADS)
    async def test_person_name(self, payload: str, settings: Settings) -> None:
        store = LedgerStore()

        result = await ImportService(store, settings).import_data_from_csv(
            f"Product,Email,Name\nWiki,someone@example.com,{payload}",
            MAPPING,
        )

        assert result.ok == 1
        assert store.people[0].display_name == payload.strip()

    @pytest.mark.parametrize("payload", XSS_PAYLOADS)
    async def test_product_name(self, payload: str, settings: Settings) -> None:
        store = LedgerStore()

        await ImportService(store, settings).import_data_from_csv(
            f"Product,Email,Name\n{payload},someone@example.com,Someone",
            MAPPING,
        )

        assert store.products[0].name == payload


class TestPayloadsRejected:
    """Test that payloads in constrained fields are rejected."""

    @pytest.mark.parametrize("payload", INJECTION_PAYLOADS + XSS_PAYLOADS)
    def test_not_an_email(self, payload: str) -> None:
        assert not validate_email(payload)

    @pytest.mark.parametrize("payload", INJECTION_PAYLOADS)
    def test_not_a_cost(self, payload: str) -> None:
        result = validate_row(
            {"productName": "Wiki", "personEmail": "a@example.com", "personName": "A", "cost": payload}
        )

        assert not result.ok

    async def test_extra_cells_ignored(self, settings: Settings) -> None:
        """Cells beyond the header are dropped rather than shifting columns."""
        store = LedgerStore()

        await ImportService(store, settings).import_data_from_csv(
            "Product,Email,Name\nWiki,a@example.com,A,admin,true",
            MAPPING,
        )

        assert store.people[0].display_name == "A"
