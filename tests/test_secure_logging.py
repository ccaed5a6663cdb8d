"""Tests for personal-data redaction in log output."""

import logging

import pytest

from sam_ledger.utils.secure_logging import log_error, log_warning, redact


class TestRedact:
    """Test redaction rules."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Duplicate for ana@example.com", "Duplicate for [EMAIL]"),
            ("Cannot read /tmp/import.csv", "Cannot read [PATH]"),
            ("key " + "a" * 40, "key [TOKEN]"),
        ],
    )
    def test_rules(self, text: str, expected: str) -> None:
        assert redact(text) == expected

    def test_truncated(self) -> None:
        assert len(redact("word " * 100)) == 200


class TestLogHelpers:
    """Test environment-aware log helpers outside debug mode."""

    def test_log_error_redacts(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("sam_ledger.test")

        with caplog.at_level(logging.ERROR, logger="sam_ledger.test"):
            log_error(logger, "Failed to write audit log", ValueError("bad row for ana@example.com"))

        assert "ana@example.com" not in caplog.text
        assert "[EMAIL]" in caplog.text

    def test_log_warning_without_error(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("sam_ledger.test")

        with caplog.at_level(logging.WARNING, logger="sam_ledger.test"):
            log_warning(logger, "Import rejected")

        assert caplog.records[0].message == "Import rejected"
