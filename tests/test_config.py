"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from sam_ledger.config import Settings, get_settings


class TestSettings:
    """Test settings defaults and overrides."""

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.notification_limit == 10
        assert settings.import_max_rows is None
        assert settings.import_history_reason == "CSV import"

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SAM_NOTIFICATION_LIMIT", "3")
        monkeypatch.setenv("SAM_SYSTEM_ACTOR_ID", "cron")

        settings = Settings()

        assert settings.notification_limit == 3
        assert settings.system_actor_id == "cron"

    def test_debug_rejected_in_production(self) -> None:
        with pytest.raises(ValidationError, match="DEBUG mode"):
            Settings(environment="production", debug=True)

    @pytest.mark.parametrize("field,value", [("notification_limit", 0), ("low_availability_threshold", 1.5)])
    def test_bounds(self, field: str, value: float) -> None:
        with pytest.raises(ValidationError):
            Settings(**{field: value})

    def test_get_settings_cached(self) -> None:
        assert get_settings() is get_settings()
