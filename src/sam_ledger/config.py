"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SAM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "SAM Ledger"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # Actors recorded on history and audit entries
    system_actor_id: str = "SYSTEM"
    system_actor_name: str = "System"
    admin_actor_id: str = "P_ADMIN"
    admin_actor_name: str = "Admin"

    # Status history reasons
    reharvest_reason: str = "Automatic reharvesting"
    import_history_reason: str = "CSV import"
    manual_change_reason: str = "Manual change by admin"

    # Notifications
    notification_limit: int = Field(default=10, ge=1)

    # Import limits
    import_max_rows: int | None = Field(default=None, ge=1)  # no row cap unless set
    import_max_file_size: int = Field(default=10 * 1024 * 1024, ge=1)  # 10 MB

    # Dashboard
    low_availability_threshold: float = Field(default=0.2, gt=0, le=1)
    low_availability_limit: int = Field(default=5, ge=1)
    dashboard_top_n: int = Field(default=10, ge=1)

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings for environment requirements."""
        if self.environment == "production" and self.debug:
            raise ValueError(
                "DEBUG mode cannot be enabled in production environment. "
                "This would expose personal data in log output."
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
