"""Application configuration from environment variables."""

from functools import lru_cache
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict

from repledger.core.enums import BodyweightUnit, WeightUnit


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="REPLEDGER_",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "RepLedger"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Database (PostgreSQL via asyncpg)
    database_host: str = "localhost"
    database_port: int = 5432
    database_user: str = "repledger"
    database_password: str = ""  # Set in .env - never commit
    database_name: str = "repledger"
    database_ssl_mode: str = "prefer"
    # Full SQLAlchemy URL; wins over the host/port fields (e.g. sqlite+aiosqlite:// for local runs)
    database_url_override: str | None = None

    # Pool
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Feature gating
    free_template_limit: int = 3

    # Dashboard
    weekly_sessions_goal: int = 4
    recovery_lookback_days: int = 14
    recovery_max_items: int = 2
    latest_pr_lookback_workouts: int = 20

    # Preference defaults
    default_lifting_unit: WeightUnit = WeightUnit.KG
    default_bodyweight_unit: BodyweightUnit = BodyweightUnit.KG
    rest_timer_duration_seconds: int = 90
    rest_timer_auto_start: bool = True

    def _build_db_url(self, scheme: str = "postgresql", ssl_query: str = "sslmode=prefer") -> str:
        user = quote_plus(self.database_user)
        password = quote_plus(self.database_password)
        return (
            f"{scheme}://{user}:{password}@{self.database_host}:{self.database_port}"
            f"/{self.database_name}?{ssl_query}"
        )

    @property
    def async_database_url(self) -> str:
        """Async URL for the persistence layer (asyncpg driver)."""
        if self.database_url_override:
            return self.database_url_override
        return self._build_db_url(scheme="postgresql+asyncpg", ssl_query=f"ssl={self.database_ssl_mode}")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
