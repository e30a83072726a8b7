from decimal import Decimal
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "A.Z Finance Engine"
    app_version: str = "0.1.0"
    api_prefix: str = "/api/v1"
    debug: bool = False
    log_level: str = "INFO"

    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    # An unreceived cashflow this many days past due marks its investment defaulted.
    default_after_days: int = 60
    forecast_horizon_months: int = 40
    metrics_cache_size: int = 128
    fallback_expected_irr: Decimal = Decimal("12")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
