from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: str = Field(default="dev", alias="APP_ENV")
    app_name: str = Field(default="Portfolio Engine", alias="APP_NAME")
    api_prefix: str = Field(default="/api", alias="API_PREFIX")
    cors_origins: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000",
        alias="CORS_ORIGINS",
    )

    market_data_provider: Literal["synthetic", "coingecko"] = Field(default="synthetic", alias="MARKET_DATA_PROVIDER")
    coingecko_base_url: str = Field(default="https://api.coingecko.com/api/v3", alias="COINGECKO_BASE_URL")
    coingecko_api_key: str = Field(default="", alias="COINGECKO_API_KEY")
    request_timeout_seconds: float = Field(default=10.0, gt=0, alias="REQUEST_TIMEOUT_SECONDS")
    enrichment_timeout_seconds: float = Field(default=15.0, gt=0, alias="ENRICHMENT_TIMEOUT_SECONDS")
    history_days: int = Field(default=30, ge=2, alias="HISTORY_DAYS")

    # Protocol catalogs change less often than wallet balances.
    portfolio_cache_ttl_seconds: float = Field(default=120.0, ge=0, alias="PORTFOLIO_CACHE_TTL_SECONDS")
    defi_cache_ttl_seconds: float = Field(default=600.0, ge=0, alias="DEFI_CACHE_TTL_SECONDS")
    cache_max_items: int = Field(default=512, ge=1, alias="CACHE_MAX_ITEMS")

    @property
    def cors_origins_list(self) -> list[str]:
        raw = self.cors_origins.strip()
        if raw == "*":
            return ["*"]
        return [origin.strip() for origin in raw.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
