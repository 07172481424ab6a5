from __future__ import annotations

from functools import cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    coinmarketcap_api_key: str
    coinmarketcap_base_url: str = "https://pro-api.coinmarketcap.com"
    request_timeout_seconds: float = 10.0
    quote_cache_ttl_seconds: float = 30.0
    quote_cache_sweep_seconds: float = 600.0
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@cache
def config() -> AppSettings:
    return AppSettings()  # type: ignore[call-arg]
