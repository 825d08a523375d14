# tookan_relay/core/config.py
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # ==== Core ====
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # ==== Server ====
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3000
    STATIC_DIR: str = "public"

    # ==== Shopify ====
    SHOPIFY_WEBHOOK_SECRET: Optional[str] = None
    SHOPIFY_SHOP: Optional[str] = None
    SHOPIFY_API_VERSION: str = "2024-10"
    SHOPIFY_API_KEY: Optional[str] = None
    SHOPIFY_API_PASSWORD: Optional[str] = None
    SHOPIFY_ACCESS_TOKEN: str | None = None
    SHOPIFY_TIMEOUT: float = 30.0
    # form key holding the tax amount for the synthetic "Taxes" line
    TAX_AMOUNT_FIELD: str = "properties[Y6 - Taxes à payer]"

    # ==== Tookan (delivery dispatch) ====
    TOOKAN_BASE_URL: str = "https://api.tookanapp.com"
    TOOKAN_API_KEY: Optional[str] = None
    TOOKAN_TEAM: str = "Default Team"
    TOOKAN_TIMEZONE: str = "-330"
    TOOKAN_COLOR: str = "blue"
    TOOKAN_TIMEOUT: float = 30.0

    # ==== Observability ====
    PROMETHEUS_ENABLE: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )
