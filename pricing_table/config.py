# pricing_table/config.py
import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # === Algemene app settings ===
    app_env: str = "local"  # local | development | production

    # === Catalog (products + pricing rules) ===
    catalog_path: str = Field(
        "data/catalog.yaml", description="YAML file with products and pricing rules"
    )

    # === Site ===
    site_timezone: str = "Europe/Rome"
    default_language: str = "en"

    # === Product attributes ===
    pieces_attribute: str = "pezzi-a-cartone"

    # === Money formatting ===
    currency_symbol: str = "€"
    decimal_separator: str = ","
    thousand_separator: str = "."
    price_decimals: int = 2
    unit_price_label: str = "€/pizza"

    # === Tier labels ===
    # "to" above this many cartons is shown as open-ended ("From N+")
    open_ended_threshold: int = 1_000_000
    # False: the to-day only counts at exactly its midnight (legacy behaviour)
    date_to_inclusive_day: bool = False

    # === Logging ===
    log_level: str = "INFO"

    # === Pydantic Settings config ===
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PRICING_TABLE_",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton Settings instance met simpele env-overrides."""
    s = Settings()

    env = os.getenv("ENVIRONMENT", s.app_env).lower()
    if env == "production":
        s.log_level = "WARNING"
    elif env == "development":
        s.log_level = "DEBUG"

    return s
