"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="SHIPQUOTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Shipping Quote API"
    api_prefix: str = "/api"
    origin_postal_code: str = Field(
        default="01310-100",
        description="Postal code (CEP) the store ships from.",
    )
    default_item_weight_grams: float = Field(
        default=200.0,
        gt=0,
        description="Weight assumed for cart items without weight data.",
    )
    address_lookup_base_url: str = Field(
        default="https://viacep.com.br/ws",
        description="Base URL for the public CEP address lookup service.",
    )
    geocoding_base_url: str = Field(
        default="https://nominatim.openstreetmap.org/search",
        description="Free-text geocoding search endpoint.",
    )
    geocoding_country_code: str = Field(default="br")
    geocoding_user_agent: str = Field(
        default="shipquote/0.1 (shipping-rate-estimator)",
        description="User-Agent sent to the geocoding service (required by its usage policy).",
    )
    http_timeout_seconds: float = Field(default=5.0, gt=0.0)
    resolve_concurrently: bool = Field(
        default=True,
        description="Resolve origin and destination postal codes in parallel.",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8080",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )
    orders_table: str = Field(default="orders")

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("address_lookup_base_url", "geocoding_base_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


settings = Settings()
