"""
Application configuration using Pydantic Settings.
All environment-specific values are centralized here.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ── App ──────────────────────────────────────────────
    app_name: str = "Print Shop Pricing Engine"
    debug: bool = False

    # ── Storage ──────────────────────────────────────────
    storage_backend: str = "memory"  # "memory" | "mongo" | "http"

    # ── MongoDB ──────────────────────────────────────────
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "print_shop"
    agent_services_collection: str = "agent_services"

    # ── Console backend API ──────────────────────────────
    api_base_url: str = "http://localhost:3000/api"
    api_token: str = ""
    http_timeout_seconds: float = 15.0

    # ── Pricing ──────────────────────────────────────────
    currency_symbol: str = "₵"
    pricing_strict_validation: bool = False

    # ── Logging ──────────────────────────────────────────
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings (singleton)."""
    return Settings()
