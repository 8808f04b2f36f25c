"""
Centralized configuration for the Copywise backend.

All settings are loaded from environment variables with sensible defaults.
Vendor settings are namespaced (e.g., OPENAI_*, SHOPIFY_*, STRIPE_*).
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Copywise API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Session
    session_store_dir: Optional[Path] = None  # None keeps the session in memory
    session_key: str = "user"
    login_path: str = "/login"
    session_cookie: str = "copywise_session"  # one auth context per cookie value
    session_cookie_secure: bool = False
    max_sessions: int = 1000  # least recently used contexts are dropped past this
    identity_latency_seconds: float = 1.0  # simulated identity round-trip

    # OpenAI (description generation)
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_max_tokens: int = 500
    openai_temperature: float = 0.7

    # Shopify
    shopify_api_key: str = ""
    shopify_api_secret: str = ""
    shopify_scopes: list[str] = ["read_products", "write_products"]
    shopify_api_version: str = "2024-10"
    host_name: str = "localhost:3000"

    # Stripe
    stripe_secret_key: str = ""
    stripe_price_id: str = ""


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
