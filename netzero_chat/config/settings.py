"""
Application configuration and settings.
Centralized configuration management using Pydantic Settings.
"""
from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Allow extra fields from .env files shared with the other NetZero services
    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        env_file=[".env", ".env.local"],  # .env.local overrides .env
    )

    # Application settings
    app_name: str = "NetZero Chat Server"
    service_name: str = "netzero-chat-server"
    version: str = "1.0.0"
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("NODE_ENV", "ENVIRONMENT"),
    )

    # Server settings
    chat_host: str = "127.0.0.1"
    chat_port: int = 3004
    api_prefix: str = "/api"
    api_version: str = "v1"
    # Reverse proxies in front of the server whose X-Forwarded-For entry is trusted
    trust_proxy_hops: int = 1

    # Authentication settings
    jwt_secret: str = "your-super-secret-jwt-key-change-in-production"

    # Database settings
    db_host: str = "127.0.0.1"
    db_port: int = 3306
    db_user: str = "netzeroadmin"
    db_password: str = ""
    db_name: str = "netzero"
    db_pool_size: int = 10
    db_connect_timeout: int = 10

    # Rate limiting for chat endpoints
    chat_rate_limit_max_requests: int = 100
    chat_rate_limit_window_seconds: float = 60.0

    # CORS settings
    allowed_origins: List[str] = [
        "http://localhost:3000",  # React development server
        "http://127.0.0.1:3000",
        "https://your-domain.com",
    ]

    # Logging settings
    log_level: str = "INFO"

    # Static site (built front-end) settings
    static_dir: str = "web"
    static_port: int = 3000

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def api_base(self) -> str:
        """Versioned API prefix, e.g. ``/api/v1``."""
        return f"{self.api_prefix.rstrip('/')}/{self.api_version}"

    @property
    def chat_base(self) -> str:
        """Mount point of the chat router, e.g. ``/api/v1/chat``."""
        return f"{self.api_base}/chat"


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
