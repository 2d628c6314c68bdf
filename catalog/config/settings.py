"""
Product Catalog Service
Centralized Configuration Management

Configuration is read from environment variables and an optional ``.env``
file through Pydantic settings.
"""

from functools import lru_cache
from typing import Optional, List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


MEMORY_DATABASE = ":memory:"


class DatabaseSettings(BaseSettings):
    """SQLite Store Configuration"""

    model_config = SettingsConfigDict(env_prefix="DATABASE_")

    path: str = Field(default="database.sqlite", description="Data file path, or :memory:")
    echo: bool = Field(default=False, description="Echo SQL queries")

    @property
    def url(self) -> str:
        """Async database URL for aiosqlite"""
        if self.path == MEMORY_DATABASE:
            return "sqlite+aiosqlite://"
        return f"sqlite+aiosqlite:///{self.path}"


class GenerationSettings(BaseSettings):
    """Bulk Product Generation Configuration"""

    model_config = SettingsConfigDict(env_prefix="GENERATION_")

    default_count: int = Field(default=1000, description="Count used when a request gives none")
    batch_size: int = Field(default=100, gt=0, description="Records synthesized per batch")
    sku_max_attempts: int = Field(default=10, gt=0, description="Rounds allowed to redraw colliding SKUs")
    timeout_seconds: Optional[float] = Field(default=None, description="Request-level generation timeout")


class SecuritySettings(BaseSettings):
    """Security Configuration"""

    model_config = SettingsConfigDict(env_prefix="", populate_by_name=True)

    cors_origins: List[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
        description="Allowed CORS origins"
    )


class MonitoringSettings(BaseSettings):
    """Logging Configuration"""

    model_config = SettingsConfigDict(env_prefix="", populate_by_name=True)

    log_level: str = Field(default="INFO", alias="LOG_LEVEL", description="Logging level")
    log_format: str = Field(default="json", alias="LOG_FORMAT", description="Log format: json or text")


class Settings(BaseSettings):
    """
    Main Application Settings

    Aggregates all configuration sections and provides a single entry point
    for accessing application configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field(default="product-catalog", alias="APP_NAME", description="Application name")
    app_env: str = Field(default="development", alias="APP_ENV", description="Environment")
    debug: bool = Field(default=False, alias="DEBUG", description="Debug mode")

    # API Server
    api_host: str = Field(default="0.0.0.0", alias="API_HOST", description="API host")
    api_port: int = Field(default=8000, alias="API_PORT", description="API port")

    # Version
    version: str = Field(default="1.0.0", description="Application version")

    # Subsystem configurations
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    generation: GenerationSettings = Field(default_factory=GenerationSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment value"""
        allowed = ["development", "staging", "production", "testing"]
        if v.lower() not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v.lower()

    @property
    def is_production(self) -> bool:
        """Check if running in production"""
        return self.app_env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
