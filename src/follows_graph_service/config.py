"""
Configuration for the follows graph service.

Settings are grouped per concern and loaded from environment variables
via pydantic-settings. Each group owns its own env prefix:

    FOLLOWS_FALKORDB_*        graph store connection
    FOLLOWS_RECOMMENDATION_*  recommendation engine tuning
    FOLLOWS_HTTP_*            HTTP server binding and CORS
    FOLLOWS_LOG_*             logging
"""

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FalkorDBSettings(BaseSettings):
    """Connection settings for the FalkorDB graph store."""

    model_config = SettingsConfigDict(env_prefix="FOLLOWS_FALKORDB_", extra="ignore")

    host: str = Field(default="localhost", description="FalkorDB host")
    port: int = Field(default=6379, ge=1, le=65535, description="FalkorDB port")
    username: str | None = Field(default=None, description="FalkorDB ACL username (None uses the default user)")
    password: SecretStr | None = Field(default=None, description="FalkorDB password")
    graph_name: str = Field(default="follows", min_length=1, description="Graph holding users and FOLLOWS edges")
    max_connections: int = Field(default=16, ge=1, le=256, description="Connection pool size")
    query_timeout_ms: int = Field(
        default=30_000,
        ge=0,
        description="Server-side timeout applied to every query (0 disables)",
    )


class RecommendationSettings(BaseSettings):
    """Tuning for the follow recommendation engine."""

    model_config = SettingsConfigDict(env_prefix="FOLLOWS_RECOMMENDATION_", extra="ignore")

    target_count: int = Field(
        default=10,
        ge=1,
        description="Backfill runs when the two-hop pass yields fewer candidates than this",
    )


class HTTPSettings(BaseSettings):
    """HTTP server binding."""

    model_config = SettingsConfigDict(env_prefix="FOLLOWS_HTTP_", extra="ignore")

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8086, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="FOLLOWS_LOG_", extra="ignore")

    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v!r}")
        return level


class Settings(BaseModel):
    """All settings groups for the service."""

    falkordb: FalkorDBSettings = Field(default_factory=FalkorDBSettings)
    recommendation: RecommendationSettings = Field(default_factory=RecommendationSettings)
    http: HTTPSettings = Field(default_factory=HTTPSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


settings = Settings()
