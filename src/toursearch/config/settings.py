"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified)
  2. Environment variables (TOURSEARCH_ prefix)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=8080, description="Server port")
    workers: int = Field(default=1, description="Number of worker processes")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")


class DatabaseSettings(BaseModel):
    """Connection settings for the site's content database.

    One async engine (and therefore one connection pool) is created per
    process from these values.
    """

    url: str = Field(
        default="postgresql+asyncpg://localhost:5432/tourism",
        description="SQLAlchemy async database URL",
    )
    pool_size: int = Field(default=5, description="Connections kept open in the pool")
    max_overflow: int = Field(default=10, description="Extra connections allowed above pool_size")
    pool_recycle: int = Field(default=1800, description="Seconds before a pooled connection is recycled")
    echo: bool = Field(default=False, description="Log emitted SQL statements")

    @field_validator("url", mode="before")
    @classmethod
    def _use_async_driver(cls, v: Any) -> Any:
        """Accept plain ``postgres://`` URLs as exported by hosting providers."""
        if isinstance(v, str):
            for prefix in ("postgres://", "postgresql://"):
                if v.startswith(prefix):
                    return "postgresql+asyncpg://" + v[len(prefix) :]
        return v


class SourceConfig(BaseModel):
    """Configuration for a single content source."""

    enabled: bool = Field(default=True, description="Whether this source takes part in searches")
    table: str | None = Field(default=None, description="Override for the backing table name")


DEFAULT_SOURCES = ("tour", "blog", "project")


class SearchSettings(BaseModel):
    """Search behavior configuration."""

    per_source_limit: int = Field(default=5, ge=1, description="Maximum results contributed by each source")
    max_total_results: int | None = Field(
        default=None,
        ge=1,
        description="Cap on the merged result list (None = sum of per-source caps)",
    )
    source_timeout: float = Field(default=2.0, gt=0, description="Per-source timeout in seconds")
    min_query_length: int = Field(default=2, ge=1, description="Minimum trimmed query length")
    max_query_length: int = Field(default=200, ge=2, description="Maximum trimmed query length")
    snippet_length: int = Field(default=240, ge=20, description="Maximum snippet length in characters")
    sources: dict[str, SourceConfig] = Field(
        default_factory=lambda: {name: SourceConfig() for name in DEFAULT_SOURCES},
        description="Per-source configuration keyed by source kind",
    )

    @field_validator("sources")
    @classmethod
    def _fill_default_sources(cls, v: dict[str, SourceConfig]) -> dict[str, SourceConfig]:
        """Sources left out of the configuration stay enabled."""
        for name in DEFAULT_SOURCES:
            v.setdefault(name, SourceConfig())
        return v

    @model_validator(mode="after")
    def _check_query_bounds(self) -> SearchSettings:
        if self.max_query_length < self.min_query_length:
            raise ValueError("max_query_length must not be smaller than min_query_length")
        return self


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the TOURSEARCH_ prefix.
    Nested settings use double underscores: TOURSEARCH_SERVER__PORT=9090

    Example:
        TOURSEARCH_DATABASE__URL=postgresql://user:pass@db/tourism
        TOURSEARCH_SEARCH__SOURCE_TIMEOUT=1.5
        TOURSEARCH_SEARCH__SOURCES__PROJECT__ENABLED=false
    """

    model_config = {
        "env_prefix": "TOURSEARCH_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    app_name: str = Field(default="TourSearch", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    server: ServerSettings = Field(default_factory=ServerSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Sections missing from the YAML file are still read from the
        environment.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
