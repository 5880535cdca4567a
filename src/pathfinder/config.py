"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PathfinderSettings(BaseSettings):
    """Application configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="PATHFINDER_",
    )

    # Environment used by reroute interceptors
    environment: str = Field(
        default="dev",
        description="Active environment name (dev, test, prod, ...)",
    )

    # Remote peers
    peers: dict[str, str] = Field(
        default_factory=dict,
        description="Peer id -> execution acceptor base URL",
    )
    remote_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds to wait for a remote result (None waits forever)",
    )
    local_peer_workers: int = Field(
        default=4,
        ge=1,
        description="Worker threads for in-process peers",
    )

    # Execution acceptor
    is_destination: bool = Field(
        default=False,
        description="Serve an execution acceptor so other nodes can dispatch here",
    )
    acceptor_host: str = Field(
        default="127.0.0.1",
        description="Host the execution acceptor binds to",
    )
    acceptor_port: int = Field(
        default=8750,
        ge=1,
        le=65535,
        description="Port the execution acceptor binds to",
    )

    # App settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode (forces DEBUG logging)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level.upper()


@lru_cache
def get_settings() -> PathfinderSettings:
    """Get cached settings instance."""
    return PathfinderSettings()
