"""Application settings loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Amped life impact server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Default to loopback so personal health readings are not exposed to the
    # LAN/WAN. Opt into `0.0.0.0` explicitly when you intend remote access.
    amped_host: str = "127.0.0.1"
    amped_port: int = 8001
    amped_log_level: str = "info"
    # "stdio" for desktop MCP clients; the bind guard applies to HTTP only.
    amped_transport: Literal["streamable-http", "stdio"] = "streamable-http"
    # Refuse non-loopback binds unless set true (there is no auth layer).
    amped_allow_insecure_bind: bool = False

    # Engine
    default_period: Literal["day", "month", "year"] = "day"

    # Connectors: "mock" layers manual entries over mock readings,
    # "manual" uses manual entries only.
    data_source: Literal["mock", "manual"] = "mock"

    # Profile overrides (unset fields fall back to the provider's profile)
    profile_age: int | None = None
    profile_birth_year: int | None = None
    profile_sex: Literal["male", "female", "unspecified"] | None = None
    profile_weight_lb: float | None = None


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
