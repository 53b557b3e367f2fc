"""Application-wide configuration loading and validation."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from scanner.errors import ConfigurationError
from scanner.rtp import MAX_PAYLOAD_SIZE, MIN_DATAGRAM_SIZE


class Settings(BaseSettings):
    """Centralized environment configuration.

    Values are read once at startup and treated as immutable afterwards.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
    )

    log_level: str = Field(default="INFO")

    # Listening endpoint (overridden by -a / -p)
    scanner_address: str = Field(
        default="",
        description="IPv4/IPv6 literal to bind; empty binds all IPv4 interfaces.",
    )
    scanner_port: int | None = Field(default=None, ge=1, le=65535, description="UDP port to listen on.")

    # Receive buffer
    max_datagram_size: int = Field(
        default=MAX_PAYLOAD_SIZE,
        ge=MIN_DATAGRAM_SIZE,
        description="Size of the reusable receive buffer; longer datagrams are truncated.",
    )
    reuse_port: bool = Field(
        default=True,
        description="Set SO_REUSEPORT where the platform supports it.",
    )

    @field_validator("scanner_address")
    @classmethod
    def strip_address(cls, value: str) -> str:
        return value.strip()

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


def load_settings(**overrides: Any) -> Settings:
    """Build settings from the environment with explicit overrides applied.

    ``None`` overrides are ignored so unset CLI flags fall back to the environment.

    Raises:
        ConfigurationError: if any value fails validation.
    """

    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(**values)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return load_settings()
