"""Configuration management for transfer-scheduler."""

import os
from dataclasses import dataclass, field

from transfer_scheduler.exceptions import ConfigurationError
from transfer_scheduler.logging import LOG_FORMATS


@dataclass
class ApiConfig:
    """Transfer API connection configuration."""

    base_url: str = "http://localhost:8080/api"
    timeout_seconds: float = 10.0


@dataclass
class SchedulerConfig:
    """Main configuration for transfer-scheduler."""

    api: ApiConfig = field(default_factory=ApiConfig)
    log_level: str = "INFO"
    log_format: str = "standard"
    seed: int | None = None

    @classmethod
    def from_env(cls) -> "SchedulerConfig":
        """Create config from environment variables."""
        api = ApiConfig(
            base_url=os.getenv("TRANSFER_API_URL", "http://localhost:8080/api"),
            timeout_seconds=_parse_env("TRANSFER_API_TIMEOUT", "10", float),
        )

        log_format = os.getenv("LOG_FORMAT", "standard")
        if log_format not in LOG_FORMATS:
            raise ConfigurationError(f"LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}, got {log_format!r}")

        return cls(
            api=api,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=log_format,
            seed=_parse_env("SEED", "", int) if os.getenv("SEED") else None,
        )


def _parse_env(name: str, default: str, cast: type) -> float | int:
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a valid {cast.__name__}, got {raw!r}") from exc
