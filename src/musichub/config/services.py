"""Tuning knobs for the registration and reconciliation services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import optional_env_float, optional_env_int
from .errors import ConfigurationError

DEFAULT_MAX_ATTEMPTS: Final[int] = 3
DEFAULT_LOOKUP_TIMEOUT_SECONDS: Final[float] = 10.0


@dataclass(frozen=True, slots=True)
class ServiceConfig:
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    # None disables the per-lookup timeout
    lookup_timeout_seconds: float | None = DEFAULT_LOOKUP_TIMEOUT_SECONDS


def get_service_config() -> ServiceConfig:
    max_attempts = optional_env_int("MUSICHUB_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS)
    if max_attempts < 1:
        raise ConfigurationError("MUSICHUB_MAX_ATTEMPTS must be at least 1")
    timeout = optional_env_float("MUSICHUB_LOOKUP_TIMEOUT_SECONDS", DEFAULT_LOOKUP_TIMEOUT_SECONDS)
    if timeout < 0:
        raise ConfigurationError("MUSICHUB_LOOKUP_TIMEOUT_SECONDS must not be negative")
    return ServiceConfig(
        max_attempts=max_attempts,
        lookup_timeout_seconds=timeout or None,
    )
