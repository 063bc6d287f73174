"""TIDAL configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .env import require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_TIDAL_API_BASE_URL = "https://openapi.tidal.com/v2"
DEFAULT_TIDAL_AUTH_BASE_URL = "https://auth.tidal.com/v1"
DEFAULT_TIDAL_COUNTRY_CODE = "US"
JSON_API_HEADERS = {"Accept": "application/vnd.api+json"}


def has_json_api_data(payload: object) -> bool:
    """Only cache JSON:API documents that actually carry resources."""
    if not isinstance(payload, dict):
        return False
    return bool(payload.get("data"))  # pyright: ignore[reportUnknownMemberType]


@dataclass(frozen=True, slots=True)
class TidalConfig:
    client_id: str
    client_secret: str
    country_code: str = DEFAULT_TIDAL_COUNTRY_CODE
    api: ResilienceConfig = field(
        default_factory=lambda: ResilienceConfig(
            name="tidal-api",
            base_url=DEFAULT_TIDAL_API_BASE_URL,
            default_headers=JSON_API_HEADERS,
        )
    )
    auth: ResilienceConfig = field(
        default_factory=lambda: ResilienceConfig(
            name="tidal-auth",
            base_url=DEFAULT_TIDAL_AUTH_BASE_URL,
            cache=None,
        )
    )


def get_tidal_config() -> TidalConfig:
    values = require_env_vars(("TIDAL_CLIENT_ID", "TIDAL_CLIENT_SECRET"))
    country_code = (os.getenv("TIDAL_COUNTRY_CODE") or DEFAULT_TIDAL_COUNTRY_CODE).strip().upper()

    api = ResilienceConfig(
        name="tidal-api",
        base_url=os.getenv("TIDAL_API_BASE_URL") or DEFAULT_TIDAL_API_BASE_URL,
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        retry=RetryPolicy(total=3),
        cache=CacheConfig(should_cache=has_json_api_data),
        default_headers=JSON_API_HEADERS,
    )
    auth = ResilienceConfig(
        name="tidal-auth",
        base_url=os.getenv("TIDAL_AUTH_BASE_URL") or DEFAULT_TIDAL_AUTH_BASE_URL,
        retry=RetryPolicy(total=2),
        cache=None,
    )

    return TidalConfig(
        client_id=values["TIDAL_CLIENT_ID"],
        client_secret=values["TIDAL_CLIENT_SECRET"],
        country_code=country_code,
        api=api,
        auth=auth,
    )
