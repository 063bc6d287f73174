"""Correlation ids that tie together the log lines of one request."""

from __future__ import annotations

import time
import uuid
from typing import Final

SERVICE_SUFFIX: Final[str] = "-producer-service"


def generate_correlation_id() -> str:
    millis = int(time.time() * 1000)
    return f"producer-{millis}-{uuid.uuid4().hex[:8]}"


def build_service_correlation_id(incoming: str | None) -> str:
    """Tag an upstream id with this service, or mint a fresh one."""
    if incoming is None or not incoming.strip():
        return generate_correlation_id()
    return f"{incoming.strip()}{SERVICE_SUFFIX}"


def extract_original_correlation_id(correlation_id: str | None) -> str | None:
    if correlation_id is None:
        return None
    return correlation_id.removesuffix(SERVICE_SUFFIX)
