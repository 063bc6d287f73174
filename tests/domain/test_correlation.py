from __future__ import annotations

import re

from musichub.domain.correlation import (
    build_service_correlation_id,
    extract_original_correlation_id,
    generate_correlation_id,
)


def test_generated_ids_are_unique_and_prefixed() -> None:
    first = generate_correlation_id()

    assert re.fullmatch(r"producer-\d+-[0-9a-f]{8}", first)
    assert first != generate_correlation_id()


def test_incoming_id_is_tagged_with_the_service() -> None:
    tagged = build_service_correlation_id(" req-42 ")

    assert tagged == "req-42-producer-service"
    assert extract_original_correlation_id(tagged) == "req-42"


def test_blank_incoming_id_generates_a_new_one() -> None:
    assert build_service_correlation_id("  ").startswith("producer-")
    assert build_service_correlation_id(None).startswith("producer-")
    assert extract_original_correlation_id(None) is None
