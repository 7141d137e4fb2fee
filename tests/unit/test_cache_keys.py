"""Unit tests for cache key construction."""

import uuid

import pytest

from src.pl_cache.keys import (
    dump_json,
    favorites_key,
    favorites_pattern,
    owner_key,
    property_list_key,
    recommendations_key,
    recommendations_pattern,
)
from src.pl_common.enums import RecommendationBox

USER = uuid.UUID("6f1c1b8e-1f2a-4b3c-9d4e-5f6a7b8c9d0e")


def test_dump_json_is_compact_and_keeps_unicode() -> None:
    assert dump_json({"location": {"$icontains": "São Paulo"}}) == (
        '{"location":{"$icontains":"São Paulo"}}'
    )


def test_property_list_key() -> None:
    key = property_list_key({"propertyType": "Villa"}, {"price": 1}, 3, 25)
    assert key == 'properties:{"propertyType":"Villa"}:{"price":1}:3:25'


def test_favorites_key_and_pattern() -> None:
    assert favorites_key(USER, 1, 10) == f"favorites:{USER}:1:10"
    assert favorites_pattern(USER) == f"favorites:{USER}:*"


def test_recommendation_keys_per_box() -> None:
    assert recommendations_key(USER, RecommendationBox.RECEIVED, 1, 10) == (
        f"recommendations:{USER}:received:1:10"
    )
    assert recommendations_key(USER, RecommendationBox.SENT, 2, 5) == (
        f"recommendations:{USER}:sent:2:5"
    )
    assert recommendations_pattern(USER) == f"recommendations:{USER}:*"


def test_owner_key_normalizes_string_form() -> None:
    assert owner_key(str(USER).upper()) == str(USER)
    assert favorites_key(str(USER), 1, 10) == favorites_key(USER, 1, 10)


def test_owner_key_rejects_non_uuid() -> None:
    with pytest.raises(ValueError):
        owner_key("not-a-uuid")
    with pytest.raises(TypeError):
        owner_key(42)  # type: ignore[arg-type]
