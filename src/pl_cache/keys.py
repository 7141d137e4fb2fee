"""Cache key grammar.

  properties:<json(filterPredicate)>:<json(sortSpec)>:<page>:<limit>
  favorites:<userId>:<page>:<limit>
  recommendations:<userId>:received|sent:<page>:<limit>

JSON is compact (no spaces, non-ASCII kept as-is) so keys match the
JSON.stringify output other clients of the same cache produce.
"""

import json
import uuid
from typing import Any

from src.pl_common.enums import RecommendationBox

PROPERTIES_PATTERN = "properties:*"
ALL_FAVORITES_PATTERN = "favorites:*"
ALL_RECOMMENDATIONS_PATTERN = "recommendations:*"


def dump_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def owner_key(user_id: uuid.UUID | str) -> str:
    """Canonical string form of a user id used inside keys and patterns.

    Only UUIDs (or their string form) are accepted, so a key written with one
    representation is always reachable by a pattern built from the other.
    """
    if isinstance(user_id, uuid.UUID):
        return str(user_id)
    if isinstance(user_id, str):
        return str(uuid.UUID(user_id))
    raise TypeError(f"user id must be a UUID or str, got {type(user_id).__name__}")


def property_list_key(
    predicate: dict[str, Any], sort: dict[str, int], page: int, limit: int
) -> str:
    return f"properties:{dump_json(predicate)}:{dump_json(sort)}:{page}:{limit}"


def favorites_key(user_id: uuid.UUID | str, page: int, limit: int) -> str:
    return f"favorites:{owner_key(user_id)}:{page}:{limit}"


def favorites_pattern(user_id: uuid.UUID | str) -> str:
    return f"favorites:{owner_key(user_id)}:*"


def recommendations_key(
    user_id: uuid.UUID | str, box: RecommendationBox, page: int, limit: int
) -> str:
    return f"recommendations:{owner_key(user_id)}:{box.value}:{page}:{limit}"


def recommendations_pattern(user_id: uuid.UUID | str) -> str:
    return f"recommendations:{owner_key(user_id)}:*"
