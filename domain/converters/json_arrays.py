"""
Converters for JSON-array columns.

Exercise catalog columns (equipment, primary_muscles, secondary_muscles,
instructions, images) are always lists of strings on the wire. At rest they
are jsonb, but rows imported from older datasets may still hold the list as
JSON-encoded text. Reads must never fail on a bad value: anything that cannot
be parsed into a list degrades to an empty list.
"""

import json
import logging
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

JSON_ARRAY_FIELDS = (
    "equipment",
    "primary_muscles",
    "secondary_muscles",
    "instructions",
    "images",
)


def parse_json_array(
    value: Any,
    *,
    field: str = "value",
    record_id: Optional[str] = None,
) -> List[str]:
    """
    Parse a stored JSON-array value into a list of strings.

    Args:
        value: A list, a JSON-encoded string, or None
        field: Column name (for logging)
        record_id: Owning row ID (for logging)

    Returns:
        List of strings; empty list when the value is missing or malformed
    """
    if value is None or value == "":
        return []

    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None]

    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except (TypeError, ValueError) as e:
            logger.warning(f"Could not parse {field} for {record_id}: {e}")
            return []
        if isinstance(parsed, list):
            return [str(item) for item in parsed if item is not None]
        # A bare JSON string is a single-element list
        if isinstance(parsed, str):
            return [parsed]

    logger.warning(f"Unexpected {field} value for {record_id}: {type(value).__name__}")
    return []


def normalize_json_arrays(row: dict) -> dict:
    """Return a copy of an exercise row with every JSON-array column parsed."""
    normalized = dict(row)
    for field in JSON_ARRAY_FIELDS:
        normalized[field] = parse_json_array(
            row.get(field), field=field, record_id=row.get("id")
        )
    return normalized
