"""Python values <-> Firestore REST typed values (Document.fields).

DomainConfig documents only use null, bool, int, float, str, timestamps,
arrays of maps (records) and enums (stored as their string value).
"""

import re
from datetime import UTC, datetime
from enum import Enum
from typing import Any

# Firestore timestamps carry up to nine fractional digits; datetime keeps six.
_NANOS_RE = re.compile(r"(\.\d{6})\d+")
_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def encode_value(value: Any) -> dict[str, Any]:
    """Typed Firestore value for value. Raises TypeError for anything else."""
    if isinstance(value, Enum):
        value = value.value
    if value is None:
        return {"nullValue": None}
    # bool before int: bool is an int subclass.
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return {"timestampValue": value.astimezone(UTC).strftime(_TIMESTAMP_FORMAT)}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(v) for v in value]}}
    if isinstance(value, dict):
        return {"mapValue": {"fields": {k: encode_value(v) for k, v in value.items()}}}
    raise TypeError(f"Unsupported Firestore value type: {type(value).__name__}")


def encode_document(data: dict[str, Any]) -> dict[str, Any]:
    """Request body for a document write."""
    return {"fields": {k: encode_value(v) for k, v in data.items()}}


def decode_value(typed: dict[str, Any]) -> Any:
    """Inverse of encode_value (enums come back as plain strings)."""
    if "timestampValue" in typed:
        raw = _NANOS_RE.sub(r"\1", typed["timestampValue"])
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if "integerValue" in typed:
        return int(typed["integerValue"])
    if "arrayValue" in typed:
        return [decode_value(v) for v in typed["arrayValue"].get("values") or []]
    if "mapValue" in typed:
        return decode_document(typed["mapValue"].get("fields"))
    for key in ("stringValue", "booleanValue", "doubleValue"):
        if key in typed:
            return typed[key]
    return None


def decode_document(fields: dict[str, Any] | None) -> dict[str, Any]:
    """Plain dict from a Document.fields mapping (missing or empty -> {})."""
    return {k: decode_value(v) for k, v in (fields or {}).items()}
