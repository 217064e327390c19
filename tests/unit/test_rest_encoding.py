"""Tests for the Firestore REST value codec."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from custom_domains.domain.enums import DomainStatus
from custom_domains.infrastructure.firebase._rest_encoding import (
    encode_value,
    decode_document,
    encode_document,
)


def test_encode_scalars() -> None:
    assert encode_value(None) == {"nullValue": None}
    assert encode_value(True) == {"booleanValue": True}
    assert encode_value(10) == {"integerValue": "10"}
    assert encode_value(1.5) == {"doubleValue": 1.5}
    assert encode_value("x") == {"stringValue": "x"}


def test_enum_encodes_as_its_value() -> None:
    assert encode_value(DomainStatus.ACTIVE) == {"stringValue": "active"}


def test_timestamp_is_encoded_in_utc() -> None:
    aware = datetime(2024, 5, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    assert encode_value(aware) == {"timestampValue": "2024-05-01T12:00:00.000000Z"}


def test_records_array_of_maps() -> None:
    encoded = encode_value([{"type": "A", "priority": None}])
    assert encoded == {
        "arrayValue": {
            "values": [
                {"mapValue": {"fields": {"type": {"stringValue": "A"}, "priority": {"nullValue": None}}}}
            ]
        }
    }


def test_unsupported_type_raises() -> None:
    with pytest.raises(TypeError):
        encode_value(object())


def test_decode_nanosecond_timestamp() -> None:
    """Firestore returns nanoseconds; decoding truncates to microseconds."""
    decoded = decode_document({"t": {"timestampValue": "2024-05-01T12:00:00.123456789Z"}})
    assert decoded["t"] == datetime(2024, 5, 1, 12, 0, 0, 123456, tzinfo=UTC)


def test_document_round_trip() -> None:
    data = {
        "domain": "example.com",
        "emailEnabled": False,
        "records": [{"host": "@", "verified": True}],
        "lastCheckedAt": datetime(2024, 5, 1, 12, 0, tzinfo=UTC),
        "errorMessage": None,
    }
    assert decode_document(encode_document(data)["fields"]) == data


def test_decode_empty_fields() -> None:
    assert decode_document(None) == {}
    assert decode_document({"records": {"arrayValue": {}}}) == {"records": []}
