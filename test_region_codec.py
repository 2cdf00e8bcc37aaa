"""
RegionCodec Tests
=================

Exact round trips, deterministic output, legacy records and per-record
failure on malformed bytes.

Usage:
    pytest test_region_codec.py
"""

import json
import random

import pytest

from antaria_codec import (
    DecodeError,
    EncodeError,
    MalformedRecord,
    RegionCodec,
    SCHEMA_VERSION,
)
from antaria_trace import GeoPoint


@pytest.fixture
def codec():
    return RegionCodec()


def random_points(rng: random.Random, count: int):
    return [
        GeoPoint(rng.uniform(-90.0, 90.0), rng.uniform(-180.0, 180.0))
        for _ in range(count)
    ]


# ========== Round trips ==========

def test_round_trip_is_exact_for_awkward_doubles(codec):
    """Values with no short decimal form survive bit for bit."""
    points = [
        GeoPoint(0.1 + 0.2, 1 / 3),
        GeoPoint(-89.99999999999999, 179.99999999999997),
        GeoPoint(5e-324, -5e-324),
        GeoPoint(35.68123456789012, 139.76712345678901),
        GeoPoint(90.0, -180.0),
    ]
    decoded = codec.decode(codec.encode(points))
    assert decoded == points
    for original, restored in zip(points, decoded):
        assert restored.latitude.hex() == original.latitude.hex()
        assert restored.longitude.hex() == original.longitude.hex()


@pytest.mark.parametrize("count", [0, 1, 2, 3, 50, 1000])
def test_round_trip_preserves_order_for_any_length(codec, count):
    points = random_points(random.Random(count), count)
    assert codec.decode(codec.encode(points)) == points


def test_encode_is_deterministic(codec):
    points = random_points(random.Random(7), 20)
    assert codec.encode(points) == codec.encode(list(points))


def test_encode_layout(codec):
    data = codec.encode([GeoPoint(1.5, 2.0)])
    assert data == b'{"schema_version":"1.0","points":[{"lat":1.5,"lon":2.0}]}'
    assert json.loads(data)["schema_version"] == SCHEMA_VERSION


def test_decode_accepts_bytearray_and_memoryview(codec):
    data = codec.encode([GeoPoint(1.0, 2.0)])
    assert codec.decode(bytearray(data)) == [GeoPoint(1.0, 2.0)]
    assert codec.decode(memoryview(data)) == [GeoPoint(1.0, 2.0)]


# ========== Legacy records ==========

def test_decode_legacy_bare_array(codec):
    """Records written before versioning are a bare array of lat/lon objects."""
    data = b'[{"lat":35.6812,"lon":139.7671},{"lat":35.6813,"lon":139.7672},{"lat":35,"lon":139}]'
    assert codec.decode(data) == [
        GeoPoint(35.6812, 139.7671),
        GeoPoint(35.6813, 139.7672),
        GeoPoint(35.0, 139.0),
    ]


def test_decode_ignores_extra_fields(codec):
    data = b'{"schema_version":"1.0","points":[{"lat":1.0,"lon":2.0,"alt":5}],"note":"x"}'
    assert codec.decode(data) == [GeoPoint(1.0, 2.0)]


# ========== Malformed records ==========

@pytest.mark.parametrize("data", [
    b"",
    b"\xff\xfe",
    b"not json",
    b"{}",
    b"null",
    b"42",
    b'{"schema_version":"1.0"}',
    b'{"points":[]}',
    b'{"schema_version":1.0,"points":[]}',
    b'{"schema_version":"2.0","points":[]}',
    b'{"schema_version":"1.0","points":{"lat":1,"lon":2}}',
    b'{"schema_version":"1.0","points":[{"lat":1.0}]}',
    b'{"schema_version":"1.0","points":[{"lat":"1.0","lon":2.0}]}',
    b'{"schema_version":"1.0","points":[{"lat":true,"lon":2.0}]}',
    b'{"schema_version":"1.0","points":[{"lat":null,"lon":2.0}]}',
    b'{"schema_version":"1.0","points":[[1.0,2.0]]}',
    b'{"schema_version":"1.0","points":[{"lat":91.0,"lon":2.0}]}',
    b'{"schema_version":"1.0","points":[{"lat":NaN,"lon":2.0}]}',
    b'{"schema_version":"1.0","points":[{"lat":1e400,"lon":2.0}]}',
    b'[{"lat":1.0,"lon":"east"}]',
    b"[" * 100000,
])
def test_decode_rejects_malformed_records(codec, data):
    with pytest.raises(MalformedRecord):
        codec.decode(data)


def test_decode_rejects_truncated_record(codec):
    data = codec.encode(random_points(random.Random(3), 5))
    for cut in (1, len(data) // 2, len(data) - 1):
        with pytest.raises(MalformedRecord):
            codec.decode(data[:cut])


def test_truncated_record_does_not_affect_sibling(codec):
    """Per-record failure: the next record in the same batch still decodes."""
    good_points = random_points(random.Random(11), 4)
    good = codec.encode(good_points)
    bad = codec.encode(random_points(random.Random(12), 4))[:-7]

    decoded = []
    for blob in (bad, good):
        try:
            decoded.append(codec.decode(blob))
        except MalformedRecord:
            continue

    assert decoded == [good_points]


def test_decode_rejects_str_input(codec):
    with pytest.raises(MalformedRecord):
        codec.decode('{"schema_version":"1.0","points":[]}')


def test_error_taxonomy():
    assert DecodeError is MalformedRecord
    assert issubclass(MalformedRecord, ValueError)
    assert not issubclass(EncodeError, ValueError)


# ========== Encode failures ==========

def test_encode_rejects_non_points(codec):
    with pytest.raises(EncodeError):
        codec.encode([GeoPoint(1.0, 2.0), object()])


def test_codec_rejects_unknown_write_version():
    with pytest.raises(ValueError):
        RegionCodec(schema_version="9.9")
