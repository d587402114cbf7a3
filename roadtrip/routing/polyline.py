"""Encoded polyline codec.

Implements Google's encoded polyline algorithm: each coordinate is scaled by
1e5, delta-encoded against the previous point, zigzag-encoded and written as
5-bit chunks offset by 63.
https://developers.google.com/maps/documentation/utilities/polylinealgorithm
"""

from __future__ import annotations

from typing import Iterable, Sequence

from .errors import PolylineDecodeError, UnsupportedRouteError

PRECISION = 1e5

LatLng = tuple[float, float]


def _decode_value(encoded: str, index: int) -> tuple[int, int]:
    result = 0
    shift = 0
    while True:
        if index >= len(encoded):
            raise PolylineDecodeError(f"Polyline truncated at position {index}")
        b = ord(encoded[index]) - 63
        if b < 0 or b > 63:
            raise PolylineDecodeError(f"Invalid polyline character {encoded[index]!r} at position {index}")
        index += 1
        result |= (b & 0x1F) << shift
        shift += 5
        if b < 0x20:
            break
    value = ~(result >> 1) if result & 1 else result >> 1
    return value, index


def decode_polyline(encoded: str) -> list[LatLng]:
    if not isinstance(encoded, str):
        raise PolylineDecodeError("Polyline must be a string")

    points: list[LatLng] = []
    index = 0
    lat = 0
    lng = 0

    while index < len(encoded):
        dlat, index = _decode_value(encoded, index)
        dlng, index = _decode_value(encoded, index)
        lat += dlat
        lng += dlng
        points.append((lat / PRECISION, lng / PRECISION))

    return points


def _encode_value(value: int) -> str:
    value = ~(value << 1) if value < 0 else value << 1
    chunks = []
    while value >= 0x20:
        chunks.append(chr((0x20 | (value & 0x1F)) + 63))
        value >>= 5
    chunks.append(chr(value + 63))
    return "".join(chunks)


def encode_polyline(points: Iterable[Sequence[float]]) -> str:
    out = []
    prev_lat = 0
    prev_lng = 0
    for lat, lng in points:
        ilat = int(round(lat * PRECISION))
        ilng = int(round(lng * PRECISION))
        out.append(_encode_value(ilat - prev_lat))
        out.append(_encode_value(ilng - prev_lng))
        prev_lat, prev_lng = ilat, ilng
    return "".join(out)


def check_route_points(points: Sequence[Sequence[float]]) -> None:
    """Reject paths that jump across the antimeridian."""
    for (_, lng1), (_, lng2) in zip(points, points[1:]):
        if abs(lng2 - lng1) > 180:
            raise UnsupportedRouteError("Routes crossing the antimeridian are not supported")
