"""
Purpose: Encoded polyline codec (the compressed geometry format OSRM, Google and
most routing services use).

Encoding per coordinate value:
- scale by 10**precision and round half away from zero
- delta against the previous point (the first point against (0, 0))
- zig-zag: v < 0 -> ~(v << 1), else v << 1
- split into 5-bit groups, least significant first, OR 0x20 on every group but the last
- add 63 to each group and emit it as one ASCII character

Points are (lat, lon). Precision 5 is the classic format, 6 is "polyline6".
"""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence, Tuple

LatLon = Tuple[float, float]

DEFAULT_PRECISION = 5

_OFFSET = 63
_CONTINUATION = 0x20
_GROUP_MASK = 0x1F


class MalformedPolyline(ValueError):
    """Raised when an encoded polyline cannot be decoded."""
    pass


def _scale(precision: int) -> int:
    if precision < 1:
        raise ValueError(f"precision must be >= 1, got {precision}")
    return 10 ** precision


def _round_half_away(value: float) -> int:
    #python's round() is banker's rounding, the wire format is not
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _encode_value(value: int, output: List[str]) -> None:
    value = ~(value << 1) if value < 0 else (value << 1)
    while value >= _CONTINUATION:
        output.append(chr((_CONTINUATION | (value & _GROUP_MASK)) + _OFFSET))
        value >>= 5
    output.append(chr(value + _OFFSET))


def encode(path: Iterable[LatLon], precision: int = DEFAULT_PRECISION) -> str:
    """
    Encode a sequence of (lat, lon) points.

    An empty path encodes to "".
    """
    factor = _scale(precision)
    output: List[str] = []
    previous_lat = 0
    previous_lon = 0

    for lat, lon in path:
        scaled_lat = _round_half_away(lat * factor)
        scaled_lon = _round_half_away(lon * factor)
        _encode_value(scaled_lat - previous_lat, output)
        _encode_value(scaled_lon - previous_lon, output)
        previous_lat = scaled_lat
        previous_lon = scaled_lon

    return "".join(output)


def _decode_values(text: str) -> List[int]:
    values: List[int] = []
    result = 0
    shift = 0
    in_group = False

    for position, char in enumerate(text):
        group = ord(char) - _OFFSET
        if group < 0 or group > 0x3F:
            raise MalformedPolyline(f"invalid character {char!r} at position {position}")

        result |= (group & _GROUP_MASK) << shift
        shift += 5
        in_group = True

        if group < _CONTINUATION:
            #undo zig-zag
            values.append(~(result >> 1) if result & 1 else (result >> 1))
            result = 0
            shift = 0
            in_group = False

    if in_group:
        raise MalformedPolyline("polyline ends in the middle of a value (continuation bit set on last character)")

    return values


def decode(text: str, precision: int = DEFAULT_PRECISION) -> List[LatLon]:
    """
    Decode an encoded polyline into a list of (lat, lon) points.

    Raises:
        MalformedPolyline: truncated value, character outside the alphabet,
        or a latitude without its longitude.
    """
    factor = _scale(precision)
    values = _decode_values(text)

    if len(values) % 2 != 0:
        raise MalformedPolyline(f"odd number of values ({len(values)}): latitude without longitude")

    path: List[LatLon] = []
    lat = 0
    lon = 0
    for index in range(0, len(values), 2):
        lat += values[index]
        lon += values[index + 1]
        path.append((lat / factor, lon / factor))

    return path


def quantize(path: Sequence[LatLon], precision: int = DEFAULT_PRECISION) -> List[LatLon]:
    """Snap points to the grid the codec can represent exactly."""
    factor = _scale(precision)
    return [
        (_round_half_away(lat * factor) / factor, _round_half_away(lon * factor) / factor)
        for lat, lon in path
    ]
