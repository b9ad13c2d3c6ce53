"""PNG encoding with per-row filter selection."""

from __future__ import annotations

import os
from collections.abc import Sequence

from randomart.checksum import crc32
from randomart.deflate import zlib_compress

_SIGNATURE = bytes((137, 80, 78, 71, 13, 10, 26, 10))
_COLOR_TYPES = {1: 0, 2: 4, 3: 2, 4: 6}
_FILTER_COUNT = 5


def _paeth(a: int, b: int, c: int) -> int:
    p = a + b - c
    pa, pb, pc = abs(p - a), abs(p - b), abs(p - c)
    if pa <= pb and pa <= pc:
        return a
    if pb <= pc:
        return b
    return c


def _filter_row(kind: int, row: bytes, prior: bytes, bpp: int) -> bytearray:
    """Apply PNG filter ``kind`` to ``row`` given the previous output row."""
    if kind == 0:
        return bytearray(row)
    out = bytearray(len(row))
    for i, value in enumerate(row):
        left = row[i - bpp] if i >= bpp else 0
        up = prior[i]
        if kind == 1:
            predicted = left
        elif kind == 2:
            predicted = up
        elif kind == 3:
            predicted = (left + up) >> 1
        else:
            upper_left = prior[i - bpp] if i >= bpp else 0
            predicted = _paeth(left, up, upper_left)
        out[i] = (value - predicted) & 0xFF
    return out


def _estimate(line: bytearray) -> int:
    return sum(b if b < 128 else 256 - b for b in line)


def _chunk(tag: bytes, payload: bytes) -> bytes:
    body = tag + payload
    return len(payload).to_bytes(4, "big") + body + crc32(body).to_bytes(4, "big")


def _rows(
    pixels: bytes, width: int, height: int, components: int, stride: int, flip: bool
) -> list[bytes]:
    row_bytes = width * components
    order: Sequence[int] = range(height - 1, -1, -1) if flip else range(height)
    return [pixels[r * stride:r * stride + row_bytes] for r in order]


def encode_png(
    pixels: bytes | bytearray | memoryview,
    width: int,
    height: int,
    components: int,
    stride: int = 0,
    flip_vertically: bool = False,
    force_filter: int = -1,
    compression_level: int = 8,
) -> bytes:
    """Encode 8-bit interleaved pixels (1=Y, 2=YA, 3=RGB, 4=RGBA) as PNG.

    ``stride`` is the distance in bytes between rows (0 means packed).
    ``force_filter`` between 0 and 4 fixes the filter for every row; any
    other value lets the encoder pick the cheapest filter per row.
    """
    if components not in _COLOR_TYPES:
        raise ValueError(f"unsupported component count: {components}")
    if width < 0 or height < 0:
        raise ValueError("image dimensions must not be negative")
    if stride == 0:
        stride = width * components
    if stride < width * components:
        raise ValueError("stride is smaller than one row of pixels")
    data = bytes(pixels)
    if height > 0 and len(data) < stride * (height - 1) + width * components:
        raise ValueError("pixel buffer is too small for the image")
    if force_filter >= _FILTER_COUNT:
        force_filter = -1

    row_bytes = width * components
    filtered = bytearray()
    prior = bytes(row_bytes)
    for row in _rows(data, width, height, components, stride, flip_vertically):
        if force_filter > -1:
            best_type = force_filter
            best_line = _filter_row(force_filter, row, prior, components)
        else:
            best_type, best_line, best_score = 0, bytearray(), None
            for kind in range(_FILTER_COUNT):
                line = _filter_row(kind, row, prior, components)
                score = _estimate(line)
                if best_score is None or score < best_score:
                    best_type, best_line, best_score = kind, line, score
        filtered.append(best_type)
        filtered += best_line
        prior = row

    header = (
        width.to_bytes(4, "big")
        + height.to_bytes(4, "big")
        + bytes((8, _COLOR_TYPES[components], 0, 0, 0))
    )
    return (
        _SIGNATURE
        + _chunk(b"IHDR", header)
        + _chunk(b"IDAT", zlib_compress(filtered, compression_level))
        + _chunk(b"IEND", b"")
    )


def write_png(
    path: str | os.PathLike[str],
    pixels: bytes | bytearray | memoryview,
    width: int,
    height: int,
    components: int,
    stride: int = 0,
    flip_vertically: bool = False,
    force_filter: int = -1,
    compression_level: int = 8,
) -> None:
    """Encode pixels as PNG and write them to ``path``."""
    encoded = encode_png(
        pixels, width, height, components, stride,
        flip_vertically, force_filter, compression_level,
    )
    with open(path, "wb") as handle:
        handle.write(encoded)