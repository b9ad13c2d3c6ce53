"""Uncompressed BMP encoding (24-bit, or 32-bit with alpha)."""

from __future__ import annotations

import os
import struct

_FILE_HEADER = 14
_INFO_HEADER = 40
_V4_HEADER = 108


def _rows(data: bytes, width: int, height: int, components: int, flip: bool):
    row_bytes = width * components
    # BMP stores the bottom row first unless flipped.
    order = range(height) if flip else range(height - 1, -1, -1)
    for r in order:
        yield data[r * row_bytes:(r + 1) * row_bytes]


def _rgb_body(data: bytes, width: int, height: int, components: int, flip: bool) -> bytes:
    pad = (-width * 3) & 3
    out = bytearray()
    for row in _rows(data, width, height, components, flip):
        for i in range(0, len(row), components):
            if components in (1, 2):
                out += bytes((row[i],)) * 3
            else:
                out += bytes((row[i + 2], row[i + 1], row[i]))
        out += bytes(pad)
    return bytes(out)


def _rgba_body(data: bytes, width: int, height: int, flip: bool) -> bytes:
    out = bytearray()
    for row in _rows(data, width, height, 4, flip):
        for i in range(0, len(row), 4):
            out += bytes((row[i + 2], row[i + 1], row[i], row[i + 3]))
    return bytes(out)


def encode_bmp(
    pixels: bytes | bytearray | memoryview,
    width: int,
    height: int,
    components: int,
    flip_vertically: bool = False,
) -> bytes:
    """Encode 8-bit interleaved pixels as a BMP file.

    Grey input is expanded to RGB; two-component input drops its alpha.
    Four-component input is written as 32-bit with an alpha mask.
    """
    if components not in (1, 2, 3, 4):
        raise ValueError(f"unsupported component count: {components}")
    if width < 0 or height < 0:
        raise ValueError("image dimensions must not be negative")
    data = bytes(pixels)
    if len(data) < width * height * components:
        raise ValueError("pixel buffer is too small for the image")

    if components != 4:
        pad = (-width * 3) & 3
        offset = _FILE_HEADER + _INFO_HEADER
        header = struct.pack(
            "<2sIHHI" "IiiHH6I",
            b"BM", offset + (width * 3 + pad) * height, 0, 0, offset,
            _INFO_HEADER, width, height, 1, 24, 0, 0, 0, 0, 0, 0,
        )
        return header + _rgb_body(data, width, height, components, flip_vertically)

    offset = _FILE_HEADER + _V4_HEADER
    header = struct.pack(
        "<2sIHHI" "IiiHH6I" "4I" "I" "9I" "3I",
        b"BM", offset + width * height * 4, 0, 0, offset,
        _V4_HEADER, width, height, 1, 32, 3, 0, 0, 0, 0, 0,
        0x00FF0000, 0x0000FF00, 0x000000FF, 0xFF000000,
        0,
        *([0] * 9),
        0, 0, 0,
    )
    return header + _rgba_body(data, width, height, flip_vertically)


def write_bmp(
    path: str | os.PathLike[str],
    pixels: bytes | bytearray | memoryview,
    width: int,
    height: int,
    components: int,
    flip_vertically: bool = False,
) -> None:
    """Encode pixels as BMP and write them to ``path``."""
    encoded = encode_bmp(pixels, width, height, components, flip_vertically)
    with open(path, "wb") as handle:
        handle.write(encoded)