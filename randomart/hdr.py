"""Radiance RGBE (.hdr) encoding with per-channel run-length compression."""

from __future__ import annotations

import math
import os
from collections.abc import Sequence

_HEADER = b"#?RADIANCE\n# Written by randomart\nFORMAT=32-bit_rle_rgbe\n"
_MAX_DUMP = 128
_MAX_RUN = 127
_RLE_MIN_WIDTH = 8
_RLE_MAX_WIDTH = 32768


def linear_to_rgbe(red: float, green: float, blue: float) -> tuple[int, int, int, int]:
    """Convert a linear colour into shared-exponent RGBE bytes."""
    largest = max(red, green, blue)
    if largest < 1e-32:
        return (0, 0, 0, 0)
    mantissa, exponent = math.frexp(largest)
    scale = mantissa * 256.0 / largest
    return (
        int(red * scale) & 0xFF,
        int(green * scale) & 0xFF,
        int(blue * scale) & 0xFF,
        (exponent + 128) & 0xFF,
    )


def _pixel_rgbe(scanline: Sequence[float], index: int, components: int):
    base = index * components
    if components >= 3:
        return linear_to_rgbe(scanline[base], scanline[base + 1], scanline[base + 2])
    value = scanline[base]
    return linear_to_rgbe(value, value, value)


def _rle_channel(channel: bytes) -> bytes:
    out = bytearray()
    width = len(channel)
    x = 0
    while x < width:
        r = x
        while r + 2 < width:
            if channel[r] == channel[r + 1] == channel[r + 2]:
                break
            r += 1
        if r + 2 >= width:
            r = width
        while x < r:
            length = min(r - x, _MAX_DUMP)
            out.append(length)
            out += channel[x:x + length]
            x += length
        if r + 2 < width:
            while r < width and channel[r] == channel[x]:
                r += 1
            while x < r:
                length = min(r - x, _MAX_RUN)
                out.append(length + 128)
                out.append(channel[x])
                x += length
    return bytes(out)


def _scanline(scanline: Sequence[float], width: int, components: int) -> bytes:
    pixels = [_pixel_rgbe(scanline, i, components) for i in range(width)]
    if width < _RLE_MIN_WIDTH or width >= _RLE_MAX_WIDTH:
        return b"".join(bytes(p) for p in pixels)
    out = bytearray((2, 2, (width >> 8) & 0xFF, width & 0xFF))
    for channel in zip(*pixels):
        out += _rle_channel(bytes(channel))
    return bytes(out)


def encode_hdr(
    data: Sequence[float],
    width: int,
    height: int,
    components: int,
    flip_vertically: bool = False,
) -> bytes:
    """Encode interleaved linear floats as a Radiance HDR file.

    Alpha is discarded; one- and two-component input is replicated to grey.
    """
    if data is None or width <= 0 or height <= 0:
        raise ValueError("image must have positive dimensions and data")
    if components not in (1, 2, 3, 4):
        raise ValueError(f"unsupported component count: {components}")
    values = list(data)
    row_len = width * components
    if len(values) < row_len * height:
        raise ValueError("pixel buffer is too small for the image")

    out = bytearray(_HEADER)
    out += (
        f"EXPOSURE=          1.0000000000000\n\n-Y {height} +X {width}\n"
    ).encode("ascii")
    for i in range(height):
        row = height - 1 - i if flip_vertically else i
        out += _scanline(values[row * row_len:(row + 1) * row_len], width, components)
    return bytes(out)


def write_hdr(
    path: str | os.PathLike[str],
    data: Sequence[float],
    width: int,
    height: int,
    components: int,
    flip_vertically: bool = False,
) -> None:
    """Encode floats as HDR and write them to ``path``."""
    encoded = encode_hdr(data, width, height, components, flip_vertically)
    with open(path, "wb") as handle:
        handle.write(encoded)