"""Truevision TGA encoding, raw or run-length compressed."""

from __future__ import annotations

import os
import struct
from collections.abc import Iterator

_MAX_PACKET = 128
_MAX_DIMENSION = 0xFFFF


def _file_pixel(pixel: bytes, components: int) -> bytes:
    """Reorder one input pixel into TGA's BGR(A) byte order."""
    if components == 3:
        return bytes((pixel[2], pixel[1], pixel[0]))
    if components == 4:
        return bytes((pixel[2], pixel[1], pixel[0], pixel[3]))
    return bytes(pixel)


def _rows(
    data: bytes, width: int, height: int, components: int, flip: bool
) -> Iterator[list[bytes]]:
    """Yield rows as lists of pixels, bottom row first unless flipped."""
    row_bytes = width * components
    order = range(height) if flip else range(height - 1, -1, -1)
    for r in order:
        row = data[r * row_bytes:(r + 1) * row_bytes]
        yield [row[k:k + components] for k in range(0, row_bytes, components)]


def _rle_row(row: list[bytes], components: int) -> bytes:
    out = bytearray()
    count = len(row)
    i = 0
    while i < count:
        length = 1
        differs = True
        if i < count - 1:
            length = 2
            differs = row[i] != row[i + 1]
            k = i + 2
            if differs:
                prev = i
                while k < count and length < _MAX_PACKET:
                    if row[prev] != row[k]:
                        prev += 1
                        length += 1
                    else:
                        length -= 1
                        break
                    k += 1
            else:
                while k < count and length < _MAX_PACKET and row[i] == row[k]:
                    length += 1
                    k += 1

        if differs:
            out.append(length - 1)
            for pixel in row[i:i + length]:
                out += _file_pixel(pixel, components)
        else:
            out.append((length - 129) & 0xFF)
            out += _file_pixel(row[i], components)
        i += length
    return bytes(out)


def encode_tga(
    pixels: bytes | bytearray | memoryview,
    width: int,
    height: int,
    components: int,
    rle: bool = True,
    flip_vertically: bool = False,
) -> bytes:
    """Encode 8-bit interleaved pixels (1=Y, 2=YA, 3=RGB, 4=RGBA) as TGA."""
    if components not in (1, 2, 3, 4):
        raise ValueError(f"unsupported component count: {components}")
    if width < 0 or height < 0:
        raise ValueError("image dimensions must not be negative")
    if width > _MAX_DIMENSION or height > _MAX_DIMENSION:
        raise ValueError("image dimensions exceed the TGA limit of 65535")
    data = bytes(pixels)
    if len(data) < width * height * components:
        raise ValueError("pixel buffer is too small for the image")

    has_alpha = components in (2, 4)
    color_bytes = components - 1 if has_alpha else components
    image_type = 3 if color_bytes < 2 else 2
    if rle:
        image_type += 8

    header = struct.pack(
        "<BBBHHBHHHHBB",
        0, 0, image_type,
        0, 0, 0,
        0, 0, width, height,
        (color_bytes + has_alpha) * 8, has_alpha * 8,
    )
    body = bytearray()
    for row in _rows(data, width, height, components, flip_vertically):
        if rle:
            body += _rle_row(row, components)
        else:
            for pixel in row:
                body += _file_pixel(pixel, components)
    return header + bytes(body)


def write_tga(
    path: str | os.PathLike[str],
    pixels: bytes | bytearray | memoryview,
    width: int,
    height: int,
    components: int,
    rle: bool = True,
    flip_vertically: bool = False,
) -> None:
    """Encode pixels as TGA and write them to ``path``."""
    encoded = encode_tga(pixels, width, height, components, rle, flip_vertically)
    with open(path, "wb") as handle:
        handle.write(encoded)