"""Rendering expression trees into RGBA pixel buffers."""

from __future__ import annotations

import math

from randomart.nodes import Node, eval_color


def to_channel(value: float) -> int:
    """Map a value in [-1, 1] to an 8-bit channel, wrapping like a byte cast."""
    scaled = (value + 1.0) * 0.5 * 255.0
    if not math.isfinite(scaled):
        return 0
    return int(scaled) & 0xFF


def _coordinate(index: int, size: int) -> float:
    if size == 1:
        return -1.0
    return index / (size - 1) * 2.0 - 1.0


def render(node: Node, width: int, height: int) -> bytes:
    """Evaluate ``node`` over [-1, 1]^2 and return row-major RGBA bytes."""
    if width <= 0 or height <= 0:
        raise ValueError("image dimensions must be positive")
    xs = [_coordinate(i, width) for i in range(width)]
    out = bytearray()
    for row in range(height):
        ny = _coordinate(row, height)
        for nx in xs:
            r, g, b = eval_color(node, nx, ny)
            out += bytes((to_channel(r), to_channel(g), to_channel(b), 255))
    return bytes(out)