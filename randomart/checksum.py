"""CRC-32 and Adler-32 checksums used by the PNG and zlib writers."""

from __future__ import annotations

_CRC_POLYNOMIAL = 0xEDB88320
_ADLER_MODULUS = 65521
# Largest number of bytes that can be summed before the 32-bit sums overflow.
_ADLER_BLOCK = 5552


def _make_crc_table() -> tuple[int, ...]:
    table = []
    for byte in range(256):
        crc = byte
        for _ in range(8):
            crc = (crc >> 1) ^ _CRC_POLYNOMIAL if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_CRC_TABLE = _make_crc_table()


def crc32(data: bytes | bytearray | memoryview) -> int:
    """Return the CRC-32 (as used by PNG chunks) of ``data``."""
    crc = 0xFFFFFFFF
    table = _CRC_TABLE
    for byte in bytes(data):
        crc = (crc >> 8) ^ table[(byte ^ crc) & 0xFF]
    return crc ^ 0xFFFFFFFF


def adler32(data: bytes | bytearray | memoryview) -> int:
    """Return the Adler-32 checksum that trails a zlib stream."""
    raw = bytes(data)
    s1, s2 = 1, 0
    start = 0
    block = len(raw) % _ADLER_BLOCK
    while start < len(raw):
        for byte in raw[start:start + block]:
            s1 += byte
            s2 += s1
        s1 %= _ADLER_MODULUS
        s2 %= _ADLER_MODULUS
        start += block
        block = _ADLER_BLOCK
    return (s2 << 16) | s1