"""A small zlib/DEFLATE compressor using fixed Huffman codes."""

from __future__ import annotations

from randomart.checksum import adler32

_LENGTH_BASE = (
    3, 4, 5, 6, 7, 8, 9, 10, 11, 13, 15, 17, 19, 23, 27, 31, 35, 43, 51, 59,
    67, 83, 99, 115, 131, 163, 195, 227, 258, 259,
)
_LENGTH_EXTRA = (
    0, 0, 0, 0, 0, 0, 0, 0, 1, 1, 1, 1, 2, 2, 2, 2, 3, 3, 3, 3,
    4, 4, 4, 4, 5, 5, 5, 5, 0,
)
_DIST_BASE = (
    1, 2, 3, 4, 5, 7, 9, 13, 17, 25, 33, 49, 65, 97, 129, 193, 257, 385, 513,
    769, 1025, 1537, 2049, 3073, 4097, 6145, 8193, 12289, 16385, 24577, 32768,
)
_DIST_EXTRA = (
    0, 0, 0, 0, 1, 1, 2, 2, 3, 3, 4, 4, 5, 5, 6, 6, 7, 7, 8, 8,
    9, 9, 10, 10, 11, 11, 12, 12, 13, 13,
)

_HASH_SIZE = 16384
_MAX_MATCH = 258
_WINDOW = 32768
_MAX_STORED_BLOCK = 32767
_MASK32 = 0xFFFFFFFF


def _bit_reverse(code: int, bits: int) -> int:
    result = 0
    for _ in range(bits):
        result = (result << 1) | (code & 1)
        code >>= 1
    return result


def _hash3(data: bytes, pos: int) -> int:
    h = data[pos] + (data[pos + 1] << 8) + (data[pos + 2] << 16)
    h ^= (h << 3) & _MASK32
    h = (h + (h >> 5)) & _MASK32
    h ^= (h << 4) & _MASK32
    h = (h + (h >> 17)) & _MASK32
    h ^= (h << 25) & _MASK32
    h = (h + (h >> 6)) & _MASK32
    return h & (_HASH_SIZE - 1)


def _match_length(data: bytes, a: int, b: int, limit: int) -> int:
    limit = min(limit, _MAX_MATCH)
    length = 0
    while length < limit and data[a + length] == data[b + length]:
        length += 1
    return length


class _BitWriter:
    """Collects LSB-first bit fields into a byte stream."""

    def __init__(self, prefix: bytes) -> None:
        self.out = bytearray(prefix)
        self._buffer = 0
        self._count = 0

    @property
    def pending(self) -> int:
        return self._count

    def add(self, code: int, bits: int) -> None:
        self._buffer |= code << self._count
        self._count += bits
        while self._count >= 8:
            self.out.append(self._buffer & 0xFF)
            self._buffer >>= 8
            self._count -= 8

    def huffman(self, code: int, bits: int) -> None:
        self.add(_bit_reverse(code, bits), bits)

    def symbol(self, n: int) -> None:
        """Emit a literal/length symbol with the fixed Huffman table."""
        if n <= 143:
            self.huffman(0x30 + n, 8)
        elif n <= 255:
            self.huffman(0x190 + n - 144, 9)
        elif n <= 279:
            self.huffman(n - 256, 7)
        else:
            self.huffman(0xC0 + n - 280, 8)


def _stored_blocks(data: bytes) -> bytearray:
    out = bytearray()
    start = 0
    while start < len(data):
        block_len = min(len(data) - start, _MAX_STORED_BLOCK)
        out.append(1 if len(data) - start == block_len else 0)
        out += block_len.to_bytes(2, "little")
        out += (~block_len & 0xFFFF).to_bytes(2, "little")
        out += data[start:start + block_len]
        start += block_len
    return out


def zlib_compress(data: bytes | bytearray | memoryview, quality: int = 8) -> bytes:
    """Compress ``data`` into a zlib stream.

    ``quality`` bounds how many earlier positions are remembered per hash
    bucket (values below 5 are raised to 5). If the compressed stream would
    be larger than storing the data uncompressed, stored blocks are used.
    """
    data = bytes(data)
    size = len(data)
    quality = max(quality, 5)

    writer = _BitWriter(b"\x78\x5e")
    writer.add(1, 1)  # BFINAL
    writer.add(1, 2)  # fixed Huffman

    table: dict[int, list[int]] = {}
    i = 0
    while i < size - 3:
        h = _hash3(data, i)
        best = 3
        best_pos: int | None = None
        bucket = table.get(h)
        if bucket:
            for pos in bucket:
                if pos > i - _WINDOW:
                    d = _match_length(data, pos, i, size - i)
                    if d >= best:
                        best = d
                        best_pos = pos
            if len(bucket) == 2 * quality:
                del bucket[:quality]
            bucket.append(i)
        else:
            table[h] = [i]

        if best_pos is not None:
            # Lazy matching: prefer a literal if the next byte starts a longer match.
            for pos in table.get(_hash3(data, i + 1), ()):
                if pos > i - (_WINDOW - 1):
                    if _match_length(data, pos, i + 1, size - i - 1) > best:
                        best_pos = None
                        break

        if best_pos is not None:
            distance = i - best_pos
            code = 0
            while best > _LENGTH_BASE[code + 1] - 1:
                code += 1
            writer.symbol(code + 257)
            if _LENGTH_EXTRA[code]:
                writer.add(best - _LENGTH_BASE[code], _LENGTH_EXTRA[code])
            code = 0
            while distance > _DIST_BASE[code + 1] - 1:
                code += 1
            writer.add(_bit_reverse(code, 5), 5)
            if _DIST_EXTRA[code]:
                writer.add(distance - _DIST_BASE[code], _DIST_EXTRA[code])
            i += best
        else:
            writer.symbol(data[i])
            i += 1

    for byte in data[i:]:
        writer.symbol(byte)
    writer.symbol(256)
    while writer.pending:
        writer.add(0, 1)

    out = writer.out
    stored_limit = size + 2 + ((size + _MAX_STORED_BLOCK - 1) // _MAX_STORED_BLOCK) * 5
    if len(out) > stored_limit:
        out = bytearray(out[:2])
        out += _stored_blocks(data)

    out += adler32(data).to_bytes(4, "big")
    return bytes(out)