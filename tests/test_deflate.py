import random
import zlib

import pytest

from randomart.checksum import adler32
from randomart.deflate import zlib_compress


def test_header_bytes():
    out = zlib_compress(b"hello hello hello hello")
    assert out[:2] == b"\x78\x5e"


def test_empty_input_is_header_and_checksum_only():
    assert zlib_compress(b"") == b"\x78\x5e\x00\x00\x00\x01"


@pytest.mark.parametrize(
    "data",
    [
        b"a",
        b"abc",
        b"abcd",
        b"hello hello hello hello",
        b"\x00" * 1000,
        bytes(range(256)) * 20,
        b"abcabcabdabcabcabcabd" * 300,
    ],
)
def test_round_trip_through_zlib(data):
    assert zlib.decompress(zlib_compress(data)) == data


def test_trailer_is_adler32_big_endian():
    data = b"random art " * 50
    out = zlib_compress(data)
    assert int.from_bytes(out[-4:], "big") == adler32(data)


def test_repetitive_data_compresses():
    data = b"\x12\x34\x56\x78" * 5000
    out = zlib_compress(data)
    assert len(out) < len(data) // 10
    assert zlib.decompress(out) == data


def test_incompressible_data_uses_single_stored_block():
    data = random.Random(7).randbytes(1000)
    out = zlib_compress(data)
    assert out[2] == 1
    assert len(out) == 2 + 5 + len(data) + 4
    assert zlib.decompress(out) == data


def test_large_incompressible_data_uses_several_stored_blocks():
    data = random.Random(11).randbytes(40000)
    out = zlib_compress(data)
    assert out[2] == 0
    assert zlib.decompress(out) == data


@pytest.mark.parametrize("quality", [0, 1, 5, 8, 32])
def test_quality_levels_round_trip(quality):
    rng = random.Random(quality)
    data = bytes(rng.choice(b"abcd") for _ in range(5000))
    assert zlib.decompress(zlib_compress(data, quality)) == data


def test_long_distance_matches_round_trip():
    rng = random.Random(3)
    chunk = rng.randbytes(2000)
    data = chunk + rng.randbytes(30000) + chunk
    assert zlib.decompress(zlib_compress(data)) == data


def test_accepts_bytearray():
    data = bytearray(b"xyzxyzxyzxyz" * 10)
    assert zlib_compress(data) == zlib_compress(bytes(data))