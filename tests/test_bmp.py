import struct

import pytest

from randomart.bmp import encode_bmp, write_bmp


def _fields(bmp):
    magic, size, _, _, offset, info = struct.unpack_from("<2sIHHII", bmp, 0)
    width, height, planes, bpp = struct.unpack_from("<iiHH", bmp, 18)
    return magic, size, offset, info, width, height, planes, bpp


def test_rgb_header_fields():
    bmp = encode_bmp(bytes(range(12)), 2, 2, 3)
    magic, size, offset, info, width, height, planes, bpp = _fields(bmp)
    assert magic == b"BM"
    assert size == len(bmp)
    assert offset == 14 + 40
    assert info == 40
    assert (width, height, planes, bpp) == (2, 2, 1, 24)


def test_rgb_pixel_is_bgr_with_row_padding():
    bmp = encode_bmp(bytes([1, 2, 3]), 1, 1, 3)
    assert bmp[54:] == bytes([3, 2, 1, 0])


def test_rows_are_stored_bottom_up():
    pixels = bytes([1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12])
    body = encode_bmp(pixels, 2, 2, 3)[54:]
    assert body[:6] == bytes([9, 8, 7, 12, 11, 10])
    assert body[8:14] == bytes([3, 2, 1, 6, 5, 4])


def test_flip_vertically_stores_top_row_first():
    pixels = bytes([1, 2, 3, 4, 5, 6])
    body = encode_bmp(pixels, 1, 2, 3, flip_vertically=True)[54:]
    assert body[:3] == bytes([3, 2, 1])
    assert body[4:7] == bytes([6, 5, 4])


def test_grey_is_expanded_to_three_channels():
    body = encode_bmp(bytes([42]), 1, 1, 1)[54:]
    assert body[:3] == bytes([42, 42, 42])


def test_grey_alpha_drops_alpha():
    body = encode_bmp(bytes([42, 7]), 1, 1, 2)[54:]
    assert body[:3] == bytes([42, 42, 42])
    assert len(body) == 4


def test_rgba_uses_v4_header_and_keeps_alpha():
    bmp = encode_bmp(bytes([1, 2, 3, 4]), 1, 1, 4)
    magic, size, offset, info, width, height, planes, bpp = _fields(bmp)
    assert offset == 14 + 108
    assert info == 108
    assert bpp == 32
    assert size == len(bmp)
    masks = struct.unpack_from("<4I", bmp, 54)
    assert masks == (0xFF0000, 0xFF00, 0xFF, 0xFF000000)
    assert bmp[offset:] == bytes([3, 2, 1, 4])


def test_file_size_accounts_for_padding():
    bmp = encode_bmp(bytes(5 * 3 * 3), 5, 3, 3)
    row = 5 * 3 + ((-5 * 3) & 3)
    assert len(bmp) == 54 + row * 3


def test_negative_dimensions_raise():
    with pytest.raises(ValueError):
        encode_bmp(b"", -1, 1, 3)


def test_short_buffer_raises():
    with pytest.raises(ValueError):
        encode_bmp(bytes(3), 2, 2, 3)


def test_write_bmp_writes_encoded_bytes(tmp_path):
    pixels = bytes(range(24))
    path = tmp_path / "out.bmp"
    write_bmp(path, pixels, 2, 3, 4)
    assert path.read_bytes() == encode_bmp(pixels, 2, 3, 4)