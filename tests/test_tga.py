import pytest

from randomart.tga import encode_tga, write_tga


def _decode(blob: bytes, components: int) -> bytes:
    """Decode a TGA produced by the encoder back into top-down input order."""
    image_type = blob[2]
    width = int.from_bytes(blob[12:14], "little")
    height = int.from_bytes(blob[14:16], "little")
    size = blob[16] // 8
    pos = 18
    pixels = []
    total = width * height
    if image_type in (2, 3):
        for _ in range(total):
            pixels.append(blob[pos:pos + size])
            pos += size
    else:
        while len(pixels) < total:
            head = blob[pos]
            pos += 1
            count = (head & 0x7F) + 1
            if head & 0x80:
                pixels.extend([blob[pos:pos + size]] * count)
                pos += size
            else:
                for _ in range(count):
                    pixels.append(blob[pos:pos + size])
                    pos += size
    assert pos == len(blob)

    def restore(p: bytes) -> bytes:
        if components == 3:
            return bytes((p[2], p[1], p[0]))
        if components == 4:
            return bytes((p[2], p[1], p[0], p[3]))
        return p

    rows = [pixels[r * width:(r + 1) * width] for r in range(height)]
    rows.reverse()
    return b"".join(restore(p) for row in rows for p in row)


def _image(width, height, components, pattern):
    return bytes(pattern(i) & 0xFF for i in range(width * height * components))


def test_raw_header_layout():
    blob = encode_tga(bytes([1, 2, 3, 4, 5, 6]), 2, 1, 3, rle=False)
    assert blob[:18] == bytes(
        [0, 0, 2, 0, 0, 0, 0, 0, 0, 0, 0, 0, 2, 0, 1, 0, 24, 0]
    )
    assert blob[18:] == bytes([3, 2, 1, 6, 5, 4])


def test_rle_header_marks_compression_and_alpha():
    blob = encode_tga(bytes(8), 2, 1, 4, rle=True)
    assert blob[2] == 10
    assert blob[16] == 32
    assert blob[17] == 8


def test_grey_image_type():
    raw = encode_tga(bytes(4), 2, 2, 1, rle=False)
    packed = encode_tga(bytes(4), 2, 2, 1, rle=True)
    assert raw[2] == 3
    assert packed[2] == 11
    assert raw[16] == 8


def test_run_of_identical_pixels_is_one_packet():
    blob = encode_tga(bytes([9, 8, 7] * 3), 3, 1, 3, rle=True)
    assert blob[18:] == bytes([0x82, 7, 8, 9])


@pytest.mark.parametrize("components", [1, 2, 3, 4])
@pytest.mark.parametrize("rle", [True, False])
def test_round_trip_varied_pixels(components, rle):
    width, height = 7, 5
    data = _image(width, height, components, lambda i: (i * 37) // 5)
    blob = encode_tga(data, width, height, components, rle=rle)
    assert _decode(blob, components) == data


@pytest.mark.parametrize("components", [1, 3, 4])
def test_round_trip_with_runs(components):
    width, height = 300, 3
    data = _image(width, height, components, lambda i: (i // (components * 40)) * 11)
    blob = encode_tga(data, width, height, components, rle=True)
    assert _decode(blob, components) == data
    assert len(blob) < 18 + len(data)


def test_flip_reverses_row_order():
    width, height, components = 4, 3, 3
    data = _image(width, height, components, lambda i: i * 3)
    row_bytes = width * components
    rows = [data[r * row_bytes:(r + 1) * row_bytes] for r in range(height)]
    flipped_input = b"".join(reversed(rows))
    for rle in (True, False):
        assert encode_tga(data, width, height, components, rle, True) == encode_tga(
            flipped_input, width, height, components, rle, False
        )


def test_empty_image_is_header_only():
    assert len(encode_tga(b"", 0, 0, 3)) == 18


def test_rejects_bad_components():
    with pytest.raises(ValueError):
        encode_tga(bytes(5), 1, 1, 5)


def test_rejects_negative_dimensions():
    with pytest.raises(ValueError):
        encode_tga(b"", -1, 1, 3)


def test_rejects_short_buffer():
    with pytest.raises(ValueError):
        encode_tga(bytes(5), 2, 1, 3)


def test_write_tga_matches_encoding(tmp_path):
    data = _image(3, 2, 4, lambda i: i * 13)
    target = tmp_path / "out.tga"
    write_tga(target, data, 3, 2, 4)
    assert target.read_bytes() == encode_tga(data, 3, 2, 4)