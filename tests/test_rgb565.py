import numpy as np
import pytest

import rgb565


def _pixel(r, g, b, a=255):
    return np.array([[[r, g, b, a]]], dtype=np.uint8)


@pytest.mark.parametrize(
    "rgb, expected",
    [
        ((0xF8, 0xFC, 0xF8), b"\xff\xff"),
        ((0, 0, 0), b"\x00\x00"),
        ((255, 255, 255), b"\xff\xff"),
        ((0x12, 0x34, 0x56), b"\x11\xaa"),
        ((0xFF, 0, 0), b"\xf8\x00"),
        ((0, 0xFF, 0), b"\x07\xe0"),
        ((0, 0, 0xFF), b"\x00\x1f"),
    ],
)
def test_pack_single_pixel(rgb, expected):
    assert rgb565.pack(_pixel(*rgb)) == expected


def test_alpha_is_ignored():
    assert rgb565.pack(_pixel(0x12, 0x34, 0x56, 0)) == rgb565.pack(_pixel(0x12, 0x34, 0x56, 255))


def test_low_bits_are_truncated_not_rounded():
    # 0x07 has only sub-5-bit content and must vanish
    assert rgb565.pack(_pixel(0x07, 0x03, 0x07)) == b"\x00\x00"


def test_output_length_and_determinism():
    rng = np.random.default_rng(1234)
    frame = rng.integers(0, 256, size=(240, 320, 4), dtype=np.uint8)

    first = rgb565.pack(frame)
    second = rgb565.pack(frame)
    assert len(first) == 320 * 240 * 2
    assert first == second


def test_row_major_order():
    frame = np.zeros((2, 2, 4), dtype=np.uint8)
    frame[0, 1] = (255, 255, 255, 255)  # top-right
    frame[1, 0] = (255, 0, 0, 255)      # bottom-left

    out = rgb565.pack(frame)
    assert out == b"\x00\x00" + b"\xff\xff" + b"\xf8\x00" + b"\x00\x00"


def test_unpack_restores_full_scale():
    data = b"\xff\xff\x00\x00\xf8\x00"
    rgb = rgb565.unpack(data, 3, 1)
    assert rgb.shape == (1, 3, 3)
    assert rgb[0, 0].tolist() == [255, 255, 255]
    assert rgb[0, 1].tolist() == [0, 0, 0]
    assert rgb[0, 2].tolist() == [255, 0, 0]


def test_unpack_rejects_wrong_size():
    with pytest.raises(ValueError):
        rgb565.unpack(b"\x00" * 5, 2, 2)
