import struct

import pytest

from bmpedit.bmp8 import Bmp8Error, Bmp8Image


def _image(width=3, height=2, values=None):
    if values is None:
        values = range(width * height)
    return Bmp8Image(width=width, height=height, pixels=bytearray(values))


def test_save_load_round_trip(tmp_path):
    image = _image(4, 3, [v * 20 for v in range(12)])
    path = tmp_path / "img.bmp"
    image.save(path)
    loaded = Bmp8Image.load(path)
    assert loaded.width == 4
    assert loaded.height == 3
    assert loaded.color_depth == 8
    assert loaded.pixels == image.pixels
    assert loaded.palette == image.palette


def test_saved_header_fields(tmp_path):
    image = _image(3, 2)
    path = tmp_path / "img.bmp"
    image.save(path)
    raw = path.read_bytes()
    assert raw[:2] == b"BM"
    assert struct.unpack_from("<I", raw, 2)[0] == len(raw)
    assert struct.unpack_from("<I", raw, 10)[0] == 54 + 1024
    assert struct.unpack_from("<I", raw, 14)[0] == 40
    assert struct.unpack_from("<II", raw, 18) == (3, 2)
    assert struct.unpack_from("<HH", raw, 26) == (1, 8)
    assert struct.unpack_from("<I", raw, 34)[0] == image.data_size


def test_load_rejects_non_bmp(tmp_path):
    path = tmp_path / "bad.bmp"
    path.write_bytes(b"XX" + bytes(2000))
    with pytest.raises(Bmp8Error):
        Bmp8Image.load(path)


def test_load_rejects_other_depth(tmp_path):
    path = tmp_path / "img.bmp"
    _image().save(path)
    raw = bytearray(path.read_bytes())
    struct.pack_into("<H", raw, 28, 24)
    path.write_bytes(bytes(raw))
    with pytest.raises(Bmp8Error):
        Bmp8Image.load(path)


def test_load_rejects_truncated_pixels(tmp_path):
    path = tmp_path / "img.bmp"
    _image(4, 4).save(path)
    path.write_bytes(path.read_bytes()[:-3])
    with pytest.raises(Bmp8Error):
        Bmp8Image.load(path)


def test_pixel_count_must_match():
    with pytest.raises(ValueError):
        Bmp8Image(width=2, height=2, pixels=bytearray(3))


def test_info_lists_dimensions():
    lines = _image(3, 2).info().splitlines()
    assert lines[0] == "Image Info:"
    assert "Width: 3" in lines
    assert "Height: 2" in lines
    assert "Color Depth: 8" in lines
    assert f"Data Size: {3 * 2}" in lines


def test_negative_is_involution():
    image = _image(3, 2, [0, 10, 100, 200, 250, 255])
    original = bytes(image.pixels)
    image.negative()
    assert image.pixels[0] == 255
    assert image.pixels[-1] == 0
    assert all(a + b == 255 for a, b in zip(original, image.pixels))
    image.negative()
    assert bytes(image.pixels) == original


def test_brightness_clamps():
    image = _image(2, 1, [10, 250])
    image.brightness(300)
    assert list(image.pixels) == [255, 255]
    image.brightness(-1000)
    assert list(image.pixels) == [0, 0]


def test_brightness_shifts_values():
    image = _image(3, 1, [10, 20, 30])
    image.brightness(5)
    assert list(image.pixels) == [15, 25, 35]


def test_threshold():
    image = _image(4, 1, [0, 99, 100, 255])
    image.threshold(100)
    assert list(image.pixels) == [0, 0, 255, 255]


def test_identity_filter_keeps_image():
    image = _image(5, 5, [(v * 37) % 256 for v in range(25)])
    before = bytes(image.pixels)
    image.apply_filter([[0, 0, 0], [0, 1, 0], [0, 0, 0]])
    assert bytes(image.pixels) == before


def test_box_blur_on_uniform_image_is_stable():
    image = _image(4, 4, [90] * 16)
    ninth = 1 / 9
    image.apply_filter([[ninth] * 3 for _ in range(3)])
    assert all(value in (89, 90) for value in image.pixels)


def test_filter_leaves_border_untouched():
    values = [(v * 11) % 256 for v in range(16)]
    image = _image(4, 4, values)
    image.apply_filter([[0, 0, 0], [0, 0, 0], [0, 0, 0]])
    for y in range(4):
        for x in range(4):
            index = y * 4 + x
            if 0 < x < 3 and 0 < y < 3:
                assert image.pixels[index] == 0
            else:
                assert image.pixels[index] == values[index]


def test_filter_clamps_results():
    image = _image(3, 3, [200] * 9)
    image.apply_filter([[0, 0, 0], [0, 2, 0], [0, 0, 0]])
    assert image.pixels[4] == 255
    image.apply_filter([[0, 0, 0], [0, -1, 0], [0, 0, 0]])
    assert image.pixels[4] == 0


def test_even_kernel_rejected():
    with pytest.raises(ValueError):
        _image(4, 4, [0] * 16).apply_filter([[1, 0], [0, 1]])


def test_filter_on_small_image_does_nothing():
    image = _image(2, 2, [1, 2, 3, 4])
    image.apply_filter([[1, 1, 1], [1, 1, 1], [1, 1, 1]])
    assert list(image.pixels) == [1, 2, 3, 4]