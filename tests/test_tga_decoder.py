import pytest

from icongen.errors import MalformedHeader, Truncated, UnsupportedImageType, UnsupportedPixelDepth
from icongen.services import tga_decoder


def test_top_left_32bit_reorders_bgra(tga_builder):
    rows = [
        [10, 20, 30, 40, 1, 2, 3, 4],
        [50, 60, 70, 80, 5, 6, 7, 8],
    ]
    raster = tga_decoder.decode(tga_builder(2, 2, rows, depth=32, top_left=True))

    assert (raster.width, raster.height) == (2, 2)
    assert raster.pixel(0, 0) == (30, 20, 10, 40)
    assert raster.pixel(1, 0) == (3, 2, 1, 4)
    assert raster.pixel(0, 1) == (70, 60, 50, 80)


def test_bottom_left_origin_flips_rows(tga_builder):
    # первая строка в файле - нижняя строка изображения
    rows = [
        [0, 0, 255],  # bottom: red
        [255, 0, 0],  # top: blue
    ]
    raster = tga_decoder.decode(tga_builder(1, 2, rows, depth=24, top_left=False))

    assert raster.pixel(0, 0) == (0, 0, 255, 255)
    assert raster.pixel(0, 1) == (255, 0, 0, 255)


def test_24bit_defaults_alpha_to_opaque(tga_builder):
    raster = tga_decoder.decode(tga_builder(1, 1, [[1, 2, 3]], depth=24))
    assert raster.pixel(0, 0) == (3, 2, 1, 255)


def test_grayscale_type3_replicates_value(tga_builder):
    rows = [[7, 200]]
    raster = tga_decoder.decode(tga_builder(2, 1, rows, image_type=3, depth=8))

    assert raster.pixel(0, 0) == (7, 7, 7, 255)
    assert raster.pixel(1, 0) == (200, 200, 200, 255)


def test_image_id_is_skipped(tga_builder):
    data = tga_builder(1, 1, [[9, 8, 7, 6]], depth=32, image_id=b"hello")
    assert tga_decoder.decode(data).pixel(0, 0) == (7, 8, 9, 6)


def test_dimensions_follow_header(tga_builder):
    rows = [[0, 0, 0] * 5 for _ in range(3)]
    raster = tga_decoder.decode(tga_builder(5, 3, rows, depth=24))
    assert raster.size == (5, 3)
    assert len(raster.pixels) == 5 * 3 * 4


def test_short_buffer_is_malformed_header():
    with pytest.raises(MalformedHeader):
        tga_decoder.decode(b"\x00" * 17)


def test_rle_type_raises(tga_builder):
    data = tga_builder(1, 1, [[1, 2, 3, 4]], image_type=10, depth=32)
    with pytest.raises(UnsupportedImageType):
        tga_decoder.decode(data)


@pytest.mark.parametrize("image_type", [0, 1, 9, 11])
def test_other_types_return_none(tga_builder, image_type):
    data = tga_builder(1, 1, [[1, 2, 3, 4]], image_type=image_type, depth=32)
    assert tga_decoder.decode(data) is None


@pytest.mark.parametrize("depth", [15, 16])
def test_unsupported_depth(tga_builder, depth):
    data = tga_builder(1, 1, [[0, 0]], depth=depth)
    with pytest.raises(UnsupportedPixelDepth):
        tga_decoder.decode(data)


def test_truncated_pixel_data(tga_builder):
    rows = [[1, 2, 3, 4]] * 3  # объявлено 2x2, есть только 3 пикселя
    data = tga_builder(2, 2, rows, depth=32)
    with pytest.raises(Truncated):
        tga_decoder.decode(data)


def test_truncated_counts_image_id(tga_builder):
    data = tga_builder(1, 1, [[1, 2, 3]], depth=24, image_id=b"xy")
    with pytest.raises(Truncated):
        tga_decoder.decode(data[:-1])


def test_zero_size_is_malformed(tga_builder):
    with pytest.raises(MalformedHeader):
        tga_decoder.decode(tga_builder(0, 4, [], depth=32))


def test_parse_header_fields(tga_builder):
    header = tga_decoder.parse_header(tga_builder(3, 2, [[0] * 9] * 2, depth=24, top_left=False, image_id=b"a"))
    assert header.width == 3
    assert header.height == 2
    assert header.pixel_depth == 24
    assert header.top_left is False
    assert header.data_offset == 19
