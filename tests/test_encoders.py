import io

import pytest
from PIL import Image

from icongen.services import encoders


def test_png_round_trip_is_lossless_with_straight_alpha(solid_raster):
    raster = solid_raster(8, 4, (200, 100, 50, 77))
    data = encoders.encode_png(raster)

    with Image.open(io.BytesIO(data)) as image:
        assert image.format == "PNG"
        assert image.mode == "RGBA"
        assert image.tobytes() == raster.pixels


def test_flatten_transparent_becomes_white(solid_raster):
    out = encoders.flatten(solid_raster(4, 4, (0, 0, 0, 0)))
    assert out.pixel(2, 2) == (255, 255, 255, 255)


def test_flatten_blends_half_alpha(solid_raster):
    r, g, b, a = encoders.flatten(solid_raster(2, 2, (0, 0, 0, 128))).pixel(0, 0)
    assert a == 255
    assert 125 <= r <= 128
    assert r == g == b


def test_flatten_keeps_opaque_pixels(solid_raster):
    assert encoders.flatten(solid_raster(2, 2, (10, 20, 30, 255))).pixel(1, 1) == (10, 20, 30, 255)


def test_jpeg_encodes_rgb(solid_raster):
    data = encoders.encode_jpeg(solid_raster(16, 16, (0, 128, 255, 255)), 0.9)
    with Image.open(io.BytesIO(data)) as image:
        assert image.format == "JPEG"
        assert image.mode == "RGB"
        assert image.size == (16, 16)


@pytest.mark.parametrize("quality, expected", [(0.9, 90), (0.0, 1), (1.0, 95), (0.5, 50)])
def test_quality_mapping(quality, expected):
    assert encoders._pillow_quality(quality) == expected


def test_quality_out_of_range():
    with pytest.raises(ValueError):
        encoders._pillow_quality(1.5)
