import io
import struct

import numpy as np
import pytest
from PIL import Image

from icongen.models.raster import RasterBuffer


def _build_tga(width, height, pixel_rows, *, image_type=2, depth=32, top_left=True, image_id=b""):
    """Собирает TGA-файл; pixel_rows - строки в порядке хранения в файле."""
    descriptor = 0x20 if top_left else 0x00
    header = struct.pack(
        "<BBBHHBHHHHBB",
        len(image_id), 0, image_type,
        0, 0, 0,  # color map spec
        0, 0,  # origin
        width, height, depth, descriptor,
    )
    body = b"".join(bytes(row) for row in pixel_rows)
    return header + image_id + body


def _solid_raster(width, height, rgba):
    arr = np.empty((height, width, 4), dtype=np.uint8)
    arr[...] = rgba
    return RasterBuffer.from_array(arr)


def _encode_png(image):
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def tga_builder():
    return _build_tga


@pytest.fixture
def solid_raster():
    return _solid_raster


@pytest.fixture
def encode_png():
    return _encode_png


@pytest.fixture
def opaque_png_512():
    """512x512 непрозрачный PNG с градиентом."""
    x = np.linspace(0, 255, 512).astype(np.uint8)
    arr = np.zeros((512, 512, 4), dtype=np.uint8)
    arr[..., 0] = x[None, :]
    arr[..., 1] = x[:, None]
    arr[..., 2] = 128
    arr[..., 3] = 255
    return _encode_png(Image.fromarray(arr))


@pytest.fixture
def transparent_png():
    return _encode_png(Image.new("RGBA", (64, 64), (0, 0, 0, 0)))
