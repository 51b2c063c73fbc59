import io

import numpy as np
import pytest
from PIL import Image, ImageOps

from icongen.errors import NativeDecodeFailure, TgaDecodeError, UnsupportedInputFormat
from icongen.models.asset_model import GeneratedAsset, MimeType
from icongen.services.image_service import ImageService, decode_native


@pytest.fixture
def service():
    return ImageService()


@pytest.mark.parametrize("name, ext", [("a.png", "png"), ("B.JPG", "jpg"), ("c.Jpeg", "jpeg"), ("d.tga", "tga")])
def test_accepted_extensions(service, name, ext):
    assert service.extension_of(name) == ext


@pytest.mark.parametrize("name", ["a.gif", "b.webp", "noext", "archive.png.zip"])
def test_rejected_extensions(service, name):
    with pytest.raises(UnsupportedInputFormat):
        service.extension_of(name)


def test_decode_native_png(encode_png):
    raster = decode_native(encode_png(Image.new("RGB", (3, 2), (1, 2, 3))))
    assert raster.size == (3, 2)
    assert raster.pixel(2, 1) == (1, 2, 3, 255)


def test_decode_native_garbage():
    with pytest.raises(NativeDecodeFailure):
        decode_native(b"definitely not an image")


def test_tga_routed_to_own_decoder(service, tga_builder):
    raster = service.decode(tga_builder(1, 1, [[3, 2, 1, 255]]), "icon.tga")
    assert raster.pixel(0, 0) == (1, 2, 3, 255)


def test_png_bytes_named_tga_fail_as_tga(service, encode_png):
    # у PNG третий байт 0x4E ('N'): такой тип TGA не распознаётся
    with pytest.raises(TgaDecodeError):
        service.decode(encode_png(Image.new("RGBA", (8, 8))), "fake.tga")


def test_load_image_reads_metadata(service, tmp_path, encode_png):
    path = tmp_path / "logo.png"
    path.write_bytes(encode_png(Image.new("RGBA", (20, 10), (5, 5, 5, 255))))

    source = service.load_image(path)

    assert source.path == path
    assert (source.width, source.height) == (20, 10)
    assert source.format == "PNG"
    assert source.size_bytes == path.stat().st_size


def test_load_image_missing_file(service, tmp_path):
    with pytest.raises(FileNotFoundError):
        service.load_image(tmp_path / "missing.png")


def test_open_asset_for_preview(service, encode_png):
    asset = GeneratedAsset("icon16.png", encode_png(Image.new("RGBA", (16, 16))), 16, 16, MimeType.PNG)
    image = service.open_asset(asset)
    assert image.mode == "RGBA"
    assert image.size == (16, 16)


def test_sixteen_bit_gray_png_scaled_to_eight_bits(encode_png):
    # 0, 1040, 2080, ... 65520: значение столбца 32 равно 33280, старший байт 130
    row = np.linspace(0, 65520, 64).astype(np.uint16)
    wide = Image.fromarray(np.tile(row, (64, 1)))
    assert wide.mode.startswith("I")

    raster = decode_native(encode_png(wide))

    assert raster.pixel(0, 32) == (0, 0, 0, 255)
    assert raster.pixel(32, 32) == (130, 130, 130, 255)
    assert raster.pixel(63, 32) == (255, 255, 255, 255)


def test_exif_orientation_applied():
    image = Image.new("RGB", (40, 20), (0, 0, 255))
    image.paste((255, 0, 0), (0, 0, 20, 20))
    exif = Image.Exif()
    exif[0x0112] = 6  # повёрнуто на 90° по часовой
    buf = io.BytesIO()
    image.save(buf, format="JPEG", exif=exif.tobytes())

    raster = decode_native(buf.getvalue())

    assert raster.size == (20, 40)
    # левая (красная) половина оказывается сверху
    top, bottom = raster.pixel(10, 5), raster.pixel(10, 35)
    assert top[0] > 200 and top[2] < 60
    assert bottom[2] > 200 and bottom[0] < 60


def test_oversized_image_reported_as_decode_failure(monkeypatch, encode_png):
    data = encode_png(Image.new("RGBA", (64, 64)))
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    with pytest.raises(NativeDecodeFailure):
        decode_native(data)


def test_pillow_value_error_wrapped(monkeypatch, encode_png):
    def broken(image):
        raise ValueError("bad data")

    data = encode_png(Image.new("RGB", (4, 4)))
    monkeypatch.setattr(ImageOps, "exif_transpose", broken)
    with pytest.raises(NativeDecodeFailure):
        decode_native(data)
