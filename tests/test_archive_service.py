import io
import zipfile

from icongen.models.asset_model import GeneratedAsset, MimeType
from icongen.services import archive_service

ASSETS = [
    GeneratedAsset("favicon.ico", b"\x00\x00\x01\x00ico", 48, 48, MimeType.ICO),
    GeneratedAsset("icon16.png", b"\x89PNGdata", 16, 16, MimeType.PNG),
    GeneratedAsset("thumb_1.jpg", b"\xff\xd8jpeg", 256, 192, MimeType.JPEG),
]


def test_archive_keeps_names_order_and_bytes():
    with zipfile.ZipFile(io.BytesIO(archive_service.build_archive(ASSETS))) as zf:
        assert zf.namelist() == ["favicon.ico", "icon16.png", "thumb_1.jpg"]
        for asset in ASSETS:
            assert zf.read(asset.name) == asset.data


def test_write_archive_and_asset(tmp_path):
    archive_path = archive_service.write_archive(iter(ASSETS), tmp_path / "generated_icons.zip")
    assert zipfile.is_zipfile(archive_path)

    asset_path = archive_service.write_asset(ASSETS[1], tmp_path / "icon16.png")
    assert asset_path.read_bytes() == ASSETS[1].data
