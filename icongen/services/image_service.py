"""Загрузка исходных изображений и маршрутизация по декодерам.

Принципы:
- SRP: класс отвечает только за проверку входа, чтение и декодирование.
- OCP: новый формат добавляется отдельной веткой в `decode`.
- `.tga` разбирается собственным декодером, остальное - через Pillow.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from icongen.errors import NativeDecodeFailure, TgaDecodeError, UnsupportedInputFormat
from icongen.models.asset_model import GeneratedAsset
from icongen.models.image_model import SourceImage
from icongen.models.raster import RasterBuffer
from icongen.services import tga_decoder

logger = logging.getLogger(__name__)

ACCEPTED_EXTENSIONS = ("png", "jpg", "jpeg", "tga")

_FORMAT_LABELS = {"png": "PNG", "jpg": "JPEG", "jpeg": "JPEG", "tga": "TGA"}


# 16-битные оттенки серого: Pillow при convert("RGBA") обрезает значения до 255
_WIDE_GRAY_MODES = ("I", "I;16", "I;16B", "I;16L", "I;16N")


def _to_rgba(image: Image.Image) -> Image.Image:
    """Применяет EXIF-ориентацию, сужает 16-битный серый до 8 бит и приводит к RGBA."""
    image = ImageOps.exif_transpose(image)
    if image.mode in _WIDE_GRAY_MODES:
        wide = np.clip(np.asarray(image, dtype=np.int64), 0, 65535)
        image = Image.fromarray((wide >> 8).astype(np.uint8))
    return image.convert("RGBA")


def decode_native(data: bytes) -> RasterBuffer:
    """Декодирует PNG/JPEG средствами Pillow в RGBA8."""
    try:
        with Image.open(io.BytesIO(data)) as image:
            rgba = _to_rgba(image)
    except UnidentifiedImageError as exc:
        raise NativeDecodeFailure("Файл не является изображением или повреждён") from exc
    except Image.DecompressionBombError as exc:
        raise NativeDecodeFailure(f"Изображение слишком большое: {exc}") from exc
    except (OSError, ValueError) as exc:
        raise NativeDecodeFailure(f"Не удалось декодировать изображение: {exc}") from exc
    return RasterBuffer.from_pil(rgba)


class ImageService:
    def extension_of(self, filename: str) -> str:
        """Возвращает расширение в нижнем регистре или бросает `UnsupportedInputFormat`."""
        suffix = Path(filename).suffix.lower().lstrip(".")
        if suffix not in ACCEPTED_EXTENSIONS:
            raise UnsupportedInputFormat(
                "Неверный формат файла. Загрузите PNG, JPG или TGA."
            )
        return suffix

    def decode(self, data: bytes, filename: str) -> RasterBuffer:
        """Декодирует байты файла, выбирая декодер по расширению имени."""
        ext = self.extension_of(filename)
        if ext == "tga":
            raster = tga_decoder.decode(data)
            if raster is None:
                raise TgaDecodeError("Не удалось разобрать TGA-файл: тип изображения не поддерживается.")
        else:
            raster = decode_native(data)
        logger.info(f"Decoded {filename}: {raster.width}x{raster.height}")
        return raster

    def load_image(self, file_path: str | Path) -> SourceImage:
        """Читает файл с диска, декодирует его и возвращает вместе с метаданными.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `SourceImage` с растром RGBA8, размерами, форматом и размером файла.

        Raises:
            UnsupportedInputFormat: расширение не png/jpg/jpeg/tga.
            FileNotFoundError: если путь не существует или не указывает на файл.
            TgaDecodeError, NativeDecodeFailure: файл не удалось декодировать.
        """
        path = Path(file_path)
        ext = self.extension_of(path.name)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        data = path.read_bytes()
        raster = self.decode(data, path.name)

        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        return SourceImage(
            path=path,
            raster=raster,
            width=raster.width,
            height=raster.height,
            format=_FORMAT_LABELS[ext],
            size_bytes=size_bytes,
        )

    def open_asset(self, asset: GeneratedAsset) -> Image.Image:
        """Открывает сгенерированный ассет для предпросмотра (RGBA)."""
        with Image.open(io.BytesIO(asset.data)) as image:
            return image.convert("RGBA")
