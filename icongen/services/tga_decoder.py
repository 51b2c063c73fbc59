"""Декодер несжатых TGA (truecolor и grayscale).

Поддерживаются типы 2 и 3 с глубиной 8/24/32 бит. RLE (тип 10) отклоняется
явной ошибкой; прочие типы дают `None`, чтобы вызывающий мог считать файл
"не TGA". Цветовые палитры не поддерживаются: длина палитры не читается.
"""
from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from typing import Optional

import numpy as np

from icongen.errors import MalformedHeader, Truncated, UnsupportedImageType, UnsupportedPixelDepth
from icongen.models.raster import RasterBuffer

logger = logging.getLogger(__name__)

HEADER_SIZE = 18

TYPE_TRUECOLOR = 2
TYPE_GRAYSCALE = 3
TYPE_RLE_TRUECOLOR = 10

ORIGIN_TOP_LEFT = 0x20


@dataclass(frozen=True)
class TgaHeader:
    id_length: int
    color_map_type: int
    image_type: int
    width: int
    height: int
    pixel_depth: int
    descriptor: int

    @property
    def top_left(self) -> bool:
        """Бит 5 дескриптора: строка 0 источника является верхней."""
        return bool(self.descriptor & ORIGIN_TOP_LEFT)

    @property
    def data_offset(self) -> int:
        return HEADER_SIZE + self.id_length


def parse_header(data: bytes) -> TgaHeader:
    if len(data) < HEADER_SIZE:
        raise MalformedHeader(f"Файл слишком мал для TGA: {len(data)} байт (нужно минимум {HEADER_SIZE})")
    id_length, color_map_type, image_type = data[0], data[1], data[2]
    # смещения 3..11: палитра и начало координат, не используются
    width, height = struct.unpack_from("<HH", data, 12)
    pixel_depth, descriptor = data[16], data[17]
    return TgaHeader(id_length, color_map_type, image_type, width, height, pixel_depth, descriptor)


def decode(data: bytes) -> Optional[RasterBuffer]:
    """Разбирает TGA в `RasterBuffer`.

    Returns:
        Растр RGBA8 сверху вниз, либо `None` для нераспознанного не-RLE типа.

    Raises:
        MalformedHeader: меньше 18 байт или нулевой размер.
        UnsupportedImageType: RLE-сжатый TGA (тип 10).
        UnsupportedPixelDepth: байт на пиксель не 1, 3 или 4.
        Truncated: пиксельных данных меньше, чем объявлено в заголовке.
    """
    header = parse_header(data)

    if header.image_type not in (TYPE_TRUECOLOR, TYPE_GRAYSCALE):
        if header.image_type == TYPE_RLE_TRUECOLOR:
            raise UnsupportedImageType(
                "RLE-сжатые TGA не поддерживаются. Сохраните файл как несжатый TGA."
            )
        logger.warning(f"TGA image type {header.image_type} is not supported, only uncompressed RGB/grayscale")
        return None

    bpp, rem = divmod(header.pixel_depth, 8)
    if rem or bpp not in (1, 3, 4):
        raise UnsupportedPixelDepth(f"Неподдерживаемая глубина цвета: {header.pixel_depth} бит")

    if header.width == 0 or header.height == 0:
        raise MalformedHeader(f"Нулевой размер изображения в заголовке: {header.width}x{header.height}")

    image_size = header.width * header.height * bpp
    if len(data) < header.data_offset + image_size:
        raise Truncated(
            f"TGA обрезан: нужно {header.data_offset + image_size} байт, есть {len(data)}"
        )

    src = np.frombuffer(data, dtype=np.uint8, count=image_size, offset=header.data_offset)
    src = src.reshape(header.height, header.width, bpp)
    if not header.top_left:
        # строки хранятся снизу вверх
        src = src[::-1]

    out = np.empty((header.height, header.width, 4), dtype=np.uint8)
    if bpp == 1:
        out[..., 0:3] = src  # оттенки серого в R, G, B
        out[..., 3] = 255
    else:
        # BGR(A) -> RGBA
        out[..., 0] = src[..., 2]
        out[..., 1] = src[..., 1]
        out[..., 2] = src[..., 0]
        out[..., 3] = src[..., 3] if bpp == 4 else 255

    return RasterBuffer.from_array(out)
