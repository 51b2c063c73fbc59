"""Минимальный ICO-контейнер с одним PNG-изображением внутри.

Заголовок (6 байт): reserved | type=1 | count=1.
Запись каталога (16 байт): width | height | colors | reserved | planes | bpp | size | offset.
"""
from __future__ import annotations

import struct

from icongen.errors import EncodeFailure

ICON_DIR = struct.Struct("<HHH")
ICON_DIR_ENTRY = struct.Struct("<BBBBHHII")
IMAGE_OFFSET = ICON_DIR.size + ICON_DIR_ENTRY.size  # 22


def _dimension_byte(value: int) -> int:
    # 0 в каталоге означает 256
    return 0 if value >= 256 else value


def encode(png_bytes: bytes, width: int, height: int) -> bytes:
    if width <= 0 or height <= 0:
        raise ValueError(f"Некорректный размер иконки: {width}x{height}")
    if not png_bytes:
        raise EncodeFailure("Пустые PNG-данные для ICO")

    header = ICON_DIR.pack(0, 1, 1)
    entry = ICON_DIR_ENTRY.pack(
        _dimension_byte(width),
        _dimension_byte(height),
        0,  # палитра не используется
        0,
        1,  # цветовые плоскости
        32,  # бит на пиксель
        len(png_bytes),
        IMAGE_OFFSET,
    )
    return header + entry + bytes(png_bytes)
