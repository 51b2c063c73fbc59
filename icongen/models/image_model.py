"""Модель исходного изображения, загруженного пользователем.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from icongen.models.raster import RasterBuffer


@dataclass(frozen=True)
class SourceImage:
    """Неизменяемая модель исходного файла и его метаданные.

    Fields:
        path: Путь к исходному файлу.
        raster: Декодированные пиксели (RGBA8).
        width: Ширина, px.
        height: Высота, px.
        format: Формат источника: "PNG" | "JPEG" | "TGA".
        size_bytes: Размер файла, если доступен.
    """
    path: Path
    raster: RasterBuffer
    width: int
    height: int
    format: str
    size_bytes: Optional[int]
