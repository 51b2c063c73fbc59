"""Декодированное растровое изображение в памяти.

Принципы:
- SRP: только структура пикселей и преобразования в/из numpy и PIL.
- Неизменяемость: пиксели хранятся в `bytes`, массивы отдаются только для чтения.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image


@dataclass(frozen=True)
class RasterBuffer:
    """RGBA8, строки сверху вниз, альфа не предумножена.

    Fields:
        width: Ширина, px (> 0).
        height: Высота, px (> 0).
        pixels: Ровно width * height * 4 байт.
    """
    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Некорректный размер растра: {self.width}x{self.height}")
        expected = self.width * self.height * 4
        if len(self.pixels) != expected:
            raise ValueError(f"Ожидалось {expected} байт пикселей, получено {len(self.pixels)}")

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def as_array(self) -> np.ndarray:
        """Возвращает представление (H, W, 4) uint8 без копирования (только чтение)."""
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(self.height, self.width, 4)

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        i = (y * self.width + x) * 4
        r, g, b, a = self.pixels[i:i + 4]
        return r, g, b, a

    def to_pil(self) -> Image.Image:
        return Image.frombytes("RGBA", self.size, self.pixels)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "RasterBuffer":
        """Строит растр из массива (H, W, 4); значения приводятся к uint8."""
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise ValueError(f"Ожидался массив (H, W, 4), получено {arr.shape}")
        data = np.ascontiguousarray(arr, dtype=np.uint8)
        height, width = data.shape[:2]
        return cls(width=width, height=height, pixels=data.tobytes())

    @classmethod
    def from_pil(cls, image: Image.Image) -> "RasterBuffer":
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        width, height = rgba.size
        return cls(width=width, height=height, pixels=rgba.tobytes())
