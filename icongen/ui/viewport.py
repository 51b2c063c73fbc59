"""Геометрия предпросмотра: масштаб и положение изображения на канве.

Не зависит от Tk, поэтому проверяется без дисплея.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

MIN_SCALE = 0.1
MAX_SCALE = 16.0


def clamp_scale(scale: float) -> float:
    return max(MIN_SCALE, min(MAX_SCALE, scale))


def _place(offset: Optional[float], scaled: int, canvas: int) -> int:
    # меньшее канвы изображение стоит по центру, большее не отрывается от краёв
    centered = (canvas - scaled) // 2
    if scaled <= canvas or offset is None:
        return centered
    return int(round(max(canvas - scaled, min(0.0, offset))))


@dataclass
class Viewport:
    """Состояние вида для одного изображения.

    Fields:
        image_size: Размер изображения (w, h).
        canvas_size: Размер канвы (w, h).
        scale: Текущий масштаб.
        offset: Левый верхний угол изображения на канве; None - по центру.
    """

    image_size: Tuple[int, int]
    canvas_size: Tuple[int, int] = (1, 1)
    scale: float = 1.0
    offset: Optional[Tuple[float, float]] = None

    @property
    def scaled_size(self) -> Tuple[int, int]:
        w, h = self.image_size
        return max(1, int(w * self.scale)), max(1, int(h * self.scale))

    def fit(self) -> None:
        """Изображение целиком помещается в канву и встаёт по центру."""
        (cw, ch), (w, h) = self.canvas_size, self.image_size
        self.scale = clamp_scale(min(cw / w, ch / h))
        self.offset = None

    def place(self) -> Tuple[int, int]:
        """Прижимает смещение к допустимому диапазону и возвращает его."""
        (sw, sh), (cw, ch) = self.scaled_size, self.canvas_size
        ox, oy = self.offset if self.offset is not None else (None, None)
        x, y = _place(ox, sw, cw), _place(oy, sh, ch)
        self.offset = (x, y)
        return x, y

    def zoom_at(self, cx: int, cy: int, factor: float) -> bool:
        """Меняет масштаб так, чтобы точка под курсором осталась на месте."""
        new_scale = clamp_scale(self.scale * factor)
        if abs(new_scale - self.scale) < 1e-6:
            return False
        x, y = self.place()
        ix, iy = (cx - x) / self.scale, (cy - y) / self.scale
        self.scale = new_scale
        self.offset = (cx - ix * new_scale, cy - iy * new_scale)
        return True

    def to_image(self, cx: int, cy: int) -> Optional[Tuple[int, int]]:
        """Пиксель изображения под точкой канвы или None вне изображения."""
        if self.offset is None:
            return None
        x, y = self.offset
        if cx < x or cy < y:
            return None
        ix, iy = int((cx - x) / self.scale), int((cy - y) / self.scale)
        w, h = self.image_size
        if ix >= w or iy >= h:
            return None
        return ix, iy
