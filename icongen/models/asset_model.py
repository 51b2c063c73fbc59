"""Модели результатов генерации и фиксированная таблица выходов."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MimeType(str, Enum):
    PNG = "image/png"
    JPEG = "image/jpeg"
    ICO = "image/x-icon"

    @property
    def label(self) -> str:
        """Короткая подпись для галереи: PNG | JPEG | ICO."""
        return self.name

    @property
    def extension(self) -> str:
        return {"PNG": ".png", "JPEG": ".jpg", "ICO": ".ico"}[self.name]


class CropPolicy(Enum):
    STRETCH_FIT = "stretch_fit"  # весь источник на всю цель, пропорции не сохраняются
    CENTER_CROP_FIT = "center_crop_fit"  # равномерный масштаб по ширине, вертикальная полоса по центру


@dataclass(frozen=True)
class OutputSpec:
    name: str
    width: int
    height: int
    mime_type: MimeType
    policy: CropPolicy


@dataclass(frozen=True)
class GeneratedAsset:
    """Готовый ассет: имя файла, закодированные байты и итоговый размер."""
    name: str
    data: bytes
    width: int
    height: int
    mime_type: MimeType

    @property
    def dimensions_label(self) -> str:
        return f"{self.width}x{self.height}"


# Порядок важен: в нём же ассеты показываются в галерее и пишутся в архив.
OUTPUT_SPECS: tuple[OutputSpec, ...] = (
    OutputSpec("favicon.ico", 48, 48, MimeType.ICO, CropPolicy.STRETCH_FIT),
    OutputSpec("icon128.png", 128, 128, MimeType.PNG, CropPolicy.STRETCH_FIT),
    OutputSpec("icon48.png", 48, 48, MimeType.PNG, CropPolicy.STRETCH_FIT),
    OutputSpec("icon32.png", 32, 32, MimeType.PNG, CropPolicy.STRETCH_FIT),
    OutputSpec("icon16.png", 16, 16, MimeType.PNG, CropPolicy.STRETCH_FIT),
    OutputSpec("thumb_1.jpg", 256, 192, MimeType.JPEG, CropPolicy.CENTER_CROP_FIT),
    OutputSpec("thumb_2.jpg", 256, 256, MimeType.JPEG, CropPolicy.STRETCH_FIT),
)
