"""Кодирование растров в PNG/JPEG через Pillow и подготовка фона для JPEG."""
from __future__ import annotations

import io

from PIL import Image

from icongen.errors import CompositionFailure, EncodeFailure
from icongen.models.raster import RasterBuffer

WHITE = (255, 255, 255)

# Качество JPEG задаётся в диапазоне 0.0–1.0
JPEG_QUALITY = 0.9


def _pillow_quality(quality: float) -> int:
    if not 0.0 <= quality <= 1.0:
        raise ValueError(f"Качество JPEG должно быть в диапазоне 0.0–1.0, получено {quality}")
    # выше 95 Pillow отключает часть оптимизаций и раздувает файл
    return max(1, min(95, int(round(quality * 100))))


def flatten(raster: RasterBuffer, background: tuple[int, int, int] = WHITE) -> RasterBuffer:
    """Накладывает растр на сплошной фон с учётом альфы; результат полностью непрозрачен."""
    try:
        image = raster.to_pil()
        canvas = Image.new("RGB", image.size, background)
        canvas.paste(image, mask=image.split()[-1])
    except (ValueError, OSError) as exc:
        raise CompositionFailure(f"Не удалось наложить изображение на фон: {exc}") from exc
    return RasterBuffer.from_pil(canvas)


def encode_png(raster: RasterBuffer) -> bytes:
    """PNG без потерь, альфа сохраняется как есть (не предумноженная)."""
    buffer = io.BytesIO()
    try:
        raster.to_pil().save(buffer, format="PNG")
    except (ValueError, OSError) as exc:
        raise EncodeFailure(f"PNG-кодирование не удалось: {exc}") from exc
    data = buffer.getvalue()
    if not data:
        raise EncodeFailure("PNG-кодировщик вернул пустой результат")
    return data


def encode_jpeg(raster: RasterBuffer, quality: float = JPEG_QUALITY) -> bytes:
    """JPEG без альфа-канала; прозрачность должна быть сведена заранее (`flatten`)."""
    buffer = io.BytesIO()
    try:
        raster.to_pil().convert("RGB").save(buffer, format="JPEG", quality=_pillow_quality(quality))
    except OSError as exc:
        raise EncodeFailure(f"JPEG-кодирование не удалось: {exc}") from exc
    data = buffer.getvalue()
    if not data:
        raise EncodeFailure("JPEG-кодировщик вернул пустой результат")
    return data
