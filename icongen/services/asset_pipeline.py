"""Конвейер генерации ассетов: одно декодирование, семь независимых веток.

Каждая ветка: resample -> (flatten для JPEG) -> encode (-> ICO-обёртка).
Ошибка кодирования или композиции пропускает только свой ассет.
"""
from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

import numpy as np

from icongen.errors import CompositionFailure, EncodeFailure
from icongen.models.asset_model import OUTPUT_SPECS, GeneratedAsset, MimeType, OutputSpec
from icongen.models.raster import RasterBuffer
from icongen.services import encoders, ico_encoder
from icongen.services.image_service import ImageService
from icongen.services.resampler import premultiply, resample

logger = logging.getLogger(__name__)


def render_asset(
    raster: RasterBuffer, spec: OutputSpec, premultiplied: Optional[np.ndarray] = None
) -> GeneratedAsset:
    """Строит один ассет по правилу `spec`; исходный растр только читается."""
    resized = resample(raster, spec.width, spec.height, spec.policy, premultiplied)

    if spec.mime_type is MimeType.JPEG:
        data = encoders.encode_jpeg(encoders.flatten(resized), encoders.JPEG_QUALITY)
    elif spec.mime_type is MimeType.ICO:
        data = ico_encoder.encode(encoders.encode_png(resized), spec.width, spec.height)
    else:
        data = encoders.encode_png(resized)

    return GeneratedAsset(
        name=spec.name,
        data=data,
        width=resized.width,
        height=resized.height,
        mime_type=spec.mime_type,
    )


class AssetPipeline:
    """Оркестрация: декодирование и генерация фиксированного набора ассетов.

    Args:
        image_service: Маршрутизация входа по декодерам.
        workers: Число потоков для веток; 1 - последовательно.
        specs: Таблица выходов (по умолчанию `OUTPUT_SPECS`).
    """

    def __init__(
        self,
        image_service: Optional[ImageService] = None,
        workers: int = 1,
        specs: Sequence[OutputSpec] = OUTPUT_SPECS,
    ) -> None:
        self._image_service = image_service or ImageService()
        self._workers = max(1, int(workers))
        self._specs = tuple(specs)

    def run(self, data: bytes, filename: str) -> List[GeneratedAsset]:
        """Декодирует файл и генерирует ассеты. Ошибки декодирования прерывают прогон."""
        raster = self._image_service.decode(data, filename)
        return self.generate(raster)

    def generate(self, raster: RasterBuffer) -> List[GeneratedAsset]:
        """Результат упорядочен как таблица выходов, независимо от порядка завершения веток."""
        started = time.perf_counter()
        # предумножение общее для всех веток и не меняется ими
        premul = premultiply(raster)
        if self._workers > 1:
            with ThreadPoolExecutor(max_workers=self._workers) as pool:
                results = list(pool.map(lambda spec: self._branch(raster, premul, spec), self._specs))
        else:
            results = [self._branch(raster, premul, spec) for spec in self._specs]

        assets = [asset for asset in results if asset is not None]
        elapsed = time.perf_counter() - started
        logger.info(f"Generated {len(assets)}/{len(self._specs)} assets in {elapsed:.2f}s")
        return assets

    def _branch(self, raster: RasterBuffer, premul: np.ndarray, spec: OutputSpec) -> Optional[GeneratedAsset]:
        try:
            return render_asset(raster, spec, premul)
        except (EncodeFailure, CompositionFailure) as exc:
            logger.warning(f"Skipping {spec.name}: {exc}")
            return None
