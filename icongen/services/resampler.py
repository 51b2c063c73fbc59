"""Масштабирование и кадрирование растра до точного размера.

Фильтр: сепарабельное "шатровое" ядро радиусом max(1, scale) пикселей источника.
При увеличении это билинейная интерполяция, при уменьшении - взвешенное
усреднение по площади. Цвет фильтруется в предумноженном виде, чтобы
прозрачные пиксели не давали тёмной каймы.
"""
from __future__ import annotations

import math
from typing import Optional, Tuple

import numpy as np

from icongen.models.asset_model import CropPolicy
from icongen.models.raster import RasterBuffer

Rect = Tuple[float, float, float, float]  # x, y, width, height в пикселях источника


def source_rect(src_w: int, src_h: int, target_w: int, target_h: int, policy: CropPolicy) -> Rect:
    """Возвращает прямоугольник источника, который отображается на всю цель.

    CENTER_CROP_FIT масштабирует по ширине (k = src_w / target_w) и берёт
    полосу высотой target_h * k по центру; y может быть отрицательным.
    """
    if policy is CropPolicy.STRETCH_FIT:
        return 0.0, 0.0, float(src_w), float(src_h)
    if policy is CropPolicy.CENTER_CROP_FIT:
        k = src_w / target_w
        band_h = target_h * k
        return 0.0, (src_h - band_h) / 2.0, float(src_w), band_h
    raise ValueError(f"Неизвестная политика кадрирования: {policy!r}")


def premultiply(raster: RasterBuffer) -> np.ndarray:
    """float32-копия растра с цветом, умноженным на альфу; форма (H, W, 4), только чтение.

    Считается один раз на прогон и передаётся во все ветки `resample`.
    """
    arr = raster.as_array().astype(np.float32)
    arr[..., :3] *= arr[..., 3:4] / np.float32(255.0)
    arr.setflags(write=False)
    return arr


def _sample_range(src_len: int, start: float, span: float) -> Tuple[int, int]:
    """Полуинтервал [lo, hi) допустимых индексов: пересечение полосы и изображения."""
    lo = min(max(0, int(math.floor(start))), src_len - 1)
    hi = max(min(src_len, int(math.ceil(start + span))), lo + 1)
    return lo, hi


def _box_reduce(arr: np.ndarray, factor: int, axis: int) -> np.ndarray:
    """Усредняет блоки по `factor` отсчётов вдоль оси; неполный последний блок делится на свою длину."""
    if factor <= 1:
        return arr
    length = arr.shape[axis]
    count = -(-length // factor)
    shape = list(arr.shape)
    shape[axis] = count
    acc = np.zeros(shape, dtype=np.float32)
    filled = np.zeros(count, dtype=np.float32)

    src_index = [slice(None)] * arr.ndim
    dst_index = [slice(None)] * arr.ndim
    for offset in range(factor):
        src_index[axis] = slice(offset, None, factor)
        part = arr[tuple(src_index)]
        n = part.shape[axis]
        dst_index[axis] = slice(0, n)
        acc[tuple(dst_index)] += part
        filled[:n] += 1.0

    norm_shape = [1] * arr.ndim
    norm_shape[axis] = count
    acc /= filled.reshape(norm_shape)
    return acc


def _axis_taps(src_len: int, start: float, span: float, dst_len: int) -> Tuple[np.ndarray, np.ndarray]:
    """Индексы и нормированные веса отсчётов для одной оси, обе формы (dst_len, taps).

    Выборка за пределами изображения прижимается к краевому пикселю; если
    полоса лежит внутри изображения, пиксели вне полосы не участвуют.
    """
    scale = span / dst_len
    radius = max(1.0, scale)
    taps = int(math.ceil(2.0 * radius)) + 1

    centers = start + (np.arange(dst_len, dtype=np.float64) + 0.5) * scale
    first_tap = np.floor(centers - radius).astype(np.int64)
    positions = first_tap[:, None] + np.arange(taps)[None, :]

    t = (positions + 0.5 - centers[:, None]) / radius
    weights = np.clip(1.0 - np.abs(t), 0.0, None)
    weights /= weights.sum(axis=1, keepdims=True)

    lo, hi = _sample_range(src_len, start, span)
    return np.clip(positions, lo, hi - 1), weights.astype(np.float32)


def _reduce_axis(premul: np.ndarray, axis: int, start: float, span: float, dst_len: int):
    """Вырезает допустимый диапазон оси и заранее сжимает его целым блочным фактором.

    Фактор floor(scale / 2) оставляет шатровому фильтру масштаб не меньше 2,
    поэтому сглаживание сохраняется. Возвращает массив и координаты полосы в нём.
    """
    lo, hi = _sample_range(premul.shape[axis], start, span)
    factor = max(1, int(span / dst_len / 2.0))
    index = [slice(None)] * premul.ndim
    index[axis] = slice(lo, hi)
    reduced = _box_reduce(premul[tuple(index)], factor, axis)
    return reduced, (start - lo) / factor, span / factor


def resample(
    src: RasterBuffer,
    target_w: int,
    target_h: int,
    policy: CropPolicy,
    premultiplied: Optional[np.ndarray] = None,
) -> RasterBuffer:
    """Возвращает новый растр ровно target_w x target_h; источник не изменяется.

    `premultiplied` - результат `premultiply(src)`, если он уже посчитан.
    """
    if target_w <= 0 or target_h <= 0:
        raise ValueError(f"Некорректный целевой размер: {target_w}x{target_h}")
    if premultiplied is None:
        premultiplied = premultiply(src)

    x, y, w, h = source_rect(src.width, src.height, target_w, target_h, policy)
    band, x, w = _reduce_axis(premultiplied, 1, x, w, target_w)
    band, y, h = _reduce_axis(band, 0, y, h, target_h)
    band_h, band_w = band.shape[:2]
    idx_x, wx = _axis_taps(band_w, x, w, target_w)
    idx_y, wy = _axis_taps(band_h, y, h, target_h)

    # по горизонтали: (band_h, target_w, 4)
    tmp = np.zeros((band_h, target_w, 4), dtype=np.float32)
    for k in range(idx_x.shape[1]):
        tmp += band[:, idx_x[:, k], :] * wx[None, :, k, None]

    # по вертикали: (target_h, target_w, 4)
    out = np.zeros((target_h, target_w, 4), dtype=np.float32)
    for k in range(idx_y.shape[1]):
        out += tmp[idx_y[:, k], :, :] * wy[:, k, None, None]

    out_alpha = out[..., 3:4]
    with np.errstate(divide="ignore", invalid="ignore"):
        color = np.where(out_alpha > 0, out[..., :3] * np.float32(255.0) / out_alpha, np.float32(0.0))
    result = np.concatenate([color, out_alpha], axis=2)
    result = np.clip(np.rint(result), 0, 255).astype(np.uint8)
    return RasterBuffer.from_array(result)
