"""Иерархия исключений генератора ассетов.

Ошибки стадии декодирования прерывают весь прогон конвейера.
Ошибки отдельной ветки (кодирование, композиция) пропускают только один ассет.
"""
from __future__ import annotations


class IconGenError(Exception):
    """Базовое исключение приложения; текст пригоден для показа пользователю."""


class UnsupportedInputFormat(IconGenError):
    """Расширение файла не входит в список поддерживаемых."""


class TgaDecodeError(IconGenError):
    """Общая ошибка разбора TGA."""


class MalformedHeader(TgaDecodeError):
    """Заголовок короче 18 байт или задаёт нулевой размер."""


class Truncated(TgaDecodeError):
    """Пиксельных данных меньше, чем требует заголовок."""


class UnsupportedPixelDepth(TgaDecodeError):
    """Глубина цвета не равна 8, 24 или 32 битам."""


class UnsupportedImageType(TgaDecodeError):
    """Сжатие RLE не поддерживается."""


class NativeDecodeFailure(IconGenError):
    """Pillow не смог прочитать PNG/JPEG."""


class EncodeFailure(IconGenError):
    """Кодировщик не вернул данных для конкретного ассета."""


class CompositionFailure(IconGenError):
    """Не удалось наложить изображение на фон перед JPEG-кодированием."""
