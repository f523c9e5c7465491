"""Иерархия ошибок генератора иконок.

Каждое исключение несёт понятное пользователю сообщение. Ошибки проверки
прерывают всю операцию; предупреждения исключениями не являются.
"""
from __future__ import annotations


class IconError(Exception):
    """Базовая ошибка roundicon."""


class InvalidPath(IconError, ValueError):
    """Пустой путь, нулевой байт в пути или путь, который нельзя разрешить."""


class FileNotFound(IconError, FileNotFoundError):
    """Исходный файл отсутствует."""


class FileTooLarge(IconError):
    """Файл больше допустимого размера."""


class EmptyFile(IconError):
    """Файл нулевой длины."""


class UnrecognizedFormat(IconError, ValueError):
    """Сигнатура файла не совпала ни с одним поддерживаемым форматом."""


class ExtensionMismatch(IconError, ValueError):
    """Расширение файла не соответствует обнаруженному формату."""


class DecodeFailure(IconError):
    """Кодек не смог разобрать файл, несмотря на совпавшую сигнатуру."""


class DimensionError(IconError, ValueError):
    """Нулевая ширина/высота или слишком много пикселей."""


class InvalidColor(IconError, ValueError):
    """Некорректная HEX-строка цвета или слишком много цветов."""


class InvalidOption(IconError, ValueError):
    """Размер холста или толщина кольца вне допустимого диапазона."""


class CollisionSearchExhausted(IconError):
    """Не удалось подобрать свободное имя файла за отведённое число попыток."""


class EncodeOrWriteFailure(IconError, OSError):
    """Ошибка записи PNG на диск или кодирования в base64."""
