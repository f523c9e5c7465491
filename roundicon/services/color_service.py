"""Разбор списка цветов колец."""
from __future__ import annotations

import re
from typing import Iterable, List, Tuple

from roundicon.config import MAX_COLORS
from roundicon.errors import InvalidColor
from roundicon.models.icon_model import ParsedColor

_HEX_COLOR = re.compile(r"#[0-9a-fA-F]{6}")
_SEPARATORS = re.compile(r"[,;\s]+")


def split_color_list(text: str) -> List[str]:
    """Делит ввод пользователя вида "#ff0000, #00ff00" на отдельные строки."""
    return [part for part in _SEPARATORS.split(text.strip()) if part]


def split_color_argument(text: str) -> List[str]:
    """Делит значение `-c` по запятым; пустые части сохраняются, чтобы `parse_colors` их отклонил."""
    return [part.strip() for part in text.split(",")]


def parse_colors(colors: Iterable[str]) -> Tuple[ParsedColor, ...]:
    """Проверяет и разбирает цвета `#RRGGBB` в порядке от внутреннего кольца к внешнему.

    Raises:
        InvalidColor: больше `MAX_COLORS` цветов, пустая строка или неверный формат.
    """
    items = list(colors)
    if len(items) > MAX_COLORS:
        raise InvalidColor(f"Слишком много цветов: {len(items)} (максимум {MAX_COLORS})")
    parsed = []
    for position, item in enumerate(items, start=1):
        if item is None or not item.strip():
            raise InvalidColor(f"Цвет №{position} пуст")
        value = item.strip()
        if not _HEX_COLOR.fullmatch(value):
            raise InvalidColor(f"Неверный цвет '{value}': ожидается формат #RRGGBB")
        parsed.append(ParsedColor.from_hex(value))
    return tuple(parsed)
