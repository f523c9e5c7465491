"""Константы и параметры генерации иконки.

Принципы:
- SRP: только значения по умолчанию, пределы и их проверка.
- Файлы конфигурации не читаются: всё задаётся через CLI или окно приложения.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from roundicon.errors import InvalidOption

ALLOWED_SIZES: Tuple[int, ...] = (16, 24, 32, 48, 64, 128)
DEFAULT_SIZE = 32
DEFAULT_BORDER_WIDTH = 3
MIN_BORDER_WIDTH = 1
MAX_BORDER_WIDTH = 10
MAX_COLORS = 20

MAX_FILE_BYTES = 50 * 1024 * 1024
MAX_PIXELS = 100_000_000
HEADER_BYTES = 8

FALLBACK_COLOR = "#ee4e04"
MAX_NAME_ATTEMPTS = 1000
GENERATED_STEM = "icon"
DEFAULT_EXTENSION = ".png"
DATA_URI_PREFIX = "data:image/png;base64,"


@dataclass(frozen=True)
class IconOptions:
    """Параметры одного запуска генерации.

    Fields:
        input_path: Путь к исходному изображению или None (сплошной круг).
        colors: Строки цветов `#RRGGBB` в порядке от внутреннего кольца к внешнему.
        border_width: Толщина одного кольца, px.
        size: Сторона холста, px.
        output_path: Запрошенный путь результата; пустая строка означает автоматический выбор.
        encode: Вернуть data URI вместо (или вместе с) файлом.
        quiet: Подавить информационный вывод и предупреждения.
    """
    input_path: Optional[str] = None
    colors: Tuple[str, ...] = field(default_factory=tuple)
    border_width: int = DEFAULT_BORDER_WIDTH
    size: int = DEFAULT_SIZE
    output_path: Optional[str] = None
    encode: bool = False
    quiet: bool = False

    def validated(self) -> "IconOptions":
        """Проверяет размер холста и толщину кольца.

        Raises:
            InvalidOption: если значение вне допустимого диапазона.
        """
        if self.size not in ALLOWED_SIZES:
            allowed = ", ".join(str(s) for s in ALLOWED_SIZES)
            raise InvalidOption(f"Размер {self.size} не поддерживается; допустимо: {allowed}")
        if not MIN_BORDER_WIDTH <= self.border_width <= MAX_BORDER_WIDTH:
            raise InvalidOption(
                f"Толщина кольца {self.border_width} вне диапазона "
                f"{MIN_BORDER_WIDTH}–{MAX_BORDER_WIDTH}"
            )
        return replace(self, colors=tuple(self.colors))

    @property
    def wants_file(self) -> bool:
        # data URI без явного пути не создаёт файла
        return not (self.encode and not (self.output_path or "").strip())
