"""Разрешение пути результата: каталог или файл, без перезаписи существующих файлов.

Принципы:
- SRP: только вычисление пути; каталоги создаёт экспорт, а не этот модуль.
- Классификатор «каталог или файл» вынесен в отдельную функцию и тестируется сам по себе.
- Поиск свободного имени ограничен `MAX_NAME_ATTEMPTS` попытками.

Проверка существования и последующая запись не атомарны: два процесса, пишущие
в один каталог одновременно, могут выбрать одно и то же имя.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Iterator, Optional

from roundicon.config import DEFAULT_EXTENSION, GENERATED_STEM, MAX_NAME_ATTEMPTS
from roundicon.errors import CollisionSearchExhausted, InvalidPath
from roundicon.logging import get_logger
from roundicon.models.icon_model import ResolvedPath

logger = get_logger("paths")

_QUOTES = "\"'"


def clean_path_text(raw: str) -> str:
    """Убирает пробелы и окружающие кавычки, отклоняет пустые пути и нулевые байты.

    Raises:
        InvalidPath: если путь пуст или содержит нулевой байт.
    """
    if raw is None or not raw.strip():
        raise InvalidPath("Путь не может быть пустым")
    text = raw.strip().strip(_QUOTES).strip()
    if not text:
        raise InvalidPath("Путь не может быть пустым")
    if "\x00" in text:
        raise InvalidPath("Путь содержит нулевой байт")
    return text


def find_downloads_dir() -> Optional[Path]:
    """Ищет пользовательский каталог загрузок: `$XDG_DOWNLOAD_DIR`, затем `~/Downloads`."""
    candidates = []
    xdg = os.environ.get("XDG_DOWNLOAD_DIR")
    if xdg:
        candidates.append(Path(os.path.expandvars(xdg)).expanduser())
    try:
        candidates.append(Path.home() / "Downloads")
    except RuntimeError:
        # домашний каталог не определён
        pass
    for candidate in candidates:
        if candidate.is_dir():
            return candidate
    return None


def is_directory_intent(raw: str) -> bool:
    """Решает, указывает ли пользователь каталог, а не файл.

    Каталог, если путь уже существует как каталог, оканчивается разделителем
    (даже при наличии точки в имени, например "out.v2/") или равен "." / "..".
    """
    text = raw.strip().strip(_QUOTES).strip()
    path = Path(text).expanduser()
    if path.is_dir():
        return True
    separators = tuple(sep for sep in (os.sep, os.altsep, "/") if sep)
    if text.endswith(separators):
        return True
    return text in (".", "..")


def _absolute(text: str) -> Path:
    try:
        return Path(os.path.abspath(os.path.expanduser(text)))
    except (OSError, ValueError) as exc:
        raise InvalidPath(f"Не удалось разрешить путь '{text}': {exc}") from exc


class PathResolver:
    """Подбирает несуществующий путь для сохранения иконки.

    Args:
        downloads_locator: Функция поиска каталога загрузок (подменяется в тестах).
        max_attempts: Предел перебора номеров.
    """

    def __init__(
        self,
        downloads_locator: Callable[[], Optional[Path]] = find_downloads_dir,
        max_attempts: int = MAX_NAME_ATTEMPTS,
    ) -> None:
        self._downloads_locator = downloads_locator
        self._max_attempts = max_attempts

    def resolve(self, requested: Optional[str], quiet: bool = False) -> ResolvedPath:
        """Возвращает абсолютный путь, которого нет на диске в момент возврата.

        Raises:
            InvalidPath: нулевой байт или неразрешимый путь.
            CollisionSearchExhausted: все номера до предела заняты.
        """
        if requested is None or not requested.strip():
            return self._generate_in(self._default_directory(quiet))

        text = clean_path_text(requested)
        if is_directory_intent(text):
            return self._generate_in(_absolute(text))

        target = _absolute(text)
        if not target.exists():
            return ResolvedPath(path=target, is_newly_generated=False)
        extension = target.suffix or DEFAULT_EXTENSION
        candidates = (
            target.with_name(f"{target.stem}_{n}{extension}") for n in self._numbers()
        )
        return self._first_free(candidates, target.parent)

    # ---- Helpers ----
    def _default_directory(self, quiet: bool) -> Path:
        downloads = self._downloads_locator()
        if downloads is not None:
            return downloads.absolute()
        cwd = Path.cwd()
        if not quiet:
            logger.warning("Downloads folder not found, using current directory: %s", cwd)
        return cwd

    def _generate_in(self, directory: Path) -> ResolvedPath:
        candidates = (
            directory / f"{GENERATED_STEM}_{n}{DEFAULT_EXTENSION}" for n in self._numbers()
        )
        return self._first_free(candidates, directory)

    def _numbers(self) -> Iterator[int]:
        return iter(range(1, self._max_attempts + 1))

    def _first_free(self, candidates: Iterator[Path], directory: Path) -> ResolvedPath:
        for candidate in candidates:
            if not candidate.exists():
                logger.debug("Resolved output path %s", candidate)
                return ResolvedPath(path=candidate, is_newly_generated=True)
        raise CollisionSearchExhausted(
            f"Не найдено свободное имя файла в {directory} за {self._max_attempts} попыток"
        )
