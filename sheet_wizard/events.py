"""
События файловой системы и их классификация.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

from sheet_wizard.settings import WatchConfig
from sheet_wizard.versions import TIANGAN, OrderingAlphabet, select_expected


class EventKind(str, Enum):
    """Виды событий, которые различает трекер."""

    CREATE = "create"
    MODIFY = "modify"
    REMOVE = "remove"
    ACCESS = "access"
    OTHER = "other"  # Всё остальное = сигнал остановки


@dataclass(frozen=True, slots=True)
class WatchEvent:
    """Событие ФС: вид и затронутые пути."""

    kind: EventKind
    paths: tuple[Path, ...] = ()

    @classmethod
    def of(cls, kind: EventKind, *paths: str | Path) -> WatchEvent:
        return cls(kind=kind, paths=tuple(Path(p) for p in paths))

    @classmethod
    def stop(cls) -> WatchEvent:
        """Событие-сигнал остановки цикла"""
        return cls(kind=EventKind.OTHER)


def filename_from_event(event: WatchEvent) -> Optional[str]:
    """Имя файла из первого пути, у которого оно есть"""
    for path in event.paths:
        if path.name:
            return path.name
    return None


def matches_expected(
    event: WatchEvent,
    config: WatchConfig,
    alphabet: OrderingAlphabet = TIANGAN,
    hidden: bool = True,
) -> bool:
    """
    Касается ли событие текущего ожидаемого файла.

    Ожидаемый файл вычисляется заново на момент события. Сравниваются
    полные пути.
    """
    if not event.paths:
        return False

    expected = select_expected(
        config.listened_directory,
        config.filename_prefix,
        config.hidden_filename_prefix,
        config.ext_name,
        alphabet,
        hidden=hidden,
    )
    if expected is None:
        return False
    return any(path == expected for path in event.paths)


def is_same_file(event: WatchEvent, tracked_filename: str) -> bool:
    """Сравнивает только последний сегмент пути, с учётом регистра"""
    filename = filename_from_event(event)
    return filename is not None and filename == tracked_filename


def paths_of(raw_paths: Iterable[str | bytes]) -> tuple[Path, ...]:
    """Пути watchdog (str или bytes) -> tuple[Path]"""
    result = []
    for raw in raw_paths:
        if not raw:
            continue
        if isinstance(raw, bytes):
            raw = raw.decode('utf-8', errors='surrogateescape')
        result.append(Path(raw))
    return tuple(result)
