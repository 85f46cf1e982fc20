"""
Выбор текущей версии файла.

Версия кодируется символом алфавита в конце имени:
    Budget甲.xlsx < Budget乙.xlsx < ... < Budget癸.xlsx

Текущим считается файл с максимальным рангом. Пока он открыт в редакторе,
рядом лежит скрытый файл-блокировка с тем же суффиксом и другим префиксом
(~$Budget丙.xlsx), его имя тоже вычисляется здесь.

Результат НЕ кэшируется: набор файлов на диске меняется между событиями.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional

logger = logging.getLogger(__name__)


class OrderingAlphabet:
    """Упорядоченный неизменяемый набор символов версий."""

    __slots__ = ('_symbols', '_ranks')

    def __init__(self, symbols: Iterable[str]):
        self._symbols: tuple[str, ...] = tuple(symbols)
        ranks: dict[str, int] = {}
        for rank, symbol in enumerate(self._symbols):
            ranks.setdefault(symbol, rank)
        self._ranks = ranks

    def rank(self, symbol: str) -> Optional[int]:
        """Позиция символа или None, если символ не из алфавита"""
        return self._ranks.get(symbol)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._ranks

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __repr__(self) -> str:
        return f"OrderingAlphabet({''.join(self._symbols)!r})"


# Десять небесных стволов
TIANGAN = OrderingAlphabet(["甲", "乙", "丙", "丁", "戊", "己", "庚", "辛", "壬", "癸"])


@dataclass(frozen=True, slots=True)
class CandidateFile:
    """Файл-кандидат: ранг версии и путь на диске."""

    rank: int
    path: Path


def scan_candidates(
    directory: str | Path,
    visible_prefix: str,
    extension: str,
    alphabet: OrderingAlphabet = TIANGAN,
) -> list[CandidateFile]:
    """
    Сканирует директорию (без рекурсии) и возвращает кандидатов
    в порядке листинга.

    Нечитаемая директория даёт пустой список.
    """
    suffix = f".{extension}"
    try:
        entries = list(Path(directory).iterdir())
    except OSError as e:
        logger.debug(f"Cannot list {directory}: {e}")
        return []

    candidates = []
    for path in entries:
        # Сравнение расширения регистрозависимое
        if path.suffix != suffix:
            continue
        if not path.stem.startswith(visible_prefix):
            continue
        rank = alphabet.rank(path.stem[len(visible_prefix):])
        if rank is None:
            continue
        candidates.append(CandidateFile(rank=rank, path=path))
    return candidates


def select_expected(
    directory: str | Path,
    visible_prefix: str,
    hidden_prefix: str,
    extension: str,
    alphabet: OrderingAlphabet = TIANGAN,
    hidden: bool = True,
) -> Optional[Path]:
    """
    Возвращает путь текущего файла.

    Args:
        directory: Папка, в которой лежат версии
        visible_prefix: Префикс имени видимого файла
        hidden_prefix: Префикс имени скрытого файла-блокировки
        extension: Расширение без точки
        alphabet: Алфавит версий
        hidden: True — путь скрытого файла, False — самого файла

    Returns:
        Path или None, если кандидатов нет
    """
    candidates = scan_candidates(directory, visible_prefix, extension, alphabet)
    if not candidates:
        return None

    # max() берёт первый из равных, то есть первый в порядке листинга
    selected = max(candidates, key=lambda c: c.rank)
    if not hidden:
        return selected.path

    name = selected.path.name
    if not name.startswith(visible_prefix):
        return None
    return selected.path.with_name(hidden_prefix + name[len(visible_prefix):])
