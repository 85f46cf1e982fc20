"""
Sheet Wizard — запуск обработки после редактирования таблицы.

=== НАЗНАЧЕНИЕ ===
Сервис, который:
1. Следит за папкой с версиями таблицы (Budget甲.xlsx, Budget乙.xlsx, ...)
2. Выбирает текущую версию — с максимальным символом алфавита
3. Отслеживает цикл open -> modify -> close по файлу-блокировке редактора
4. После закрытия изменённого файла один раз запускает скрипт обработки
5. Показывает уведомление об успехе или ошибке

=== КОМПОНЕНТЫ ===
- versions — выбор текущей версии (OrderingAlphabet, select_expected)
- events — события ФС и их классификация
- lifecycle — конечный автомат LifecycleTracker
- dispatcher — ActionDispatcher, одна попытка + одно уведомление
- runner / notifier — внешний скрипт и уведомления
- watcher — мост watchdog -> очередь
- service — SheetWizardService, сборка и остановка

=== ЗАПУСК ===
    sheet-wizard ./path.toml
"""

from sheet_wizard.versions import TIANGAN, CandidateFile, OrderingAlphabet, scan_candidates, select_expected
from sheet_wizard.events import EventKind, WatchEvent, is_same_file, matches_expected
from sheet_wizard.lifecycle import LifecycleState, LifecycleTracker
from sheet_wizard.dispatcher import ActionDispatcher, ActionOutcome

__all__ = [
    'TIANGAN', 'CandidateFile', 'OrderingAlphabet', 'scan_candidates', 'select_expected',
    'EventKind', 'WatchEvent', 'is_same_file', 'matches_expected',
    'LifecycleState', 'LifecycleTracker',
    'ActionDispatcher', 'ActionOutcome',
]
