"""
Трекер жизненного цикла редактирования: open -> modify -> close.

Редактор создаёт скрытый файл-блокировку при открытии и удаляет при
закрытии. Завершённой считается сессия, в которой между созданием и
удалением блокировки был изменён сам файл. Открыть и закрыть без
изменений — не повод запускать обработку.

События обрабатываются строго по одному в порядке поступления, поэтому
LifecycleState не нужны блокировки.
"""
from __future__ import annotations

import logging
import queue
from dataclasses import dataclass
from typing import Callable, Optional, Union

from sheet_wizard.errors import NotificationError
from sheet_wizard.events import (
    EventKind,
    WatchEvent,
    filename_from_event,
    is_same_file,
    matches_expected,
)
from sheet_wizard.settings import WatchConfig
from sheet_wizard.versions import TIANGAN, OrderingAlphabet

logger = logging.getLogger(__name__)

QueueItem = Union[WatchEvent, NotificationError]


@dataclass(slots=True)
class LifecycleState:
    """Состояние одной сессии наблюдения."""

    hidden_file_open: bool = False
    modified_since_open: bool = False
    tracked_filename: Optional[str] = None

    @property
    def tracking(self) -> bool:
        return self.hidden_file_open

    def open(self, filename: str) -> None:
        self.hidden_file_open = True
        self.modified_since_open = False
        self.tracked_filename = filename

    def reset(self) -> None:
        self.hidden_file_open = False
        self.modified_since_open = False
        self.tracked_filename = None


class LifecycleTracker:
    """
    Конечный автомат Idle / Tracking.

    on_fire вызывается синхронно, следующее событие не обрабатывается,
    пока он не вернёт управление.
    """

    def __init__(
        self,
        config: WatchConfig,
        on_fire: Callable[[WatchConfig], object],
        alphabet: OrderingAlphabet = TIANGAN,
        require_modify: bool = True,
    ):
        self.config = config
        self.on_fire = on_fire
        self.alphabet = alphabet
        self.require_modify = require_modify
        self.state = LifecycleState()
        self.fired = 0

    def handle(self, event: WatchEvent) -> bool:
        """
        Обрабатывает одно событие.

        Returns:
            False если событие — сигнал остановки, иначе True
        """
        if event.kind is EventKind.CREATE:
            self._on_create(event)
        elif event.kind is EventKind.MODIFY:
            self._on_modify(event)
        elif event.kind is EventKind.REMOVE:
            self._on_remove(event)
        elif event.kind is EventKind.ACCESS:
            pass
        else:
            return False
        return True

    def _on_create(self, event: WatchEvent) -> None:
        if not matches_expected(event, self.config, self.alphabet, hidden=True):
            return
        # Повторное создание посреди сессии перезапускает отслеживание
        filename = filename_from_event(event) or ""
        self.state.open(filename)
        logger.info(f"📂 {filename} opened")

    def _on_modify(self, event: WatchEvent) -> None:
        if not self.state.tracking:
            return
        if matches_expected(event, self.config, self.alphabet, hidden=False):
            if not self.state.modified_since_open:
                logger.debug(f"✏️ {self.state.tracked_filename}: target file modified")
            self.state.modified_since_open = True

    def _on_remove(self, event: WatchEvent) -> None:
        # Не прошедшее любое из условий удаление состояние не меняет
        if not self.state.tracking:
            return
        if not is_same_file(event, self.state.tracked_filename):
            return
        if self.require_modify and not self.state.modified_since_open:
            logger.debug(f"{self.state.tracked_filename} closed without changes")
            return

        filename = self.state.tracked_filename
        self.state.reset()
        self.fired += 1
        logger.info(f"🔥 {filename} closed, running action")
        self.on_fire(self.config)

    def run(
        self,
        events: queue.Queue,
        should_stop: Callable[[], bool] = lambda: False,
        poll_interval: float = 0.5,
    ) -> int:
        """
        Блокирующий цикл чтения очереди до сигнала остановки.

        Args:
            events: Очередь событий
            should_stop: Флаг остановки, проверяется между событиями
            poll_interval: Как часто проверять флаг, если событий нет

        Returns:
            Сколько раз сработало действие
        """
        fired_before = self.fired
        while True:
            if should_stop():
                logger.info("Stop requested")
                break
            try:
                item: QueueItem = events.get(timeout=poll_interval)
            except queue.Empty:
                continue
            try:
                if isinstance(item, NotificationError):
                    logger.warning(f"Error occurred in watcher: {item}")
                    continue
                if not self.handle(item):
                    logger.info("Stop event received")
                    break
            finally:
                events.task_done()
        return self.fired - fired_before
