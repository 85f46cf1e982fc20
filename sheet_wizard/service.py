"""
Sheet Wizard Service — сборка компонентов и управление жизненным циклом
"""
from __future__ import annotations

import logging
import queue
import signal
from enum import Enum
from typing import Optional

from watchdog.observers.api import BaseObserver

from sheet_wizard.dispatcher import ActionDispatcher
from sheet_wizard.errors import WatchSetupError
from sheet_wizard.events import WatchEvent
from sheet_wizard.lifecycle import LifecycleTracker
from sheet_wizard.settings import AppSettings, WatchConfig
from sheet_wizard.versions import TIANGAN, OrderingAlphabet, select_expected
from sheet_wizard.watcher import start_observer

logger = logging.getLogger(__name__)


class ServiceState(str, Enum):
    """Статусы сервиса для внешнего контроллера."""

    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


class SheetWizardService:
    """Наблюдение за папкой и запуск обработки после закрытия файла"""

    def __init__(
        self,
        config: WatchConfig,
        app_settings: AppSettings,
        dispatcher: ActionDispatcher,
        events: Optional[queue.Queue] = None,
        alphabet: OrderingAlphabet = TIANGAN,
        poll_interval: float = 0.5,
    ):
        """
        Args:
            config: Что слушаем и что запускаем
            app_settings: Настройки процесса
            dispatcher: Обработчик завершённых сессий
            events: Очередь событий (по умолчанию новая)
            alphabet: Алфавит версий
            poll_interval: Период проверки флага остановки, секунды
        """
        self.poll_interval = poll_interval
        self.shutdown_requested = False
        self.config = config
        self.settings = app_settings
        self.events: queue.Queue = events if events is not None else queue.Queue()
        self.tracker = LifecycleTracker(
            config,
            on_fire=dispatcher.on_session_complete,
            alphabet=alphabet,
            require_modify=app_settings.REQUIRE_MODIFY,
        )
        self.observer: Optional[BaseObserver] = None
        self._state = ServiceState.STOPPED

    @property
    def status(self) -> ServiceState:
        return self._state

    def start(self) -> None:
        """
        Регистрирует наблюдение.

        Raises:
            WatchSetupError: если WATCH_SETUP_FATAL и наблюдение не удалось
        """
        self._state = ServiceState.STARTING
        expected = select_expected(
            self.config.listened_directory,
            self.config.filename_prefix,
            self.config.hidden_filename_prefix,
            self.config.ext_name,
            self.tracker.alphabet,
            hidden=False,
        )
        logger.info(f"Current file: {expected.name if expected else 'none yet'}")
        logger.info(f"Firing policy: {'open-modify-close' if self.tracker.require_modify else 'open-close'}")

        try:
            self.observer = start_observer(self.config.listened_directory, self.events)
        except WatchSetupError as e:
            if self.settings.WATCH_SETUP_FATAL:
                self._state = ServiceState.STOPPED
                raise
            logger.error(f"❌ {e}")

    def run(self) -> int:
        """
        Обрабатывает события до сигнала остановки.

        Returns:
            Сколько раз сработало действие
        """
        if self._state is ServiceState.STOPPED:
            self.start()
        if self._state is ServiceState.STARTING:
            self._state = ServiceState.RUNNING
        try:
            return self.tracker.run(
                self.events,
                should_stop=lambda: self.shutdown_requested,
                poll_interval=self.poll_interval,
            )
        finally:
            self._shutdown_observer()
            self._state = ServiceState.STOPPED

    def stop(self) -> None:
        """Кооперативная остановка: сигнал в ту же очередь"""
        if self._state in (ServiceState.RUNNING, ServiceState.STARTING):
            self._state = ServiceState.STOPPING
        self.events.put(WatchEvent.stop())

    def request_shutdown(self) -> None:
        """Остановка из обработчика сигнала: только флаг, без очереди"""
        if self._state in (ServiceState.RUNNING, ServiceState.STARTING):
            self._state = ServiceState.STOPPING
        self.shutdown_requested = True

    def install_signal_handlers(self) -> None:
        # Обработчик выполняется в потоке, который может держать mutex очереди
        def signal_handler(signum, frame):
            logger.info(f"Received signal {signum}, initiating graceful shutdown...")
            self.request_shutdown()

        signal.signal(signal.SIGTERM, signal_handler)
        signal.signal(signal.SIGINT, signal_handler)

    def _shutdown_observer(self) -> None:
        if self.observer is None:
            return
        self.observer.stop()
        self.observer.join()
        self.observer = None
