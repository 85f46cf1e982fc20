"""
Тесты SheetWizardService
"""
import os
import signal
import sys
import threading
import time

import pytest

from sheet_wizard.dispatcher import ActionDispatcher
from sheet_wizard.errors import WatchSetupError
from sheet_wizard.service import ServiceState, SheetWizardService
from sheet_wizard.settings import AppSettings


@pytest.fixture
def app_settings():
    return AppSettings(_env_file=None, WATCH_SETUP_FATAL=True, REQUIRE_MODIFY=True)


@pytest.fixture
def dispatcher(runner, notifier):
    return ActionDispatcher(runner, notifier)


def wait_for(condition, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.05)
    return False


class TestSheetWizardService:
    """Тесты запуска и остановки"""

    def test_stop_before_run_returns_immediately(self, config, app_settings, dispatcher):
        service = SheetWizardService(config, app_settings, dispatcher)
        service.stop()

        assert service.run() == 0
        assert service.status is ServiceState.STOPPED
        assert service.observer is None

    def test_fatal_watch_setup_error(self, make_config, tmp_path, app_settings, dispatcher):
        config = make_config(listened_directory=str(tmp_path / "absent"))
        service = SheetWizardService(config, app_settings, dispatcher)

        with pytest.raises(WatchSetupError):
            service.run()
        assert service.status is ServiceState.STOPPED

    def test_non_fatal_watch_setup_error_keeps_loop(self, make_config, tmp_path, dispatcher):
        config = make_config(listened_directory=str(tmp_path / "absent"))
        app_settings = AppSettings(_env_file=None, WATCH_SETUP_FATAL=False)
        service = SheetWizardService(config, app_settings, dispatcher)
        service.stop()

        assert service.run() == 0
        assert service.status is ServiceState.STOPPED

    def test_require_modify_comes_from_settings(self, config, dispatcher):
        app_settings = AppSettings(_env_file=None, REQUIRE_MODIFY=False)

        service = SheetWizardService(config, app_settings, dispatcher)

        assert service.tracker.require_modify is False


class TestEndToEnd:
    """Реальный watchdog Observer на временной папке"""

    def test_edit_session_runs_action_once(self, watched_dir, touch, config, app_settings, dispatcher, runner, notifier):
        touch("A甲.xlsx", "A乙.xlsx")
        service = SheetWizardService(config, app_settings, dispatcher)
        thread = threading.Thread(target=service.run, daemon=True)
        thread.start()
        assert wait_for(lambda: service.status is ServiceState.RUNNING)

        lock = watched_dir / "~A乙.xlsx"
        lock.write_bytes(b"owner")
        time.sleep(0.2)
        (watched_dir / "A乙.xlsx").write_bytes(b"PK edited")
        time.sleep(0.2)
        lock.unlink()

        fired = wait_for(lambda: len(runner.calls) == 1)
        service.stop()
        thread.join(timeout=5)

        assert fired
        assert not thread.is_alive()
        assert service.status is ServiceState.STOPPED
        assert len(notifier.shown) == 1


@pytest.fixture
def restore_signal_handlers():
    """Возвращает исходные обработчики SIGINT/SIGTERM после теста"""
    saved = {signum: signal.getsignal(signum) for signum in (signal.SIGINT, signal.SIGTERM)}
    yield
    for signum, handler in saved.items():
        signal.signal(signum, handler)


class TestSignalShutdown:
    """Остановка по SIGTERM/SIGINT не трогает очередь из обработчика"""

    def test_handler_does_not_touch_queue_lock(self, config, app_settings, dispatcher, restore_signal_handlers):
        """Сигнал, пришедший пока поток держит mutex очереди, не блокирует обработчик"""
        service = SheetWizardService(config, app_settings, dispatcher, poll_interval=0.05)
        service.install_signal_handlers()

        with service.events.mutex:
            signal.raise_signal(signal.SIGTERM)
            # Обработчик уже отработал внутри блока
            time.sleep(0.01)

        assert service.shutdown_requested
        assert service.events.empty()
        assert service.run() == 0
        assert service.status is ServiceState.STOPPED

    @pytest.mark.skipif(sys.platform == "win32", reason="os.kill(SIGTERM) завершает процесс на Windows")
    def test_signal_stops_blocked_consumer(self, config, app_settings, dispatcher, restore_signal_handlers):
        """Потребитель ждёт событий в get(), сигнал его останавливает"""
        service = SheetWizardService(config, app_settings, dispatcher, poll_interval=0.05)
        service.install_signal_handlers()
        sender = threading.Timer(0.3, os.kill, args=(os.getpid(), signal.SIGTERM))
        # Не даём тесту зависнуть, если остановка не сработала
        failsafe = threading.Timer(5.0, service.stop)
        sender.start()
        failsafe.start()
        try:
            started = time.monotonic()
            assert service.run() == 0
            elapsed = time.monotonic() - started
        finally:
            sender.cancel()
            failsafe.cancel()

        assert service.shutdown_requested
        assert elapsed < 4.0
        assert service.status is ServiceState.STOPPED
