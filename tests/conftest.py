"""
Pytest fixtures для тестирования Sheet Wizard
"""
import logging
from pathlib import Path
from typing import Callable, List, Tuple

import pytest

from sheet_wizard.errors import ActionExecutionError
from sheet_wizard.settings import WatchConfig


@pytest.fixture(scope="session", autouse=True)
def setup_test_logging():
    """Настройка логирования для тестов — только ошибки"""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(logging.ERROR)
    formatter = logging.Formatter('%(asctime)s | %(levelname)-8s | %(name)s - %(message)s')
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.ERROR)

    yield


@pytest.fixture
def watched_dir(tmp_path: Path) -> Path:
    """Пустая папка наблюдения"""
    directory = tmp_path / "sheets"
    directory.mkdir()
    return directory


@pytest.fixture
def touch(watched_dir: Path) -> Callable[..., Path]:
    """Создаёт файлы в папке наблюдения"""
    def _touch(*names: str) -> Path:
        path = watched_dir
        for name in names:
            path = watched_dir / name
            path.write_bytes(b"PK")
        return path
    return _touch


@pytest.fixture
def make_config(watched_dir: Path, tmp_path: Path) -> Callable[..., WatchConfig]:
    """Фабрика WatchConfig: префикс A, блокировка ~A, xlsx"""
    def _make(**overrides) -> WatchConfig:
        values = dict(
            listened_directory=str(watched_dir),
            filename_prefix="A",
            hidden_filename_prefix="~A",
            ext_name="xlsx",
            script_directory=str(tmp_path / "scripts"),
            script_filename="main.py",
            env_name="sheetwizard",
        )
        values.update(overrides)
        return WatchConfig(**values)
    return _make


@pytest.fixture
def config(make_config) -> WatchConfig:
    return make_config()


class RecordingNotifier:
    """Запоминает показанные уведомления"""

    def __init__(self):
        self.shown: List[Tuple[str, str]] = []

    def show(self, title: str, message: str) -> None:
        self.shown.append((title, message))


class FakeRunner:
    """ScriptRunner без запуска процессов"""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: List[Tuple[str, str, str]] = []

    def run(self, directory: str, filename: str, env_name: str) -> int:
        self.calls.append((directory, filename, env_name))
        if self.fail:
            raise ActionExecutionError("Executed script failed with exit code: 1", exit_code=1)
        return 0


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def failing_runner() -> FakeRunner:
    return FakeRunner(fail=True)
