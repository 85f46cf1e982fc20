"""
Action Dispatcher — одна попытка запуска и одно уведомление на сессию.
"""
import logging
from enum import Enum

from sheet_wizard.errors import ActionExecutionError, DisplayError
from sheet_wizard.notifier import Notifier
from sheet_wizard.runner import ScriptRunner
from sheet_wizard.settings import WatchConfig

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Processed successfully."
FAILURE_MESSAGE = "Processing failed, the file may not have changed."


class ActionOutcome(str, Enum):
    """Результат обработки завершённой сессии."""

    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def message(self) -> str:
        return SUCCESS_MESSAGE if self is ActionOutcome.SUCCESS else FAILURE_MESSAGE


class ActionDispatcher:
    """Запускает скрипт и сообщает результат. Без повторов."""

    def __init__(self, runner: ScriptRunner, notifier: Notifier, title: str = "Sheet Wizard"):
        self.runner = runner
        self.notifier = notifier
        self.title = title

    def on_session_complete(self, config: WatchConfig) -> ActionOutcome:
        try:
            self.runner.run(config.script_directory, config.script_filename, config.env_name)
            outcome = ActionOutcome.SUCCESS
        except ActionExecutionError as e:
            logger.error(f"❌ {e}")
            outcome = ActionOutcome.FAILURE

        try:
            self.notifier.show(self.title, outcome.message)
        except DisplayError as e:
            logger.error(f"❌ {e}")

        return outcome

    __call__ = on_session_complete
