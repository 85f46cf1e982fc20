"""
Иерархия исключений Sheet Wizard.

Фатальными считаются только ошибки старта (ConfigError и, в production,
WatchSetupError). Всё, что случилось при обработке одного события,
логируется и не останавливает цикл.
"""


class SheetWizardError(Exception):
    """Базовое исключение сервиса."""


class ConfigError(SheetWizardError):
    """Файл конфигурации отсутствует или не проходит валидацию."""


class WatchSetupError(SheetWizardError):
    """Не удалось зарегистрировать наблюдение за директорией."""


class NotificationError(SheetWizardError):
    """Источник событий ФС сообщил об ошибке вместо события."""


class ActionExecutionError(SheetWizardError):
    """Внешний скрипт не найден, не запустился или завершился с ошибкой."""

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        self.exit_code = exit_code


class DisplayError(SheetWizardError):
    """Не удалось показать уведомление пользователю."""
