"""
Настройка логирования для Sheet Wizard
"""

import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from sheet_wizard.settings import AppSettings, settings


def build_formatter(app_settings: AppSettings) -> logging.Formatter:
    """JSON для production, читаемый формат для запуска руками"""
    if app_settings.ENVIRONMENT == 'production':
        return JsonFormatter(
            '%(asctime)s %(name)s %(levelname)s %(message)s',
            timestamp=True
        )
    return logging.Formatter(app_settings.LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')


def setup_logging(app_settings: AppSettings = settings, level: str | None = None):
    """Один stdout handler на корневом logger'е"""
    log_level = getattr(logging, (level or app_settings.LOG_LEVEL).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(build_formatter(app_settings))
    root_logger.addHandler(handler)

    # watchdog слишком разговорчив на DEBUG
    logging.getLogger('watchdog').setLevel(logging.WARNING)
