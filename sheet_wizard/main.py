#!/usr/bin/env python3
"""
Sheet Wizard — запуск обработки таблицы после её редактирования
"""
import argparse
import logging
import sys

from sheet_wizard.dispatcher import ActionDispatcher
from sheet_wizard.errors import ConfigError, WatchSetupError
from sheet_wizard.logging_config import setup_logging
from sheet_wizard.notifier import build_notifier
from sheet_wizard.runner import ScriptRunner
from sheet_wizard.service import SheetWizardService
from sheet_wizard.settings import default_config_path, load_config, settings

logger = logging.getLogger("sheet-wizard")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sheet-wizard",
        description="Run a processing script each time the current spreadsheet version is edited and closed.",
    )
    parser.add_argument(
        "config",
        nargs="?",
        default=None,
        help="Path to path.toml (default: $SW_TOML_PATH/path.toml or ./path.toml)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Главная точка входа"""
    args = parse_args(argv)
    setup_logging()

    config_path = args.config or default_config_path()
    try:
        config = load_config(config_path)
    except ConfigError as e:
        logger.error(f"❌ {e}")
        return 1

    logger.info("=" * 60)
    logger.info("Sheet Wizard Starting")
    logger.info("=" * 60)
    logger.info(f"Config: {config_path}")
    logger.info(f"Listened directory: {config.listened_directory}")
    logger.info(f"Files: {config.filename_prefix}*.{config.ext_name} (lock prefix: {config.hidden_filename_prefix})")
    logger.info(f"Script: {config.script_directory}/{config.script_filename} (env: {config.env_name})")
    logger.info("=" * 60)

    dispatcher = ActionDispatcher(
        runner=ScriptRunner(),
        notifier=build_notifier(settings.NOTIFY_BACKEND, enabled=settings.NOTIFY_ENABLED),
        title=settings.NOTIFICATION_TITLE,
    )
    service = SheetWizardService(config, settings, dispatcher)
    service.install_signal_handlers()

    try:
        fired = service.run()
    except WatchSetupError as e:
        logger.error(f"❌ {e}")
        return 1

    logger.info("=" * 60)
    logger.info(f"Sheet Wizard Stopped ({fired} session(s) processed)")
    logger.info("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
