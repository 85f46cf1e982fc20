"""
Настройки Sheet Wizard

Два уровня:
- AppSettings — настройки процесса из переменных окружения / .env
- WatchConfig — что и где слушать, из TOML-файла (секция [settings])
"""
import os
import tomllib
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sheet_wizard.errors import ConfigError

CONFIG_FILENAME = "path.toml"


class AppSettings(BaseSettings):
    """Настройки процесса

    Все значения можно переопределить через переменные окружения.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)s - %(message)s"
    ENVIRONMENT: str = "development"  # "production" включает JSON-логи

    # Config
    SW_TOML_PATH: Optional[str] = None  # Папка с path.toml

    # Behaviour
    WATCH_SETUP_FATAL: bool = True  # Падать, если не удалось начать наблюдение
    REQUIRE_MODIFY: bool = True  # Срабатывать только если файл был изменён

    # Notifications
    NOTIFY_ENABLED: bool = True
    NOTIFY_BACKEND: Literal["desktop", "log"] = "desktop"  # "log" — без рабочего стола
    NOTIFICATION_TITLE: str = "Sheet Wizard"


settings = AppSettings()


class WatchConfig(BaseModel):
    """Что слушаем и что запускаем. Загружается один раз за запуск."""

    model_config = ConfigDict(frozen=True)

    listened_directory: str
    filename_prefix: str
    hidden_filename_prefix: str
    ext_name: str
    script_directory: str
    script_filename: str
    env_name: str

    @field_validator('listened_directory')
    @classmethod
    def absolute_directory(cls, v: str) -> str:
        # Пути из событий ФС абсолютные, сравниваем с ними
        return os.path.abspath(os.path.expanduser(v))

    @field_validator('ext_name')
    @classmethod
    def strip_leading_dot(cls, v: str) -> str:
        return v[1:] if v.startswith('.') else v


class PathConfig(BaseModel):
    """Корень TOML-файла"""

    model_config = ConfigDict(frozen=True)

    settings: WatchConfig


def default_config_path() -> Path:
    """$SW_TOML_PATH/path.toml если задан, иначе ./path.toml"""
    directory = settings.SW_TOML_PATH or "."
    return Path(directory) / CONFIG_FILENAME


def load_config(path: str | Path) -> WatchConfig:
    """
    Загружает WatchConfig из TOML-файла.

    Raises:
        ConfigError: файла нет, это не TOML, или поля не той формы
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    try:
        return PathConfig.model_validate(raw).settings
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e
