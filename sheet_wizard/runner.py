"""
Запуск внешнего скрипта обработки в conda-окружении.
"""
import logging
import os
import subprocess
from pathlib import Path
from typing import List

from sheet_wizard.errors import ActionExecutionError

logger = logging.getLogger(__name__)


class ScriptRunner:
    """Синхронно запускает скрипт и ждёт его завершения (без таймаута)."""

    def __init__(self, conda_executable: str | None = None):
        self.conda_executable = conda_executable or os.environ.get("CONDA_EXE", "conda")

    def build_command(self, filename: str, env_name: str) -> List[str]:
        return [self.conda_executable, "run", "-n", env_name, "python", filename]

    def run(self, directory: str, filename: str, env_name: str) -> int:
        """
        Запускает filename в директории directory.

        Returns:
            Код возврата (всегда 0, иначе исключение)

        Raises:
            ActionExecutionError: нет директории/файла, процесс не стартовал
                или завершился с ненулевым кодом
        """
        workdir = Path(directory)
        if not workdir.is_dir():
            raise ActionExecutionError(f"Script directory not found: {directory}")
        if not (workdir / filename).exists():
            raise ActionExecutionError(f"Script not found: {workdir / filename}")

        command = self.build_command(filename, env_name)
        logger.info(f"Running {filename} in env '{env_name}'")
        try:
            completed = subprocess.run(command, cwd=str(workdir))
        except OSError as e:
            raise ActionExecutionError(f"Cannot start {command[0]}: {e}") from e

        if completed.returncode != 0:
            raise ActionExecutionError(
                f"Executed script failed with exit code: {completed.returncode}",
                exit_code=completed.returncode,
            )

        logger.info("✅ Executed script successfully")
        return completed.returncode
