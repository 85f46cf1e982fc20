"""
Уведомления пользователю.
"""
from __future__ import annotations

import logging
import subprocess
import sys
from typing import List, Protocol, runtime_checkable

from sheet_wizard.errors import DisplayError

logger = logging.getLogger(__name__)


@runtime_checkable
class Notifier(Protocol):
    """Протокол уведомлений: показать заголовок и короткое сообщение."""

    def show(self, title: str, message: str) -> None:
        ...


def _applescript_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _powershell_escape(text: str) -> str:
    return text.replace("'", "''")


_POWERSHELL_BALLOON = (
    "Add-Type -AssemblyName System.Windows.Forms; "
    "$n = New-Object System.Windows.Forms.NotifyIcon; "
    "$n.Icon = [System.Drawing.SystemIcons]::Information; "
    "$n.Visible = $true; "
    "$n.ShowBalloonTip(5000, '{title}', '{message}', "
    "[System.Windows.Forms.ToolTipIcon]::Info); "
    "Start-Sleep -Seconds 6; $n.Dispose()"
)


class DesktopNotifier:
    """Системное уведомление через штатную утилиту платформы (fire-and-forget)."""

    def __init__(self, enabled: bool = True, platform: str | None = None):
        self.enabled = enabled
        self.platform = platform or sys.platform

    def build_command(self, title: str, message: str) -> List[str]:
        if self.platform == "darwin":
            script = (
                f'display notification "{_applescript_escape(message)}" '
                f'with title "{_applescript_escape(title)}"'
            )
            return ["/usr/bin/osascript", "-e", script]
        if self.platform.startswith("win"):
            script = _POWERSHELL_BALLOON.format(
                title=_powershell_escape(title),
                message=_powershell_escape(message),
            )
            return ["powershell", "-NoProfile", "-WindowStyle", "Hidden", "-Command", script]
        return ["notify-send", "--expire-time=5000", title, message]

    def show(self, title: str, message: str) -> None:
        if not self.enabled:
            return
        command = self.build_command(title, message)
        try:
            subprocess.Popen(
                command,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise DisplayError(f"Failed to show notification via {command[0]}: {e}") from e


class LogNotifier:
    """Уведомления в лог — для запуска без рабочего стола."""

    def show(self, title: str, message: str) -> None:
        logger.info(f"[{title}] {message}")


def build_notifier(backend: str, enabled: bool = True) -> Notifier:
    """Notifier по имени backend из настроек: "desktop" или "log" """
    if backend == "log":
        return LogNotifier()
    return DesktopNotifier(enabled=enabled)
