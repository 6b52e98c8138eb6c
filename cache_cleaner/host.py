from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from enum import Enum


LOGGER = logging.getLogger("cache_cleaner")


class Severity(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAIL = "fail"
    NONE = "none"


class Host(ABC):
    """What the cleanup workflow needs from the application it runs inside."""

    @abstractmethod
    def confirm(self, message: str) -> bool:
        """Ask a yes/no question; True means go ahead."""

    @abstractmethod
    def notify(self, message: str, severity: Severity) -> None:
        """Surface a status message to the user."""

    @abstractmethod
    def restart(self) -> bool:
        """Restart the host application; False when no restart was possible."""


class CommandHost(Host):
    """Host that reports through logging and restarts by launching a command."""

    def __init__(self, *, restart_command: list[str] | None = None, assume_yes: bool = False):
        self._restart_command = list(restart_command or [])
        self._assume_yes = bool(assume_yes)
        self.restart_process: subprocess.Popen | None = None

    def confirm(self, message: str) -> bool:
        LOGGER.info("[CLEANUP]: Confirmation %s: %s", "accepted" if self._assume_yes else "declined", message)
        return self._assume_yes

    def notify(self, message: str, severity: Severity) -> None:
        level = logging.ERROR if severity == Severity.FAIL else logging.INFO
        LOGGER.log(level, "[CLEANUP]: [%s] %s", severity.value, message)

    def restart(self) -> bool:
        if not self._restart_command:
            LOGGER.info("[CLEANUP]: No restart command configured; skipping restart")
            return False
        try:
            self.restart_process = subprocess.Popen(self._restart_command, start_new_session=True)
        except OSError:
            LOGGER.error("[CLEANUP]: Failed to launch restart command %s", self._restart_command, exc_info=True)
            return False
        LOGGER.info("[CLEANUP]: Restart launched: %s", " ".join(self._restart_command))
        return True


class ConsoleHost(CommandHost):
    def __init__(self, *, restart_command: list[str] | None = None, assume_yes: bool = False, input_func=None):
        super().__init__(restart_command=restart_command, assume_yes=assume_yes)
        self._input = input_func or input

    def confirm(self, message: str) -> bool:
        if self._assume_yes:
            return True
        print(message)
        try:
            answer = self._input("Continue? [y/N] ")
        except EOFError:
            return False
        return str(answer or "").strip().lower() in {"y", "yes"}

    def notify(self, message: str, severity: Severity) -> None:
        super().notify(message, severity)
        print(f"[cache-cleaner] {message}")
