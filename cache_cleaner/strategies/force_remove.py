import logging
import subprocess
import sys

from .base import DeleteStrategy
from .utils import path_exists


LOGGER = logging.getLogger("cache_cleaner")


def build_force_delete_cmd(directory: str, *, platform: str | None = None) -> list[str] | None:
    """Return the native recursive-delete command for *platform*, or None."""
    platform = platform or sys.platform
    if platform.startswith("win"):
        return ["cmd.exe", "/c", "rmdir", "/s", "/q", directory]
    if platform.startswith("linux") or platform == "darwin":
        return ["rm", "-rf", directory]
    return None


def _run_command(cmd: list[str], *, timeout: float | None) -> subprocess.CompletedProcess:
    return subprocess.run(cmd, capture_output=True, text=True, check=False, timeout=timeout)


def _result_text(result: subprocess.CompletedProcess) -> str:
    stderr = str(result.stderr or "").strip()
    stdout = str(result.stdout or "").strip()
    return stderr or stdout


class ForceRemoveStrategy(DeleteStrategy):
    name = "force"

    def __init__(self, *, timeout_seconds: float | None = None, platform: str | None = None):
        self._timeout_seconds = timeout_seconds
        self._platform = platform

    def delete(self, directory: str) -> bool:
        cmd = build_force_delete_cmd(directory, platform=self._platform)
        if cmd is None:
            LOGGER.warning("[CLEANUP]: No force-delete command for platform %s", self._platform or sys.platform)
            return False

        try:
            result = _run_command(cmd, timeout=self._timeout_seconds)
        except (OSError, subprocess.SubprocessError):
            LOGGER.warning("[CLEANUP]: Force-delete command could not run for %s", directory, exc_info=True)
            return False

        LOGGER.debug(
            "[CLEANUP]: %s exited %s (stdout=%r, stderr=%r)",
            cmd[0],
            result.returncode,
            str(result.stdout or "").strip(),
            str(result.stderr or "").strip(),
        )
        if result.returncode != 0:
            LOGGER.warning(
                "[CLEANUP]: Force-delete failed for %s (exit code %s): %s",
                directory,
                result.returncode,
                _result_text(result),
            )
            return False
        return not path_exists(directory)
