from __future__ import annotations

import logging
import threading

from .host import Host, Severity
from .remover import CleanupOutcome, DirectoryRemover


LOGGER = logging.getLogger("cache_cleaner")

STARTED_MESSAGE = "Starting cleanup process... This may take a few seconds."
NOTHING_TO_CLEAN_MESSAGE = "No cache folders found to clean up."
RESTART_DESPITE_ERRORS_MESSAGE = "Some files could not be deleted. Do you still want to restart?"


class CleanupWorkflow:
    """Confirm, delete in the background, report, then restart the host."""

    def __init__(
        self,
        *,
        host: Host,
        runner,
        target_paths: list[str],
        remover: DirectoryRemover | None = None,
        restart_delay_seconds: float = 3.0,
        restart_enabled: bool = True,
    ):
        self._host = host
        self._runner = runner
        self._target_paths = tuple(target_paths)
        self._remover = remover or DirectoryRemover()
        self._restart_delay_seconds = float(restart_delay_seconds)
        self._restart_enabled = bool(restart_enabled)
        self._lock = threading.Lock()
        self._active = False
        self._last_outcome: CleanupOutcome | None = None

    @property
    def target_paths(self) -> list[str]:
        return list(self._target_paths)

    @property
    def is_running(self) -> bool:
        return self._active

    @property
    def last_outcome(self) -> CleanupOutcome | None:
        return self._last_outcome

    def confirmation_message(self) -> str:
        lines = [
            "This will delete the following cache and build folders, then restart the application:",
            "",
        ]
        lines.extend(f"  - {path}" for path in self._target_paths)
        lines.extend(
            [
                "",
                "WARNING: this may take several minutes. Save your work before continuing!",
            ]
        )
        return "\n".join(lines)

    def request_cleanup(self) -> bool:
        if not self._host.confirm(self.confirmation_message()):
            LOGGER.info("[CLEANUP]: Cleanup declined")
            return False
        return self.start_cleanup()

    def start_cleanup(self) -> bool:
        with self._lock:
            if self._active:
                LOGGER.warning("[CLEANUP]: Cleanup already in progress; ignoring request")
                return False
            self._active = True

        try:
            self._host.notify(STARTED_MESSAGE, Severity.PENDING)
            self._runner.submit(self.perform_cleanup)
        except Exception:
            self._active = False
            raise
        return True

    def perform_cleanup(self) -> CleanupOutcome:
        try:
            outcome = self._remover.remove_all(self._target_paths)
            self._last_outcome = outcome
            try:
                self.on_cleanup_completed(outcome)
            except Exception:
                LOGGER.warning("[CLEANUP]: Completion handling failed", exc_info=True)
            return outcome
        finally:
            self._active = False

    def on_cleanup_completed(self, outcome: CleanupOutcome) -> None:
        if outcome.success and outcome.deleted_count > 0:
            if not self._restart_enabled:
                self._host.notify(f"Successfully cleaned up {outcome.deleted_count} folders.", Severity.SUCCESS)
                return
            self._host.notify(
                f"Successfully cleaned up {outcome.deleted_count} folders. "
                f"Restarting in {self._restart_delay_seconds:g} seconds...",
                Severity.SUCCESS,
            )
            self._runner.schedule_in(self._restart_delay_seconds, self._host.restart)
            return

        if outcome.success:
            self._host.notify(NOTHING_TO_CLEAN_MESSAGE, Severity.NONE)
            return

        details = "\n".join(f"Failed to delete: {item.path}" for item in outcome.failures)
        self._host.notify(f"Cleanup completed with errors:\n{details}", Severity.FAIL)
        if self._restart_enabled and self._host.confirm(RESTART_DESPITE_ERRORS_MESSAGE):
            self._host.restart()
