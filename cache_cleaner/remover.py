from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from .strategies import DeleteStrategy, default_strategy_chain
from .strategies.utils import directory_exists, is_symlink, path_exists


LOGGER = logging.getLogger("cache_cleaner")

EXHAUSTED_REASON = "all strategies exhausted"


class PathState(str, Enum):
    SKIPPED = "skipped"
    DELETED = "deleted"
    FAILED = "failed"


@dataclass(frozen=True)
class CleanupFailure:
    path: str
    reason: str


@dataclass
class CleanupOutcome:
    deleted: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failures: list[CleanupFailure] = field(default_factory=list)

    @property
    def deleted_count(self) -> int:
        return len(self.deleted)

    @property
    def success(self) -> bool:
        return not self.failures

    def state_of(self, path: str) -> PathState | None:
        if path in self.deleted:
            return PathState.DELETED
        if path in self.skipped:
            return PathState.SKIPPED
        if any(item.path == path for item in self.failures):
            return PathState.FAILED
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "deleted_count": self.deleted_count,
            "deleted": list(self.deleted),
            "skipped": list(self.skipped),
            "failures": [{"path": item.path, "reason": item.reason} for item in self.failures],
        }


class DirectoryRemover:
    """Deletes directory trees, escalating through an ordered strategy chain.

    Paths are handled one at a time in input order. A path that is missing
    up front is skipped; otherwise each strategy is tried until the path is
    gone. Nothing raised by a strategy escapes :meth:`remove_all`.
    """

    def __init__(self, strategies: list[DeleteStrategy] | None = None):
        self._strategies = list(strategies) if strategies is not None else default_strategy_chain()

    @property
    def strategies(self) -> list[DeleteStrategy]:
        return list(self._strategies)

    def remove_all(self, paths: Iterable[str]) -> CleanupOutcome:
        request = tuple(str(item) for item in paths)
        outcome = CleanupOutcome()

        for path in request:
            state = self.remove_one(path)
            if state is PathState.SKIPPED:
                outcome.skipped.append(path)
            elif state is PathState.DELETED:
                outcome.deleted.append(path)
            else:
                outcome.failures.append(CleanupFailure(path=path, reason=EXHAUSTED_REASON))

        LOGGER.info(
            "[CLEANUP]: Run finished: %s deleted, %s skipped, %s failed",
            outcome.deleted_count,
            len(outcome.skipped),
            len(outcome.failures),
        )
        return outcome

    def remove_one(self, path: str) -> PathState:
        if not directory_exists(path):
            LOGGER.info("[CLEANUP]: Folder does not exist, skipping: %s", path)
            return PathState.SKIPPED

        if is_symlink(path):
            return self._remove_link(path)

        LOGGER.info("[CLEANUP]: Attempting to delete folder: %s", path)
        for strategy in self._strategies:
            if self._attempt(strategy, path):
                LOGGER.info("[CLEANUP]: Successfully deleted %s (strategy: %s)", path, strategy.name)
                return PathState.DELETED
            LOGGER.info("[CLEANUP]: Strategy '%s' did not delete %s", strategy.name, path)

        LOGGER.error("[CLEANUP]: Failed to delete folder: %s", path)
        return PathState.FAILED

    def _remove_link(self, path: str) -> PathState:
        # Only the link goes; the directory it points at is never walked.
        try:
            os.unlink(path)
        except OSError:
            LOGGER.error("[CLEANUP]: Failed to remove symlinked folder: %s", path, exc_info=True)
            return PathState.FAILED
        if path_exists(path):
            return PathState.FAILED
        LOGGER.info("[CLEANUP]: Removed symlink %s (target left untouched)", path)
        return PathState.DELETED

    def _attempt(self, strategy: DeleteStrategy, path: str) -> bool:
        try:
            reported = bool(strategy.delete(path))
        except Exception:
            LOGGER.warning(
                "[CLEANUP]: Strategy '%s' raised while deleting %s",
                strategy.name,
                path,
                exc_info=True,
            )
            return False
        return reported and not path_exists(path)
