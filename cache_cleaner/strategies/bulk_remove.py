import logging
import shutil
import sys

from .base import DeleteStrategy
from .utils import clear_readonly, path_exists


LOGGER = logging.getLogger("cache_cleaner")


def _retry_writable(func, path, _exc) -> None:
    clear_readonly(path)
    func(path)


def _remove_tree(directory: str) -> None:
    if sys.version_info >= (3, 12):
        shutil.rmtree(directory, onexc=_retry_writable)
    else:
        shutil.rmtree(directory, onerror=_retry_writable)


class BulkRemoveStrategy(DeleteStrategy):
    name = "bulk"

    def delete(self, directory: str) -> bool:
        try:
            _remove_tree(directory)
        except OSError:
            LOGGER.warning("[CLEANUP]: Bulk removal failed for %s", directory, exc_info=True)
            return False
        return not path_exists(directory)
