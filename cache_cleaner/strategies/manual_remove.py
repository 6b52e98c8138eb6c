import logging
import os

from .base import DeleteStrategy
from .utils import clear_readonly, is_symlink, list_entries, path_exists


LOGGER = logging.getLogger("cache_cleaner")


def _remove_file(path: str) -> None:
    clear_readonly(path)
    os.unlink(path)


def _remove_empty_dir(path: str) -> None:
    os.rmdir(path)


def delete_directory_contents(directory: str) -> bool:
    """Depth-first removal of everything under *directory*.

    A file that cannot be removed is logged and skipped. Only a failing
    subdirectory walk makes the whole walk fail.
    """
    try:
        files, subdirs = list_entries(directory)
    except OSError:
        LOGGER.warning("[CLEANUP]: Could not list directory: %s", directory, exc_info=True)
        return False

    for file_path in files:
        try:
            _remove_file(file_path)
        except OSError as exc:
            LOGGER.warning("[CLEANUP]: Could not delete file: %s (%s)", file_path, exc)

    for subdir in subdirs:
        if not delete_directory_contents(subdir):
            return False
        try:
            _remove_empty_dir(subdir)
        except OSError as exc:
            LOGGER.debug("[CLEANUP]: Could not remove subdirectory %s (%s)", subdir, exc)

    return True


class ManualRemoveStrategy(DeleteStrategy):
    name = "manual"

    def delete(self, directory: str) -> bool:
        if is_symlink(directory):
            LOGGER.warning("[CLEANUP]: Refusing to walk symlinked folder: %s", directory)
            return False
        if not delete_directory_contents(directory):
            return False
        try:
            _remove_empty_dir(directory)
        except OSError as exc:
            LOGGER.warning("[CLEANUP]: Manual removal left %s behind (%s)", directory, exc)
            return False
        return not path_exists(directory)
