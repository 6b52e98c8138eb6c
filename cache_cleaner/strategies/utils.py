import os
import stat


def clear_readonly(path: str) -> None:
    try:
        mode = os.lstat(path).st_mode
    except OSError:
        return
    if stat.S_ISLNK(mode):
        return
    if not mode & stat.S_IWRITE:
        os.chmod(path, mode | stat.S_IWRITE)


def list_entries(directory: str) -> tuple[list[str], list[str]]:
    """Return (files, subdirectories) directly under *directory*.

    Symlinks are reported as files so they are unlinked, never followed.
    """
    files: list[str] = []
    subdirs: list[str] = []
    with os.scandir(directory) as entries:
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                subdirs.append(entry.path)
            else:
                files.append(entry.path)
    files.sort()
    subdirs.sort()
    return files, subdirs


def directory_exists(path: str) -> bool:
    return os.path.isdir(path)


def path_exists(path: str) -> bool:
    return os.path.lexists(path)


def is_symlink(path: str) -> bool:
    return os.path.islink(path)
