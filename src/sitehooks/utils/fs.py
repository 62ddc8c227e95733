# ABOUTME: Filesystem primitives shared by the hooks.
# ABOUTME: Scoped umask override, portable recursive delete, copy helpers.
import logging
import os
import shutil
import stat
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)


@contextmanager
def scoped_umask(mask: int) -> Iterator[int]:
    """Temporarily override the process umask.

    ABOUTME: Restores the previous mask in a finally block, even on error
    ABOUTME: Yields the previous mask

    Args:
        mask: Umask to apply inside the block

    Examples:
        >>> with scoped_umask(0):
        ...     Path("files").mkdir(mode=0o777)
    """
    previous = os.umask(mask)
    try:
        yield previous
    finally:
        os.umask(previous)


def make_dir(path: Path, mode: int = 0o777, open_permissions: bool = False) -> None:
    """Create a directory and its parents.

    ABOUTME: With open_permissions, umask is cleared so mode applies as given
    ABOUTME: and mode is re-applied with chmod on the final directory
    """
    if open_permissions:
        # Parents get the normal umask; only the final directory is opened up
        path.parent.mkdir(parents=True, exist_ok=True)
        with scoped_umask(0):
            path.mkdir(mode=mode, exist_ok=True)
        path.chmod(mode)
    else:
        path.mkdir(mode=mode, parents=True, exist_ok=True)
    logger.debug(f"Created directory {path} (mode {mode:o})")


def touch(path: Path) -> None:
    """Create an empty file, leaving an existing one untouched."""
    if not path.exists():
        path.touch()
        logger.debug(f"Created {path}")


def copy_file(source: Path, target: Path, mode: int | None = None) -> Path:
    """Copy a file, creating the target's parent directory.

    ABOUTME: Overwrites target if it exists
    ABOUTME: Applies mode with chmod after copying when given

    Args:
        source: File to copy
        target: Destination file path
        mode: Optional permission bits for the copy

    Returns:
        Path to the copied file
    """
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, target)
    if mode is not None:
        target.chmod(mode)
    logger.debug(f"Copied {source} -> {target}")
    return target


def remove_tree(path: Path) -> None:
    """Remove a file or directory tree depth-first.

    ABOUTME: Unlinks files immediately, recurses into subdirectories,
    ABOUTME: then removes the emptied directory
    ABOUTME: Symlinks are unlinked, never followed
    ABOUTME: Read-only entries (git pack files) are made writable first

    Args:
        path: File or directory to remove

    Raises:
        OSError: If an entry cannot be removed
    """
    if path.is_symlink() or not path.is_dir():
        _unlink(path)
        return

    for entry in path.iterdir():
        remove_tree(entry)

    path.rmdir()


def find_named(root: Path, name: str) -> list[Path]:
    """Find entries called name beneath root.

    ABOUTME: Does not descend into matches, so nested matches are covered
    ABOUTME: by their outermost ancestor
    ABOUTME: Symlinked directories are not followed

    Args:
        root: Directory to search
        name: Exact entry name to match

    Returns:
        Matching paths in walk order
    """
    matches: list[Path] = []

    for entry in sorted(root.iterdir()):
        if entry.name == name:
            matches.append(entry)
        elif entry.is_dir() and not entry.is_symlink():
            matches.extend(find_named(entry, name))

    return matches


def _unlink(path: Path) -> None:
    try:
        path.unlink()
    except PermissionError:
        # Windows refuses to delete read-only files
        path.chmod(path.lstat().st_mode | stat.S_IWRITE)
        path.unlink()
