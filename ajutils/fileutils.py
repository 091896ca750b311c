"""Simple utilities for working with the file system."""

from __future__ import annotations

import errno
import os
import stat
from pathlib import Path
from typing import Iterable, Iterator, List, Optional


def _stat_or_none(path: str) -> Optional[os.stat_result]:
    try:
        return os.stat(path)
    except FileNotFoundError:
        return None


def path_exists(path: str) -> bool:
    """Return True if path exists.

    A missing path gives False; any other failure while checking is raised.
    """
    return _stat_or_none(path) is not None


def dir_exists(path: str) -> bool:
    """Return True if path exists and is a directory.

    A missing path or a path that is not a directory gives False; any other
    failure while checking is raised.
    """
    info = _stat_or_none(path)
    return info is not None and stat.S_ISDIR(info.st_mode)


def file_exists(path: str) -> bool:
    """Return True if path exists and is a regular file.

    A missing path or a path that is not a regular file gives False; any other
    failure while checking is raised.
    """
    info = _stat_or_none(path)
    return info is not None and stat.S_ISREG(info.st_mode)


def _ext(path: str) -> str:
    """Return the extension of the last path element, including the dot."""
    separators = os.sep + (os.altsep or "")
    cut = max(path.rfind(sep) for sep in separators)
    base = path[cut + 1 :]
    dot = base.rfind(".")
    return base[dot:] if dot >= 0 else ""


def _walk_paths(root: str) -> Iterator[str]:
    """Yield root and everything below it in lexical order, without following links.

    Paths that cannot be inspected are still yielded but not descended into.
    """
    yield root
    try:
        info = os.lstat(root)
    except OSError:
        return
    if not stat.S_ISDIR(info.st_mode):
        return
    try:
        names = sorted(os.listdir(root), key=os.fsencode)
    except OSError:
        return
    for name in names:
        yield from _walk_paths(os.path.normpath(os.path.join(root, name)))


def glob_ext(directory: str, ext: str) -> List[str]:
    """Recursively find every path below directory whose extension is ext.

    ext must include the dot, e.g. ``".txt"``. Paths come in lexical order.
    """
    return [path for path in _walk_paths(directory) if _ext(path) == ext]


def abs_paths(paths: Iterable[str], check_exists: bool = False) -> List[str]:
    """Convert paths to absolute paths, optionally requiring that each exists."""
    result = [os.path.abspath(path) for path in paths]
    if check_exists:
        for path in result:
            if not path_exists(path):
                raise FileNotFoundError(
                    errno.ENOENT, f"the path {path!r} does not exist", path
                )
    return result


def replace_ext(path: str, new_ext: str) -> str:
    """Replace the extension of path with new_ext, or append it if there is none."""
    ext = _ext(path)
    if not ext:
        return path + new_ext
    return path[: len(path) - len(ext)] + new_ext


def remove_if_exists(path: str) -> None:
    """Remove a file or empty directory, ignoring the case where it does not exist."""
    try:
        os.remove(path)
    except FileNotFoundError:
        return
    except OSError:
        if os.path.islink(path) or not os.path.isdir(path):
            raise
        try:
            os.rmdir(path)
        except FileNotFoundError:
            return


def expand_path(path: str) -> str:
    """Replace a leading ``~`` with the user's home directory."""
    if not path.startswith("~"):
        return path
    home = str(Path.home())
    if path == "~":
        return home
    return os.path.normpath(os.path.join(home, path[2:]))