"""Directory listing helpers."""

from __future__ import annotations

import os
import stat
from typing import List


def read_dir_unsorted(path: str) -> List[os.DirEntry]:
    """List the entries of a directory in the order the file system returns them."""
    with os.scandir(path) as entries:
        return list(entries)


def sort_dir_entries(entries: List[os.DirEntry]) -> None:
    """Sort directory entries in place by name."""
    entries.sort(key=lambda entry: os.fsencode(entry.name))


def _entry_type(entry: os.DirEntry) -> int:
    if entry.is_symlink():
        return stat.S_IFLNK
    if entry.is_dir(follow_symlinks=False):
        return stat.S_IFDIR
    if entry.is_file(follow_symlinks=False):
        return stat.S_IFREG
    return stat.S_IFMT(entry.stat(follow_symlinks=False).st_mode)


def is_dir_entry_equal(a: os.DirEntry, b: os.DirEntry) -> bool:
    """Return True if two entries share name, type and directory-ness.

    No extra file information is fetched beyond the entry's type.
    """
    return (
        a.is_dir(follow_symlinks=False) == b.is_dir(follow_symlinks=False)
        and _entry_type(a) == _entry_type(b)
        and a.name == b.name
    )


def is_dir_entry_with_info_equal(a: os.DirEntry, b: os.DirEntry) -> bool:
    """Return True if two entries are equal, including size, mode and modification time.

    Fetching the file information may raise OSError.
    """
    if not is_dir_entry_equal(a, b):
        return False
    info_a = a.stat(follow_symlinks=False)
    info_b = b.stat(follow_symlinks=False)
    return (
        info_a.st_size == info_b.st_size
        and info_a.st_mode == info_b.st_mode
        and info_a.st_mtime_ns == info_b.st_mtime_ns
    )