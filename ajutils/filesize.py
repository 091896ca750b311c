"""Sizes of files and directory trees."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from typing import Iterator, List, Tuple

from ajutils.scan import read_dir_unsorted


def file_size(path: str) -> int:
    """Return the size of the file at path in bytes."""
    fd = os.open(path, os.O_RDONLY)
    try:
        return os.fstat(fd).st_size
    finally:
        os.close(fd)


def calculate_dir_size_shallow(path: str) -> Tuple[int, List[os.DirEntry]]:
    """Sum the sizes of the non-directory entries directly inside path.

    Subdirectories are not entered. Returns the total and the entries that were
    counted; their ``stat(follow_symlinks=False)`` information is already fetched.
    """
    total = 0
    counted: List[os.DirEntry] = []
    for entry in read_dir_unsorted(path):
        if entry.is_dir(follow_symlinks=False):
            continue
        total += entry.stat(follow_symlinks=False).st_size
        counted.append(entry)
    return total, counted


@dataclass
class CalculateSizeResult:
    """Counts produced by :func:`calculate_size`."""

    dirs: int = 0  # number of directories
    files: int = 0  # number of regular files
    total_size: int = 0  # total size in bytes of all regular files


def _walk_stats(root: str) -> Iterator[os.stat_result]:
    info = os.lstat(root)
    yield info
    if not stat.S_ISDIR(info.st_mode):
        return
    pending = [root]
    while pending:
        directory = pending.pop()
        try:
            entries = read_dir_unsorted(directory)
        except OSError:
            continue
        for entry in entries:
            entry_info = entry.stat(follow_symlinks=False)
            yield entry_info
            if stat.S_ISDIR(entry_info.st_mode):
                pending.append(entry.path)


def calculate_size(path: str) -> CalculateSizeResult:
    """Walk path recursively, counting directories, regular files and their total size.

    Symbolic links are neither followed nor counted.
    """
    result = CalculateSizeResult()
    for info in _walk_stats(path):
        if stat.S_ISDIR(info.st_mode):
            result.dirs += 1
        elif stat.S_ISREG(info.st_mode):
            result.files += 1
            result.total_size += info.st_size
    return result