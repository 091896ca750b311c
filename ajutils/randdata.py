"""Random data: strings, integers, bytes, file paths and files filled with random bytes."""

from __future__ import annotations

import itertools
import os
import posixpath
import random
import secrets
import string
import tempfile
from typing import List, Optional

_LETTERS = string.ascii_lowercase + string.ascii_uppercase
_CHUNK_SIZE = 32 * 1024

_rng = random.Random()


def random_string(n: int) -> str:
    """Return a string of n random ASCII letters (a-z, A-Z); empty when n <= 0."""
    if n <= 0:
        return ""
    return "".join(_rng.choices(_LETTERS, k=n))


def random_int(minimum: int, maximum: int) -> int:
    """Return a random integer between minimum and maximum, both inclusive."""
    if maximum < minimum:
        raise ValueError(
            f"invalid range: maximum {maximum} is smaller than minimum {minimum}"
        )
    return _rng.randint(minimum, maximum)


def secure_uint32() -> int:
    """Return an unsigned 32 bit integer from the secure random number generator."""
    return int.from_bytes(secrets.token_bytes(4), "little")


def secure_uint64() -> int:
    """Return an unsigned 64 bit integer from the secure random number generator."""
    return int.from_bytes(secrets.token_bytes(8), "little")


def secure_bytes(size: int) -> bytes:
    """Return size bytes from the secure random number generator."""
    if size < 0:
        raise ValueError(f"size must not be negative, got {size}")
    return secrets.token_bytes(size)


def _fill(fd: int, size: int) -> None:
    remaining = max(0, size)
    with os.fdopen(fd, "wb") as f:
        while remaining > 0:
            chunk = os.urandom(min(_CHUNK_SIZE, remaining))
            f.write(chunk)
            remaining -= len(chunk)


def create_file(path: str, size: int) -> None:
    """Create (or overwrite) the file at path and fill it with size random bytes."""
    fd = os.open(path, os.O_RDWR | os.O_CREAT | os.O_TRUNC, 0o666)
    _fill(fd, size)


def create_temp_file(directory: Optional[str], prefix: str, size: int) -> str:
    """Create a new temporary file filled with size random bytes and return its path.

    directory None or "" means the default temporary directory. A ``*`` in
    prefix marks where the random part of the name goes (the last one wins);
    without one the random part is appended.
    """
    if os.sep in prefix or (os.altsep and os.altsep in prefix):
        raise ValueError(f"pattern contains path separator: {prefix!r}")
    head, star, tail = prefix.rpartition("*")
    name_prefix, name_suffix = (head, tail) if star else (prefix, "")
    fd, path = tempfile.mkstemp(
        suffix=name_suffix, prefix=name_prefix, dir=directory or None
    )
    _fill(fd, size)
    return path


def random_path(
    base: str, min_dirs: int, max_dirs: int, min_name_len: int, max_name_len: int
) -> str:
    """Return base joined with a random number (min_dirs..max_dirs) of random names.

    Each name has a random length between min_name_len (at least 1) and max_name_len.
    """
    count = random_int(min_dirs, max_dirs)
    min_name_len = max(1, min_name_len)
    names = os.sep.join(
        random_string(random_int(min_name_len, max_name_len)) for _ in range(count)
    )
    joined = "/".join(part for part in (base, names) if part)
    return posixpath.normpath(joined) if joined else ""


def random_paths(
    base: str,
    count: int,
    min_dirs: int,
    max_dirs: int,
    min_name_len: int,
    max_name_len: int,
) -> List[str]:
    """Return count paths made by :func:`random_path`."""
    return [
        random_path(base, min_dirs, max_dirs, min_name_len, max_name_len)
        for _ in range(count)
    ]


def create_files(
    directory: str,
    min_files: int,
    max_files: int,
    min_size: int,
    max_size: int,
    max_total_size: int,
) -> int:
    """Create files of random bytes inside directory and return the bytes written.

    Each file gets between 0 and max_size bytes, and no more than fit within
    max_total_size overall. min_size is accepted but not enforced.
    """
    total = 0
    for index in itertools.count():
        # The number of files is drawn again before every file.
        if index >= random_int(min_files, max_files):
            break
        if total >= max_total_size:
            continue
        path = os.path.join(directory, f"{random_string(random_int(1, 16))}-{index}")
        amount = min(random_int(0, max_size), max_total_size - total)
        create_file(path, amount)
        total += amount
        if total >= max_total_size:
            break
    return total