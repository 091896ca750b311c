"""Stable hashes of file system paths."""

from __future__ import annotations

import hashlib
from typing import Iterable

PATH_HASH_SIZE = hashlib.sha1().digest_size


def _encode(path: str) -> bytes:
    return path.encode("utf-8", "surrogateescape")


def calculate_path_hash(path: str) -> bytes:
    """Return the SHA-1 digest identifying a single path."""
    return hashlib.sha1(_encode(path), usedforsecurity=False).digest()


def calculate_paths_hash(paths: Iterable[str]) -> bytes:
    """Return the SHA-1 digest identifying a set of paths, independent of their order."""
    hasher = hashlib.sha1(usedforsecurity=False)
    for encoded in sorted(_encode(path) for path in paths):
        hasher.update(encoded)
    return hasher.digest()