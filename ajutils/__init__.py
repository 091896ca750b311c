"""Helpers for files, path hashing, lock files, walking, matching, random data and statistics."""

__version__ = "0.1.0"