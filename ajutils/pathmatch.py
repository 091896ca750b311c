"""Matching file system paths against regular expressions or shell patterns."""

from __future__ import annotations

import os
import re
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Iterable, Tuple

from ajutils.regex_list import RegexList


class BadPatternError(ValueError):
    """A shell pattern is malformed."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__("syntax error in pattern")


class PathMatcher(ABC):
    """Determines whether a file system path matches."""

    @abstractmethod
    def match(self, path: str) -> bool:
        """Return True if the path matches."""


class RegexPathMatcher(PathMatcher):
    """Matches a path against a set of regular expressions."""

    def __init__(self, expressions: Iterable[str]) -> None:
        self._regex_list = RegexList(expressions)

    def match(self, path: str) -> bool:
        return self._regex_list.matches_any(path)


class ShellPatternPathMatcher(PathMatcher):
    """Matches a path against a set of shell patterns (see :func:`shell_match`)."""

    def __init__(self, patterns: Iterable[str]) -> None:
        self.patterns = list(patterns)

    def match(self, path: str) -> bool:
        return any(shell_match(pattern, path) for pattern in self.patterns)


def shell_match(pattern: str, name: str) -> bool:
    """Report whether name matches the shell pattern as a whole.

    ``*`` matches any run of non-separator characters, ``?`` one non-separator
    character, ``[...]`` a character class (``^`` negates, ``lo-hi`` ranges)
    and ``\\c`` the character c literally (except where ``\\`` is the path
    separator). A malformed pattern raises :class:`BadPatternError`.
    """
    return _translate(pattern).fullmatch(name) is not None


def _escapes_allowed() -> bool:
    return os.sep != "\\"


def _class_char(pattern: str, i: int) -> Tuple[str, int]:
    n = len(pattern)
    if i >= n or pattern[i] in "-]":
        raise BadPatternError(pattern)
    if pattern[i] == "\\" and _escapes_allowed():
        i += 1
        if i >= n:
            raise BadPatternError(pattern)
    char = pattern[i]
    i += 1
    if i >= n:
        raise BadPatternError(pattern)
    return char, i


def _parse_class(pattern: str, i: int) -> Tuple[str, int]:
    """Parse the class starting just after ``[``; return its regex and the next index."""
    n = len(pattern)
    negated = i < n and pattern[i] == "^"
    if negated:
        i += 1

    items = []
    count = 0
    while True:
        if i < n and pattern[i] == "]" and count > 0:
            i += 1
            break
        low, i = _class_char(pattern, i)
        high = low
        if pattern[i] == "-":
            high, i = _class_char(pattern, i + 1)
        count += 1
        if low <= high:
            items.append(re.escape(low) if low == high else f"{re.escape(low)}-{re.escape(high)}")

    if not items:
        return ("(?s:.)" if negated else "(?!)"), i
    return f"[{'^' if negated else ''}{''.join(items)}]", i


@lru_cache(maxsize=256)
def _translate(pattern: str) -> "re.Pattern[str]":
    not_sep = f"[^{re.escape(os.sep)}]"
    parts = []
    n = len(pattern)
    i = 0
    while i < n:
        char = pattern[i]
        if char == "*":
            while i < n and pattern[i] == "*":
                i += 1
            parts.append(not_sep + "*")
        elif char == "?":
            parts.append(not_sep)
            i += 1
        elif char == "[":
            regex, i = _parse_class(pattern, i + 1)
            parts.append(regex)
        elif char == "\\" and _escapes_allowed():
            i += 1
            if i >= n:
                raise BadPatternError(pattern)
            parts.append(re.escape(pattern[i]))
            i += 1
        else:
            parts.append(re.escape(char))
            i += 1
    return re.compile("".join(parts), re.DOTALL)