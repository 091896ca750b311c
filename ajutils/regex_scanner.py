"""Scan text line by line and record matches of registered regular expressions."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, TextIO

FoundMatches = Callable[[str, str, int, List[str]], None]

# Longest line the scanner accepts, newline excluded.
_MAX_LINE_BYTES = 64 * 1024 - 1


@dataclass(frozen=True)
class _Entry:
    key: str
    regex: "re.Pattern[str]"
    found: Optional[FoundMatches]


class RegexScanner:
    """Reads lines from a text stream and matches each against registered expressions.

    The result of :meth:`process` maps each key to the last match found for it:
    the whole match followed by its capture groups (unmatched groups as "").
    """

    def __init__(self) -> None:
        self._entries: List[_Entry] = []
        self._out: Optional[TextIO] = None

    def add(self, key: str, expression: str, found: Optional[FoundMatches] = None) -> None:
        """Register an expression under key.

        found, when given, is called as ``found(key, line, line_number, matches)``
        for every line that matches; an exception it raises stops processing.
        For case-insensitive matching prefix the expression with ``(?i)``.
        """
        try:
            regex = re.compile(expression)
        except re.error as err:
            raise ValueError(
                "failed to compile the regular expression for the key: "
                f"{json.dumps(key, ensure_ascii=False)} expression: "
                f"{json.dumps(expression, ensure_ascii=False)}. {err}"
            ) from err
        self._entries.append(_Entry(key, regex, found))

    def set_out(self, out: Optional[TextIO]) -> None:
        """Echo every line read during :meth:`process` to out (None to stop)."""
        self._out = out

    def process(self, reader: Iterable[str]) -> Dict[str, List[str]]:
        """Read reader line by line and return the last matches found per key."""
        result: Dict[str, List[str]] = {}
        for line_number, line in enumerate(_lines(reader)):
            if self._out is not None:
                self._out.write(line + "\n")

            for entry in self._entries:
                match = entry.regex.search(line)
                if match is None:
                    continue
                found = [match.group(0), *match.groups(default="")]
                result[entry.key] = found
                if entry.found is not None:
                    entry.found(entry.key, line, line_number, found)
        return result


def _lines(reader: Iterable[str]) -> Iterable[str]:
    for raw in reader:
        line = raw[:-1] if raw.endswith("\n") else raw
        if line.endswith("\r"):
            line = line[:-1]
        if len(line.encode("utf-8")) > _MAX_LINE_BYTES:
            raise ValueError("token too long")
        yield line