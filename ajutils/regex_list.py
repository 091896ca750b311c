"""Lists of compiled regular expressions used to match strings."""

from __future__ import annotations

import json
import re
from typing import Iterable, List


class RegexListCompileError(ValueError):
    """One of the expressions given to a :class:`RegexList` failed to compile."""

    def __init__(self, input: str, index: int, error: Exception) -> None:
        self.input = input
        self.index = index
        self.error = error
        super().__init__(
            f"the regular expression at index [{index}] "
            f"{json.dumps(input, ensure_ascii=False)} is not valid. {error}"
        )


class RegexList:
    """A list of compiled regular expressions that can be used to match things."""

    def __init__(self, expressions: Iterable[str]) -> None:
        compiled = []
        for index, expression in enumerate(expressions):
            try:
                compiled.append(re.compile(expression))
            except re.error as err:
                raise RegexListCompileError(expression, index, err) from err
        self._compiled = tuple(compiled)

    @property
    def patterns(self) -> List[str]:
        """The source text of the compiled expressions, in order."""
        return [regex.pattern for regex in self._compiled]

    def __len__(self) -> int:
        return len(self._compiled)

    def matches_any(self, needle: str) -> bool:
        """Return True if needle matches any of the expressions."""
        return any(regex.search(needle) for regex in self._compiled)

    def matches_all(self, needle: str) -> bool:
        """Return True if needle matches every one of the expressions."""
        return all(regex.search(needle) for regex in self._compiled)

    def matches(self, needles: Iterable[str]) -> List[str]:
        """Return the needles that match any of the expressions, in order."""
        return [needle for needle in needles if self.matches_any(needle)]