"""Walking a file hierarchy with include and exclude filters."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Protocol

from ajutils.fileutils import expand_path
from ajutils.pathmatch import RegexPathMatcher


class SkipDir(Exception):
    """Raised by a walk callback to skip the current directory.

    Raised while visiting a file, it skips the remaining entries of the
    directory that holds the file.
    """


class _EntryLike(Protocol):
    name: str

    def is_dir(self) -> bool: ...


MatchPathFn = Callable[[str, _EntryLike], bool]
WalkFn = Callable[[str, Optional["_Entry"], Optional[Exception]], None]


class _Entry:
    """A directory entry whose type never follows symbolic links."""

    __slots__ = ("name", "path", "_mode", "_info")

    def __init__(
        self, name: str, path: str, mode: int, info: Optional[os.stat_result] = None
    ) -> None:
        self.name = name
        self.path = path
        self._mode = stat.S_IFMT(mode)
        self._info = info

    @classmethod
    def from_dir_entry(cls, entry: os.DirEntry, path: str) -> "_Entry":
        if entry.is_symlink():
            mode = stat.S_IFLNK
        elif entry.is_dir(follow_symlinks=False):
            mode = stat.S_IFDIR
        elif entry.is_file(follow_symlinks=False):
            mode = stat.S_IFREG
        else:
            mode = entry.stat(follow_symlinks=False).st_mode
        return cls(entry.name, path, mode)

    def is_dir(self) -> bool:
        return stat.S_ISDIR(self._mode)

    def is_file(self) -> bool:
        return stat.S_ISREG(self._mode)

    def is_symlink(self) -> bool:
        return stat.S_ISLNK(self._mode)

    def type(self) -> int:
        """The file type bits of the entry's mode."""
        return self._mode

    def stat(self) -> os.stat_result:
        """Return the entry's information without following symbolic links."""
        if self._info is None:
            self._info = os.lstat(self.path)
        return self._info

    def __repr__(self) -> str:
        return f"_Entry(name={self.name!r}, path={self.path!r})"


def match_always(path: str, entry: _EntryLike) -> bool:
    """A matcher that always matches."""
    return True


def match_never(path: str, entry: _EntryLike) -> bool:
    """A matcher that never matches."""
    return False


def match_apple_ds_store(next_fn: MatchPathFn) -> MatchPathFn:
    """Wrap next_fn so that Apple ``.DS_Store`` files also match."""

    def matcher(path: str, entry: _EntryLike) -> bool:
        if not entry.is_dir() and entry.name == ".DS_Store":
            return True
        return next_fn(path, entry)

    return matcher


_APPLE_PROTECTED = frozenset(
    {".Spotlight-V100", ".DocumentRevisions-V100", ".Trashes", ".fseventsd"}
)


def match_apple_protected(next_fn: MatchPathFn) -> MatchPathFn:
    """Wrap next_fn so that Apple protected files and directories also match."""

    def matcher(path: str, entry: _EntryLike) -> bool:
        if entry.name in _APPLE_PROTECTED:
            return True
        return next_fn(path, entry)

    return matcher


def match_regex(expressions: Iterable[str], next_fn: MatchPathFn) -> MatchPathFn:
    """Wrap next_fn so that paths matching any of the expressions also match.

    Raises RegexListCompileError if an expression is invalid.
    """
    path_matcher = RegexPathMatcher(expressions)

    def matcher(path: str, entry: _EntryLike) -> bool:
        if path_matcher.match(path):
            return True
        return next_fn(path, entry)

    return matcher


@dataclass
class Walker:
    """Walks a file hierarchy, filtering directories and files.

    The filters are called with the path relative to the root and the entry.
    A directory or file is walked when its includer returns True and its
    excluder returns False; the excluder is not consulted when the includer
    already rejected the path. The root itself is never filtered as a directory.
    """

    dir_includer: Optional[MatchPathFn] = None
    file_includer: Optional[MatchPathFn] = None
    dir_excluder: Optional[MatchPathFn] = None
    file_excluder: Optional[MatchPathFn] = None

    def __post_init__(self) -> None:
        if self.dir_includer is None:
            self.dir_includer = match_always
        if self.file_includer is None:
            self.file_includer = match_always
        if self.dir_excluder is None:
            self.dir_excluder = match_never
        if self.file_excluder is None:
            self.file_excluder = match_never

    def walk(self, root: str, fn: WalkFn) -> None:
        """Walk the tree at root in lexical order, calling ``fn(path, entry, error)``.

        fn is called with error None for every path that passes the filters.
        When a path cannot be inspected or a directory cannot be listed, fn is
        called with the error instead; it may raise it to stop the walk or
        return to carry on. fn may raise SkipDir to skip a directory. Symbolic
        links are not followed and a leading ``~`` in root is expanded.
        """
        expanded = expand_path(root)
        try:
            info = os.lstat(expanded)
        except OSError as err:
            try:
                fn(expanded, None, err)
            except SkipDir:
                pass
            return

        name = os.path.basename(os.path.normpath(expanded)) or expanded
        entry = _Entry(name, expanded, info.st_mode, info)
        try:
            self._walk(expanded, expanded, entry, fn)
        except SkipDir:
            pass

    def _included(self, root: str, path: str, entry: _Entry) -> bool:
        relative = os.path.relpath(path, root)
        if entry.is_dir():
            if path == root:
                return True
            return self.dir_includer(relative, entry) and not self.dir_excluder(
                relative, entry
            )
        return self.file_includer(relative, entry) and not self.file_excluder(
            relative, entry
        )

    def _walk(self, root: str, path: str, entry: _Entry, fn: WalkFn) -> None:
        if not self._included(root, path, entry):
            return

        try:
            fn(path, entry, None)
        except SkipDir:
            if entry.is_dir():
                return
            raise
        if not entry.is_dir():
            return

        children: List[_Entry] = []
        try:
            with os.scandir(path) as listing:
                children = [
                    _Entry.from_dir_entry(
                        child, os.path.normpath(os.path.join(path, child.name))
                    )
                    for child in listing
                ]
        except OSError as err:
            try:
                fn(path, entry, err)
            except SkipDir:
                return
            children = []

        children.sort(key=lambda child: os.fsencode(child.name))
        for child in children:
            try:
                self._walk(root, child.path, child, fn)
            except SkipDir:
                break