# ajutils

A small collection of practical helpers for working with the file system and
text, using only the standard library.

## What is inside

- `ajutils.fileutils` – `path_exists`, `dir_exists`, `file_exists`,
  `glob_ext` (recursive search by extension), `abs_paths`, `replace_ext`,
  `remove_if_exists` and `expand_path` (expands a leading `~`).
- `ajutils.filesize` – `file_size`, `calculate_dir_size_shallow` (sizes of the
  entries directly inside a directory) and `calculate_size`, which walks a
  tree and returns a `CalculateSizeResult` with `dirs`, `files` and
  `total_size`.
- `ajutils.scan` – `read_dir_unsorted`, `sort_dir_entries`,
  `is_dir_entry_equal` and `is_dir_entry_with_info_equal`.
- `ajutils.pathhash` – `calculate_path_hash` and `calculate_paths_hash`: stable
  SHA-1 digests of a path, or of a set of paths regardless of their order.
- `ajutils.lock` – process lock files holding the owner's PID:
  `acquire_lockfile`, `acquire_lockfile_reentrant` and `Lockfile.release`
  (a `Lockfile` can also be used as a context manager). Failures raise
  `LockfileAcquiredError` or `LockfileNotOwnedError`.
- `ajutils.walker` – `Walker` walks a directory tree in lexical order with
  include/exclude filters, and composable matchers `match_always`,
  `match_never`, `match_apple_ds_store`, `match_apple_protected` and
  `match_regex`. A callback may raise `SkipDir`.
- `ajutils.regex_list` – `RegexList` with `matches_any`, `matches_all` and
  `matches`; a bad expression raises `RegexListCompileError` telling its index.
- `ajutils.pathmatch` – `RegexPathMatcher`, `ShellPatternPathMatcher` and
  `shell_match` (shell patterns with `*`, `?`, `[...]`; a malformed pattern
  raises `BadPatternError`).
- `ajutils.regex_scanner` – `RegexScanner` reads text line by line and keeps the
  last match (with capture groups) for every registered expression, optionally
  calling a function for each matching line.
- `ajutils.human` – `format_bytes(1024)` gives `"1.0 kB"`.
- `ajutils.stats` – `get_memory_usage`, `print_memory_usage`,
  `measure_elapsed_time` and `print_time_taken`.
- `ajutils.randdata` – random strings, integers, secure bytes and integers,
  random paths and files filled with random bytes, useful in tests.

## Installation

```
pip install ajutils
```

## Examples

```python
from ajutils.human import format_bytes
from ajutils.filesize import calculate_size
from ajutils.lock import acquire_lockfile, LockfileAcquiredError

result = calculate_size("data")
print(result.dirs, result.files, format_bytes(result.total_size))

try:
    lock = acquire_lockfile("/tmp/myservice.lock")
except LockfileAcquiredError as exc:
    print("already running as PID", exc.lock.pid)
else:
    with lock:
        ...  # do the work; the lock is released on leaving the block
```

```python
from ajutils.walker import Walker, match_apple_ds_store, match_never

def visit(path, entry, error):
    if error is not None:
        raise error
    print(path)

Walker(file_excluder=match_apple_ds_store(match_never)).walk("~/projects", visit)
```

```python
import io
from ajutils.regex_scanner import RegexScanner

scanner = RegexScanner()
scanner.add("version", r"version\s+(\d+)")
print(scanner.process(io.StringIO("name x\nversion 7\n")))
# {'version': ['version 7', '7']}
```

## What it does not do

The package has no helpers for copying files or for hashing file contents
(MD5, SHA-1, SHA-256, SHA-512), and no cancellable readers or writers; only
paths are hashed, by `ajutils.pathhash`. It provides no command-line program.

## Running the tests

```
pip install -e ".[test]"
pytest
```