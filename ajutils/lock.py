"""Process lock files holding the PID of the process that owns the lock.

A lock file is not a lock on a single file but on a task or service: every
process that honours the lock refrains from running while another holds it.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Any, Optional, Tuple

_PID_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Lockfile:
    """A lock file at path owned by the process with the given pid."""

    path: str
    pid: int

    def release(self) -> None:
        """Remove the lock file so that another process can acquire it.

        Raises LockfileNotOwnedError when the current process does not own it.
        Releasing an already released lock does nothing.
        """
        if self.pid != os.getpid():
            raise LockfileNotOwnedError(self)
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass

    def __enter__(self) -> "Lockfile":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.release()


class LockfileAcquiredError(Exception):
    """The lock file already exists (or could not be created).

    ``lock`` describes the existing lock; its pid is 0 when the owner could not
    be read, in which case ``pid_error`` holds the reason.
    """

    def __init__(
        self, lock: Lockfile, reason: OSError, pid_error: Optional[Exception] = None
    ) -> None:
        self.lock = lock
        self.reason = reason
        self.pid_error = pid_error
        message = f"failed to acquire the lock file\n{reason}"
        if pid_error is not None:
            message += f"\n{pid_error}"
        super().__init__(message)


class LockfileNotOwnedError(Exception):
    """The current process does not own the lock file."""

    def __init__(self, lock: Lockfile) -> None:
        self.lock = lock
        super().__init__("the current process does not own the lock file")


def _parse_pid(text: str) -> int:
    if _PID_PATTERN.fullmatch(text) is None:
        raise ValueError(f"invalid PID in lock file: {text!r}")
    return int(text)


def _read_pid(path: str) -> Tuple[int, Optional[Exception]]:
    try:
        with open(path, "rb") as f:
            data = f.read()
        return _parse_pid(data.decode("utf-8", "replace")), None
    except (OSError, ValueError) as err:
        return 0, err


def acquire_lockfile(path: str) -> Lockfile:
    """Create the lock file at path holding the current PID and return the lock.

    Raises LockfileAcquiredError if the file exists, even when the current
    process created it.
    """
    try:
        fd = os.open(path, os.O_RDWR | os.O_CREAT | os.O_EXCL, 0o666)
    except OSError as err:
        pid, pid_error = _read_pid(path)
        raise LockfileAcquiredError(Lockfile(path, pid), err, pid_error) from err

    lock = Lockfile(path, os.getpid())
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(str(lock.pid).encode("ascii"))
    except OSError:
        try:
            os.remove(path)
        except OSError:
            pass
        raise
    return lock


def acquire_lockfile_reentrant(path: str) -> Lockfile:
    """Like acquire_lockfile, but succeed when the current process already owns the lock.

    A single release frees the lock however often it was acquired.
    """
    try:
        return acquire_lockfile(path)
    except LockfileAcquiredError as err:
        if err.lock.pid == os.getpid():
            return err.lock
        raise