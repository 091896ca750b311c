import os

import pytest

from ajutils.lock import (
    Lockfile,
    LockfileAcquiredError,
    LockfileNotOwnedError,
    acquire_lockfile,
    acquire_lockfile_reentrant,
)


@pytest.fixture
def lock_path(tmp_path):
    return str(tmp_path / "unit-test.lock")


def test_acquire_lockfile(lock_path):
    lock = acquire_lockfile(lock_path)
    assert lock.path == lock_path
    assert lock.pid == os.getpid()
    with open(lock_path) as f:
        assert f.read() == str(os.getpid())

    # Can't lock, even though it is the same PID
    with pytest.raises(LockfileAcquiredError) as info:
        acquire_lockfile(lock_path)
    assert info.value.lock.path == lock_path
    assert info.value.lock.pid == os.getpid()
    assert info.value.pid_error is None

    # Can release what you own as many times as you want
    for _ in range(5):
        lock.release()
    assert not os.path.exists(lock_path)

    lock = acquire_lockfile(lock_path)
    assert lock.path == lock_path
    assert lock.pid == os.getpid()
    lock.release()
    assert not os.path.exists(lock_path)


def test_acquire_lockfile_reentrant(lock_path):
    lock = acquire_lockfile(lock_path)
    for _ in range(5):
        again = acquire_lockfile_reentrant(lock_path)
        assert again.path == lock_path
        assert again.pid == os.getpid()
    lock.release()
    assert not os.path.exists(lock_path)


def test_reentrant_refuses_other_owner(lock_path):
    with open(lock_path, "w") as f:
        f.write(str(os.getpid() + 100))
    with pytest.raises(LockfileAcquiredError) as info:
        acquire_lockfile_reentrant(lock_path)
    assert info.value.lock.pid == os.getpid() + 100


def test_release_not_owned_lockfile(lock_path):
    with open(lock_path, "w") as f:
        f.write(str(os.getpid() + 100))

    with pytest.raises(LockfileAcquiredError) as info:
        acquire_lockfile(lock_path)
    fail = info.value.lock

    with pytest.raises(LockfileNotOwnedError):
        fail.release()
    assert os.path.exists(lock_path)


def test_invalid_lockfile(lock_path):
    with open(lock_path, "w") as f:
        f.write("lol-nan")

    with pytest.raises(LockfileAcquiredError) as info:
        acquire_lockfile(lock_path)
    assert isinstance(info.value.pid_error, ValueError)
    assert info.value.lock.pid == 0
    assert info.value.lock.path == lock_path


def test_lockfile_as_context_manager(lock_path):
    with acquire_lockfile(lock_path) as lock:
        assert lock.path == lock_path
        assert lock.pid == os.getpid()
        with open(lock.path) as f:
            assert f.read() == str(os.getpid())
    assert not os.path.exists(lock_path)


def test_release_missing_file_owned(lock_path):
    lock = Lockfile(lock_path, os.getpid())
    lock.release()
    assert not os.path.exists(lock_path)