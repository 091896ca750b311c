import os
import string

import pytest

from ajutils.filesize import calculate_dir_size_shallow
from ajutils.randdata import (
    create_file,
    create_files,
    create_temp_file,
    random_int,
    random_path,
    random_paths,
    random_string,
    secure_bytes,
    secure_uint32,
    secure_uint64,
)


def test_random_int_in_range():
    for _ in range(100):
        x = random_int(10, 42)
        assert 10 <= x <= 42


def test_random_int_single_value():
    assert random_int(7, 7) == 7


def test_random_int_invalid_range():
    with pytest.raises(ValueError):
        random_int(5, 4)


def test_random_string_length():
    for i in range(100):
        assert len(random_string(i)) == i


def test_random_string_alphabet():
    allowed = set(string.ascii_letters)
    assert set(random_string(500)) <= allowed


def test_random_string_negative_is_empty():
    assert random_string(-3) == ""


def test_secure_uint32_unique_and_in_range():
    seen = set()
    for _ in range(100):
        r = secure_uint32()
        assert 0 <= r < 2**32
        assert r not in seen
        seen.add(r)


def test_secure_uint64_unique_and_in_range():
    seen = set()
    for _ in range(100):
        r = secure_uint64()
        assert 0 <= r < 2**64
        assert r not in seen
        seen.add(r)


def test_secure_bytes():
    buffer1 = secure_bytes(42)
    buffer2 = secure_bytes(42)
    assert len(buffer1) == 42
    assert len(buffer2) == 42
    assert buffer1 != buffer2


def test_secure_bytes_negative():
    with pytest.raises(ValueError):
        secure_bytes(-1)


def test_create_file(tmp_path):
    path = tmp_path / "unit-testing"
    create_file(str(path), 100)
    assert os.stat(path).st_size == 100


def test_create_file_overwrites(tmp_path):
    path = tmp_path / "unit-testing"
    path.write_bytes(b"x" * 500)
    create_file(str(path), 10)
    assert os.stat(path).st_size == 10


def test_create_temp_file(tmp_path):
    path = create_temp_file(str(tmp_path), "unit-testing", 100)
    assert os.path.dirname(path) == str(tmp_path)
    assert os.path.basename(path).startswith("unit-testing")
    assert os.stat(path).st_size == 100


def test_create_temp_file_default_dir():
    path = create_temp_file("", "unit-testing", 100)
    try:
        assert os.stat(path).st_size == 100
    finally:
        os.remove(path)


def test_create_temp_file_star_pattern(tmp_path):
    path = create_temp_file(str(tmp_path), "unit-*-test.bin", 5)
    name = os.path.basename(path)
    assert name.startswith("unit-")
    assert name.endswith("-test.bin")
    assert os.stat(path).st_size == 5


def test_create_temp_file_separator_in_pattern(tmp_path):
    with pytest.raises(ValueError):
        create_temp_file(str(tmp_path), "a" + os.sep + "b", 5)


def test_random_path():
    prefix = "dir1"

    assert random_path(prefix, 4, 10, 1, 10).startswith(prefix)

    parts = random_path(prefix, 1, 1, 2, 8).split(os.sep)
    assert len(parts) == 2
    assert parts[0] == prefix

    parts = random_path(prefix, 3, 3, 0, 20).split(os.sep)
    assert len(parts) == 4
    assert parts[0] == prefix

    # min name length 0 still gives at least one character
    parts = random_path(prefix, 1, 1, 0, 2).split(os.sep)
    assert len(parts) == 2
    assert parts[0] == prefix
    assert len(parts[1]) > 0

    parts = random_path(prefix, 1, 1, 4, 4).split(os.sep)
    assert len(parts) == 2
    assert parts[0] == prefix
    assert len(parts[1]) == 4


def test_random_path_no_dirs_returns_base():
    assert random_path("dir1", 0, 0, 1, 4) == "dir1"


def test_random_paths():
    paths = random_paths("dir1", 10, 4, 8, 1, 10)
    assert len(paths) == 10
    for p in paths:
        assert p.startswith("dir1")


def test_create_files(tmp_path):
    max_total_size = 100
    written = create_files(str(tmp_path), 4, 10, 4, 20, max_total_size)
    assert 0 <= written <= max_total_size

    total_size, _ = calculate_dir_size_shallow(str(tmp_path))
    assert total_size == written
    assert total_size <= max_total_size


def test_create_files_respects_small_budget(tmp_path):
    written = create_files(str(tmp_path), 20, 20, 0, 50, 7)
    total_size, _ = calculate_dir_size_shallow(str(tmp_path))
    assert written <= 7
    assert total_size == written