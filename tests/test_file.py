import os

import pytest

from partup.file import copy, get_size, read_raw

ROOT_EXT4_SIZE = 262144
LOREM = b"Lorem ipsum dolor sit amet, consectetur adipiscing elit.\n"


@pytest.fixture
def data_dir(tmp_path):
    data = tmp_path / "data"
    data.mkdir()
    (data / "lorem.txt").write_bytes(LOREM)
    (data / "root.ext4").write_bytes(b"\0" * ROOT_EXT4_SIZE)
    (data / "random.bin").write_bytes(bytes(i % 251 for i in range(4096)))
    return data


def test_file_copy(data_dir, tmp_path):
    dest = tmp_path / "dest"
    dest.mkdir()
    out = copy(str(data_dir / "lorem.txt"), str(dest))
    assert out == os.path.join(str(dest), "lorem.txt")
    assert os.path.isfile(out)
    with open(out, "rb") as f:
        assert f.read() == LOREM


def test_file_copy_fail(data_dir, tmp_path):
    dest = tmp_path / "dest"
    dest.mkdir()
    with pytest.raises(FileNotFoundError):
        copy(str(data_dir / "thisfilereallydoesnotexist"), str(dest))
    assert list(dest.iterdir()) == []


def test_file_copy_does_not_overwrite(data_dir, tmp_path):
    dest = tmp_path / "dest"
    dest.mkdir()
    (dest / "lorem.txt").write_bytes(b"keep")
    with pytest.raises(FileExistsError):
        copy(str(data_dir / "lorem.txt"), str(dest))
    assert (dest / "lorem.txt").read_bytes() == b"keep"


def test_file_get_size(data_dir):
    assert get_size(str(data_dir / "root.ext4")) == ROOT_EXT4_SIZE


def test_file_get_size_missing(data_dir):
    with pytest.raises(FileNotFoundError):
        get_size(str(data_dir / "missing"))


def test_file_get_size_empty_path():
    with pytest.raises(ValueError):
        get_size("")


def test_read_raw_slice(data_dir):
    path = data_dir / "random.bin"
    expected = path.read_bytes()[1024:1024 + 3072]
    assert read_raw(str(path), 1024, 3072) == expected


def test_read_raw_rest_of_file(data_dir):
    path = data_dir / "random.bin"
    content = path.read_bytes()
    assert read_raw(str(path), 100) == content[100:]
    assert read_raw(str(path)) == content


def test_read_raw_missing():
    with pytest.raises(FileNotFoundError):
        read_raw("file/not/found", 0, 2048)