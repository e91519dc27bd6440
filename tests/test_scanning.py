import hashlib
import os
import pytest
from pathlib import Path

from imagecat.exceptions import FileHashError, SourceDirectoryError
from imagecat.scanning.filesystem import DiskScanner
from imagecat.scanning.hasher import FileHasher


@pytest.fixture
def tree(tmp_path):
    """
    root/top.jpg
    root/a/one.jpg
    root/a/b/two.jpg
    root/a/b/c/three.jpg
    """
    root = tmp_path / "root"
    deep = root / "a" / "b" / "c"
    deep.mkdir(parents=True)
    (root / "top.jpg").write_text("top")
    (root / "a" / "one.jpg").write_text("1")
    (root / "a" / "b" / "two.jpg").write_text("2")
    (deep / "three.jpg").write_text("3")
    return root


def names(paths):
    return sorted(p.name for p in paths)


def test_compute_file_hash(tmp_path):
    p = tmp_path / "sample.bin"
    data = b"hello world" * 10
    p.write_bytes(data)

    hasher = FileHasher()
    assert hasher.hash_file(p) == hashlib.md5(data).hexdigest()
    assert FileHasher("sha256").hash_file(p) == hashlib.sha256(data).hexdigest()


def test_hash_missing_file_raises(tmp_path):
    with pytest.raises(FileHashError):
        FileHasher().hash_file(tmp_path / "nope.jpg")


def test_default_is_not_recursive(tree):
    assert names(DiskScanner().iter_files(tree)) == ["top.jpg"]


def test_unlimited_recursion(tree):
    files = list(DiskScanner().iter_files(tree, max_depth=None))
    assert names(files) == ["one.jpg", "three.jpg", "top.jpg", "two.jpg"]


@pytest.mark.parametrize(
    "depth,expected",
    [
        (0, ["top.jpg"]),
        (1, ["one.jpg", "top.jpg"]),
        (2, ["one.jpg", "top.jpg", "two.jpg"]),
        (10, ["one.jpg", "three.jpg", "top.jpg", "two.jpg"]),
    ],
)
def test_max_depth(tree, depth, expected):
    assert names(DiskScanner().iter_files(tree, max_depth=depth)) == expected


def test_skip_dirs_are_not_descended(tree):
    files = list(DiskScanner().iter_files(tree, max_depth=None, skip_dirs={tree / "a" / "b"}))
    assert names(files) == ["one.jpg", "top.jpg"]


def test_directories_and_symlinks_excluded(tree):
    link = tree / "link.jpg"
    try:
        os.symlink(tree / "top.jpg", link)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")

    files = list(DiskScanner().iter_files(tree))
    assert link not in files
    assert (tree / "a") not in files


def test_missing_root_is_fatal(tmp_path):
    with pytest.raises(SourceDirectoryError):
        list(DiskScanner().iter_files(tmp_path / "missing"))
