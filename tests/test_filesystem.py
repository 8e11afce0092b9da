"""
Tests for the filesystem functions against a real temporary directory.
"""

import errno
import os
import sys
from concurrent.futures import ThreadPoolExecutor

import pytest

from path_util import (
    DirEntry,
    DirEntryType,
    PathError,
    dir_create,
    dir_ls,
    file_delete,
    file_mtime,
    is_file,
    link_create,
    path_abs,
    path_cwd,
    path_executable,
    path_exists,
    path_home,
    path_real,
    path_simplify,
)
from path_util import config
from path_util.platforms import posix as posix_module

pytestmark = pytest.mark.posix_only


# ------------------------------
# Location Functions
# ------------------------------

def test_path_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert path_cwd() == os.getcwd()


def test_path_home_prefers_env(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert path_home() == str(tmp_path)


def test_path_home_falls_back_to_password_database(monkeypatch):
    import pwd

    monkeypatch.delenv("HOME", raising=False)
    entry = pwd.getpwuid(os.getuid())
    if not entry.pw_dir:
        pytest.skip("current user has no home directory entry")
    assert path_home() == entry.pw_dir


def test_path_home_fails_without_any_source(monkeypatch):
    def no_entry(uid):
        raise KeyError(uid)

    monkeypatch.delenv("HOME", raising=False)
    monkeypatch.setattr(posix_module.pwd, "getpwuid", no_entry)
    with pytest.raises(PathError, match="user home directory"):
        path_home()


def test_path_abs_with_base():
    assert path_abs("b/../c", "/a") == "/a/c"
    assert path_abs("/x/./y", "/a") == "/x/y"
    assert path_abs("", "/a/b/..") == "/a"
    assert path_abs("~foo", "/a") == "/a/~foo"


def test_path_abs_expands_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert path_abs("~", "/unused") == str(tmp_path)
    assert path_abs("~/a/../b", "/unused") == path_simplify(str(tmp_path) + "/b")


def test_path_abs_uses_current_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cwd = os.getcwd()
    assert path_abs("a/./b") == cwd + "/a/b"
    assert path_abs(".") == cwd


def test_path_real_resolves_symlinks(tmp_path):
    target = tmp_path / "target"
    target.mkdir()
    link = tmp_path / "link"
    link.symlink_to(target)
    assert path_real(link) == os.path.realpath(target)
    assert path_real(str(link) + "/../link") == os.path.realpath(target)


def test_path_real_requires_existing_path(tmp_path):
    missing = tmp_path / "missing"
    with pytest.raises(PathError, match="unable to canonicalize path") as excinfo:
        path_real(missing)
    assert excinfo.value.path == str(missing)
    assert excinfo.value.errno == errno.ENOENT


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="/proc/self/exe is Linux-only")
def test_path_executable_reads_proc():
    executable = path_executable()
    assert os.path.isabs(executable)
    assert executable == os.readlink("/proc/self/exe")


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="/proc/self/exe is Linux-only")
def test_path_executable_reports_unreadable_link(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "PROC_SELF_EXE", str(tmp_path / "nothing"))
    with pytest.raises(PathError, match="unable to read link"):
        path_executable()


def test_path_executable_unknown_platform(monkeypatch):
    monkeypatch.setattr(posix_module.sys, "platform", "plan9")
    with pytest.raises(PathError, match=r"executable file \(not implemented\)\."):
        path_executable()


# ------------------------------
# Directory Creation
# ------------------------------

def test_dir_create_makes_every_level(tmp_path):
    target = tmp_path / "a" / "b" / "c"
    assert dir_create(target) is True
    assert target.is_dir()
    assert (tmp_path / "a" / "b").is_dir()


def test_dir_create_existing_chain_returns_false(tmp_path):
    assert dir_create(tmp_path) is False
    target = tmp_path / "x" / "y"
    assert dir_create(target) is True
    assert dir_create(target) is False


def test_dir_create_relative_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert dir_create("rel/./sub/../dir") is True
    assert (tmp_path / "rel" / "dir").is_dir()
    assert not (tmp_path / "rel" / "sub").exists()


def test_dir_create_fails_below_a_file(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(PathError, match="unable to create directory") as excinfo:
        dir_create(blocker / "sub")
    assert excinfo.value.path == str(blocker / "sub")


def test_dir_create_concurrent_callers(tmp_path):
    target = tmp_path / "p" / "q" / "r" / "s"
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: dir_create(target), range(16)))
    assert target.is_dir()
    assert any(results)


def test_dir_create_uses_configured_mode(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DIRECTORY_MODE", 0o700)
    target = tmp_path / "private"
    old_umask = os.umask(0)
    try:
        dir_create(target)
    finally:
        os.umask(old_umask)
    assert target.stat().st_mode & 0o777 == 0o700


# ------------------------------
# Query Functions
# ------------------------------

def test_path_exists(tmp_path):
    (tmp_path / "f").write_text("x")
    assert path_exists(tmp_path)
    assert path_exists(tmp_path / "f")
    assert not path_exists(tmp_path / "missing")
    assert not path_exists(tmp_path / "f" / "child")
    assert not path_exists("bad\0path")


def test_path_exists_broken_symlink(tmp_path):
    link = tmp_path / "dangling"
    link.symlink_to(tmp_path / "missing")
    assert not path_exists(link)


def test_is_file(tmp_path):
    regular = tmp_path / "f"
    regular.write_text("x")
    link = tmp_path / "link"
    link.symlink_to(regular)
    assert is_file(regular)
    assert is_file(link)
    assert not is_file(tmp_path)
    assert not is_file(tmp_path / "missing")


def test_is_file_raises_on_other_stat_errors(tmp_path):
    regular = tmp_path / "f"
    regular.write_text("x")
    with pytest.raises(PathError, match="unable to stat file") as excinfo:
        is_file(regular / "child")
    assert excinfo.value.errno == errno.ENOTDIR


def test_file_mtime(tmp_path):
    regular = tmp_path / "f"
    regular.write_text("x")
    os.utime(regular, (1_000_000, 1_234_567))
    assert file_mtime(regular) == 1_234_567


def test_file_mtime_missing_is_fatal_while_is_file_is_not(tmp_path):
    missing = tmp_path / "missing"
    assert is_file(missing) is False
    with pytest.raises(PathError) as excinfo:
        file_mtime(missing)
    assert str(missing) in str(excinfo.value)
    assert str(excinfo.value).startswith("unable to stat file")
    assert isinstance(excinfo.value.cause, FileNotFoundError)


# ------------------------------
# Symbolic Links
# ------------------------------

def test_link_create(tmp_path):
    target = tmp_path / "target"
    target.write_text("x")
    link = tmp_path / "link"
    assert link_create(target, link) == str(link)
    assert os.readlink(link) == str(target)


def test_link_create_accepts_identical_existing_link(tmp_path):
    link = tmp_path / "link"
    link_create("somewhere", link)
    assert link_create("somewhere", link) == str(link)
    assert os.readlink(link) == "somewhere"


def test_link_create_rejects_different_existing_link(tmp_path):
    link = tmp_path / "link"
    link_create("somewhere", link)
    with pytest.raises(PathError, match="unable to create symlink from 'elsewhere'") as excinfo:
        link_create("elsewhere", link)
    assert excinfo.value.errno == errno.EEXIST
    assert os.readlink(link) == "somewhere"


def test_link_create_rejects_existing_file(tmp_path):
    occupied = tmp_path / "occupied"
    occupied.write_text("x")
    with pytest.raises(PathError):
        link_create("target", occupied)


# ------------------------------
# Directory Listing
# ------------------------------

def test_dir_ls_empty_directory(tmp_path):
    assert dir_ls(tmp_path) == []


def test_dir_ls_classifies_entries(tmp_path):
    (tmp_path / "file.txt").write_text("x")
    (tmp_path / "sub").mkdir()
    (tmp_path / "link").symlink_to(tmp_path / "sub")
    entries = sorted(dir_ls(tmp_path), key=lambda entry: entry.name)
    assert entries == [
        DirEntry(DirEntryType.REGULAR_FILE, "file.txt"),
        DirEntry(DirEntryType.LINK, "link"),
        DirEntry(DirEntryType.DIRECTORY, "sub"),
    ]
    assert all(entry.name not in (".", "..") for entry in entries)


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="no FIFO support")
def test_dir_ls_classifies_fifo(tmp_path):
    os.mkfifo(tmp_path / "pipe")
    assert dir_ls(tmp_path) == [DirEntry(DirEntryType.FIFO, "pipe")]


def test_dir_ls_missing_directory(tmp_path):
    missing = tmp_path / "missing"
    with pytest.raises(PathError, match="unable to enumerate contents of directory") as excinfo:
        dir_ls(missing)
    assert excinfo.value.path == str(missing)


def test_dir_ls_on_a_file(tmp_path):
    regular = tmp_path / "f"
    regular.write_text("x")
    with pytest.raises(PathError):
        dir_ls(regular)


# ------------------------------
# Deletion
# ------------------------------

def test_file_delete(tmp_path):
    regular = tmp_path / "f"
    regular.write_text("x")
    file_delete(regular)
    assert not regular.exists()


def test_file_delete_removes_link_not_target(tmp_path):
    target = tmp_path / "target"
    target.write_text("x")
    link = tmp_path / "link"
    link.symlink_to(target)
    file_delete(link)
    assert not link.is_symlink()
    assert target.exists()


def test_file_delete_missing_is_fatal(tmp_path):
    with pytest.raises(PathError, match="unable to delete file") as excinfo:
        file_delete(tmp_path / "missing")
    assert excinfo.value.errno == errno.ENOENT


# ------------------------------
# Invalid Paths
# ------------------------------

@pytest.mark.parametrize(
    "call",
    [
        is_file,
        file_mtime,
        dir_ls,
        file_delete,
        path_real,
        dir_create,
        lambda path: link_create("target", path),
    ],
    ids=["is_file", "file_mtime", "dir_ls", "file_delete", "path_real", "dir_create", "link_create"],
)
def test_embedded_null_byte_raises_path_error(tmp_path, call):
    bad = str(tmp_path) + "/bad\0path"
    with pytest.raises(PathError) as excinfo:
        call(bad)
    assert excinfo.value.path == bad
    assert bad in str(excinfo.value)
    assert isinstance(excinfo.value.cause, ValueError)
