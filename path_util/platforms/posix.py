"""
POSIX platform: '/' separators, '~' home shorthand, realpath canonicalization
and per-OS discovery of the running executable.
"""

import ctypes
import ctypes.util
import os
import stat
import sys
from typing import Optional, Tuple

from .. import config
from ..errors import fail
from .base import Platform

# Conditional imports for Unix-specific modules
if os.name != 'nt':
    import pwd
else:
    pwd = None

# sysctl MIB for the executable path on FreeBSD
CTL_KERN = 1
KERN_PROC = 14
KERN_PROC_PATHNAME = 12

EXECUTABLE_FAILURE = "unable to determine file name of executable file"


class PosixPlatform(Platform):
    """Strategy for Linux, macOS, the BSDs and other Unix-likes."""

    name = "posix"
    separator = "/"
    separators = frozenset("/")

    # ------------------------------
    # Path Classification
    # ------------------------------

    def is_absolute(self, path: str) -> bool:
        if path.startswith("~"):
            return len(path) == 1 or self.is_separator(path[1])
        return bool(path) and self.is_separator(path[0])

    def root_prefix(self, path: str) -> Optional[Tuple[str, int, bool]]:
        if path.startswith("~"):
            if len(path) == 1:
                return None
            if self.is_separator(path[1]):
                return "~" + self.separator, 2, False
            return "", 0, False
        return super().root_prefix(path)

    # ------------------------------
    # OS Queries
    # ------------------------------

    def home_directory(self) -> str:
        home = os.environ.get(config.HOME_ENV_VAR)
        if home is not None:
            return home
        entry = None
        if pwd is not None:
            try:
                entry = pwd.getpwuid(os.getuid())
            except KeyError:
                entry = None
        if entry is not None and entry.pw_dir:
            return entry.pw_dir
        raise fail("unable to determine path to the user home directory")

    def make_absolute(self, path: str, base: str) -> str:
        from ..algebra import path_concat, path_simplify

        if path.startswith("~"):
            if len(path) == 1:
                return self.home_directory()
            if self.is_separator(path[1]):
                return path_simplify(path_concat(self.home_directory(), path[2:], self), self)
        if path and self.is_separator(path[0]):
            return path_simplify(path, self)
        return path_simplify(path_concat(base, path, self), self)

    def resolve_absolute(self, path: str) -> str:
        return self.make_absolute(path, self.current_directory())

    def make_canonical(self, path: str) -> str:
        try:
            return os.path.realpath(path, strict=True)
        except (OSError, ValueError) as exc:
            raise fail(f"unable to canonicalize path '{path}'", path, exc) from exc

    def creation_root_offset(self, directory: str) -> int:
        if directory and self.is_separator(directory[0]):
            return 1
        raise fail(f"invalid path '{directory}'", directory)

    def is_file(self, path: str) -> bool:
        try:
            st = os.stat(path)
        except FileNotFoundError:
            return False
        except (OSError, ValueError) as exc:
            raise fail(f"unable to stat file '{path}'", path, exc) from exc
        return stat.S_ISREG(st.st_mode)

    def create_symlink(self, target: str, link: str) -> str:
        try:
            os.symlink(target, link)
        except FileExistsError as exc:
            try:
                existing = os.readlink(link)
            except OSError:
                existing = None
            if existing == target:
                return link
            raise fail(f"unable to create symlink from '{target}' to '{link}'", link, exc) from exc
        except (OSError, ValueError) as exc:
            raise fail(f"unable to create symlink from '{target}' to '{link}'", link, exc) from exc
        return link

    # ------------------------------
    # Executable Discovery
    # ------------------------------

    def executable_file(self) -> str:
        if sys.platform.startswith(("linux", "android")):
            return self._executable_from_proc()
        if sys.platform == "darwin":
            return self._executable_from_dyld()
        if sys.platform.startswith("freebsd"):
            return self._executable_from_sysctl()
        if sys.platform.startswith("sunos"):
            return self._executable_from_execname()
        raise fail(f"{EXECUTABLE_FAILURE} (not implemented)")

    def _executable_from_proc(self) -> str:
        try:
            return os.readlink(config.PROC_SELF_EXE)
        except OSError as exc:
            raise fail(f"unable to read link '{config.PROC_SELF_EXE}'", config.PROC_SELF_EXE, exc) from exc

    def _executable_from_dyld(self) -> str:
        libc = _load_libc()
        size = ctypes.c_uint32(0)
        # Probe call: must fail and report the required buffer size
        probe = ctypes.create_string_buffer(1)
        if libc._NSGetExecutablePath(probe, ctypes.byref(size)) >= 0 or size.value == 0:
            raise fail(f"{EXECUTABLE_FAILURE} (_NSGetExecutablePath has weird behavior)")
        buf = ctypes.create_string_buffer(size.value + 1)
        if libc._NSGetExecutablePath(buf, ctypes.byref(size)) < 0:
            raise fail(f"{EXECUTABLE_FAILURE} (_NSGetExecutablePath has failed)")
        return os.fsdecode(buf.value)

    def _executable_from_sysctl(self) -> str:
        libc = _load_libc()
        mib = (ctypes.c_int * 4)(CTL_KERN, KERN_PROC, KERN_PROC_PATHNAME, -1)
        buf = ctypes.create_string_buffer(config.PATH_MAX + 1)
        size = ctypes.c_size_t(config.PATH_MAX)
        if libc.sysctl(mib, 4, buf, ctypes.byref(size), None, 0) < 0:
            err = ctypes.get_errno()
            raise fail(EXECUTABLE_FAILURE, None, OSError(err, os.strerror(err)))
        return os.fsdecode(buf.value)

    def _executable_from_execname(self) -> str:
        libc = _load_libc()
        libc.getexecname.restype = ctypes.c_char_p
        name = libc.getexecname()
        if not name:
            raise fail(EXECUTABLE_FAILURE)
        return os.fsdecode(name)


def _load_libc() -> ctypes.CDLL:
    name = ctypes.util.find_library("c")
    try:
        return ctypes.CDLL(name, use_errno=True)
    except OSError as exc:
        raise fail(EXECUTABLE_FAILURE, None, exc) from exc
