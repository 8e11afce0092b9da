"""
Windows platform: '\\' and '/' separators, drive letters and UNC prefixes.

The string rules are pure and work on any host, so Windows paths can be
handled from POSIX. OS queries call the Win32 API through ctypes and only
work on Windows itself.
"""

import ctypes
import ntpath
import os
import stat
from typing import Optional, Tuple

from .. import config
from ..errors import fail
from .base import Platform, has_drive_letter

TOKEN_QUERY = 0x0008


def _last_error() -> OSError:
    code = ctypes.get_last_error()
    return OSError(None, ctypes.FormatError(code).strip(), None, code)


class WindowsPlatform(Platform):
    """Strategy for Win32 paths."""

    name = "windows"
    separator = "\\"
    separators = frozenset("/\\")

    # ------------------------------
    # Path Classification
    # ------------------------------

    def is_relative(self, path: str) -> bool:
        """Shell classification: relative unless rooted at '\\' or carrying a drive."""
        return not (path.startswith("\\") or has_drive_letter(path))

    def is_unc(self, path: str) -> bool:
        return len(path) >= 2 and self.is_separator(path[0]) and self.is_separator(path[1])

    def is_absolute(self, path: str) -> bool:
        # UNC paths without a drive letter are not absolute here
        if self.is_relative(path):
            return False
        return len(path) > 2 and has_drive_letter(path) and self.is_separator(path[2])

    def root_prefix(self, path: str) -> Optional[Tuple[str, int, bool]]:
        if self.is_unc(path):
            server_end = self.index_of_first_separator(path, 2)
            if server_end < 0:
                return None
            share_end = self.index_of_first_separator(path, server_end + 1)
            # An empty server or share segment falls through to the plain root
            if server_end > 2:
                if share_end < 0:
                    return None
                if share_end > server_end + 1:
                    prefix = self.to_native_separators(path[:share_end]) + self.separator
                    return prefix, share_end + 1, True
        if has_drive_letter(path):
            if len(path) > 2 and self.is_separator(path[2]):
                return path[:2] + self.separator, 3, True
            return path[:2], 2, False
        return super().root_prefix(path)

    def file_name_floor(self, path: str) -> int:
        return 2 if has_drive_letter(path) else 0

    # ------------------------------
    # OS Queries
    # ------------------------------

    def home_directory(self) -> str:
        failure = "unable to determine path to the user home directory"
        kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)
        advapi32 = ctypes.WinDLL("advapi32", use_last_error=True)
        userenv = ctypes.WinDLL("userenv", use_last_error=True)
        kernel32.GetCurrentProcess.restype = ctypes.c_void_p

        token = ctypes.c_void_p()
        if not advapi32.OpenProcessToken(
            ctypes.c_void_p(kernel32.GetCurrentProcess()), TOKEN_QUERY, ctypes.byref(token)
        ):
            raise fail(failure, None, _last_error())
        try:
            size = ctypes.c_ulong(config.MAX_PATH)
            buf = ctypes.create_unicode_buffer(size.value)
            if not userenv.GetUserProfileDirectoryW(token, buf, ctypes.byref(size)):
                raise fail(failure, None, _last_error())
            return buf.value
        finally:
            kernel32.CloseHandle(token)

    def make_absolute(self, path: str, base: str) -> str:
        from ..algebra import path_concat, path_simplify

        if has_drive_letter(path) or (path and self.is_separator(path[0])):
            return self.resolve_absolute(path)
        return path_simplify(path_concat(base, path, self), self)

    def resolve_absolute(self, path: str) -> str:
        try:
            return ntpath.abspath(path)
        except (OSError, ValueError) as exc:
            raise fail(f"unable to determine absolute path for file '{path}'", path, exc) from exc

    def make_canonical(self, path: str) -> str:
        # No symlink resolution on Windows
        return self.resolve_absolute(path)

    def creation_root_offset(self, directory: str) -> int:
        if has_drive_letter(directory):
            return 3
        if self.is_unc(directory):
            server_end = self.index_of_first_separator(directory, 2)
            if server_end >= 0:
                return server_end + 1
        raise fail(f"invalid path '{directory}'", directory)

    def is_file(self, path: str) -> bool:
        try:
            st = os.stat(path)
        except FileNotFoundError:
            return False
        except OSError as exc:
            if getattr(exc, "winerror", None) in config.WINDOWS_NOT_FOUND_ERRORS:
                return False
            raise fail(f"unable to get attributes for file '{path}'", path, exc) from exc
        except ValueError as exc:
            raise fail(f"unable to get attributes for file '{path}'", path, exc) from exc
        attributes = getattr(st, "st_file_attributes", None)
        if attributes is None:
            # No attribute bits off Windows; read the mode instead
            return not (stat.S_ISDIR(st.st_mode) or stat.S_ISCHR(st.st_mode) or stat.S_ISBLK(st.st_mode))
        return (attributes & (stat.FILE_ATTRIBUTE_DEVICE | stat.FILE_ATTRIBUTE_DIRECTORY)) == 0

    def create_symlink(self, target: str, link: str) -> str:
        try:
            os.symlink(target, link)
        except (OSError, ValueError) as exc:
            raise fail(f"unable to create symlink from '{target}' to '{link}'", link, exc) from exc
        return link

    def executable_file(self) -> str:
        kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)
        buf = ctypes.create_unicode_buffer(config.MAX_PATH)
        if not kernel32.GetModuleFileNameW(None, buf, len(buf)):
            raise fail("unable to determine file name of executable file", None, _last_error())
        return buf.value
