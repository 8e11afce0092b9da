"""
path_util: cross-platform path manipulation and filesystem metadata.

Pure string functions live in `path_util.algebra`, OS-touching ones in
`path_util.filesystem`; both are re-exported here.
"""

import logging

from .algebra import (
    path_concat,
    path_dir,
    path_ext,
    path_ext_full,
    path_ext_replace,
    path_file,
    path_has_drive_letter,
    path_index_of_file_name,
    path_index_of_first_separator,
    path_is_absolute,
    path_is_drive_letter,
    path_is_separator,
    path_separator,
    path_simplify,
    path_to_native_separators,
    path_to_unix_separators,
)
from .errors import PathError
from .filesystem import (
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
)
from .platforms import Platform, PosixPlatform, WindowsPlatform, get_platform
from .types import DirEntry, DirEntryList, DirEntryType, PathLike

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Path algebra
    "path_to_native_separators",
    "path_to_unix_separators",
    "path_separator",
    "path_is_separator",
    "path_is_drive_letter",
    "path_has_drive_letter",
    "path_is_absolute",
    "path_concat",
    "path_simplify",
    "path_index_of_first_separator",
    "path_index_of_file_name",
    "path_dir",
    "path_file",
    "path_ext",
    "path_ext_full",
    "path_ext_replace",
    # Filesystem
    "path_cwd",
    "path_home",
    "path_abs",
    "path_real",
    "path_executable",
    "dir_create",
    "path_exists",
    "is_file",
    "file_mtime",
    "link_create",
    "dir_ls",
    "file_delete",
    # Types
    "DirEntry",
    "DirEntryList",
    "DirEntryType",
    "PathLike",
    "PathError",
    "Platform",
    "PosixPlatform",
    "WindowsPlatform",
    "get_platform",
]
