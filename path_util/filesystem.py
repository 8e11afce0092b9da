"""
Filesystem operations on single paths.

Each function performs one OS request (or a short fixed sequence of them)
and turns any failure into a PathError naming the operation and the path.
The exceptions are the existence probes: `path_exists` and `is_file` answer
False for paths that are not there.
"""

import logging
import os
import stat
from typing import Optional

from . import config
from .errors import fail
from .platforms import Platform, resolve_platform
from .types import DirEntry, DirEntryList, DirEntryType, PathLike

logger = logging.getLogger(__name__)

# lstat mode tests for entries that are neither links, directories nor files
_SPECIAL_TYPES = (
    (stat.S_ISFIFO, DirEntryType.FIFO),
    (stat.S_ISSOCK, DirEntryType.SOCKET),
    (stat.S_ISCHR, DirEntryType.CHAR_DEVICE),
    (stat.S_ISBLK, DirEntryType.BLOCK_DEVICE),
)


# ------------------------------
# Location Functions
# ------------------------------

def path_cwd(platform: Optional[Platform] = None) -> str:
    """
    Get the current working directory.

    Raises:
    - PathError: If the OS cannot report it.
    """
    return resolve_platform(platform).current_directory()


def path_home(platform: Optional[Platform] = None) -> str:
    """
    Get the home directory of the current user.

    On POSIX the HOME variable wins, then the password database entry of the
    current uid. On Windows the profile directory of the process token.

    Raises:
    - PathError: If no usable directory is found.
    """
    return resolve_platform(platform).home_directory()


def path_abs(path: PathLike, base: Optional[PathLike] = None, platform: Optional[Platform] = None) -> str:
    """
    Make a path absolute.

    Parameters:
    - path (str or PathLike): The path. On POSIX a leading '~' or '~/' is
      expanded to the home directory.
    - base (str or PathLike, optional): Directory relative paths are resolved
      against. Without it, Windows asks the OS to resolve the path and POSIX
      uses the current working directory.
    - platform (Platform, optional): Strategy to use instead of the active one.

    Returns:
    - str: The absolute, simplified path.

    Raises:
    - PathError: If the home directory, the current directory or the OS
      resolution is unavailable.
    """
    platform = resolve_platform(platform)
    path = os.fspath(path)
    if base is None:
        return platform.resolve_absolute(path)
    return platform.make_absolute(path, os.fspath(base))


def path_real(path: PathLike, platform: Optional[Platform] = None) -> str:
    """
    Get the canonical path.

    Parameters:
    - path (str or PathLike): The path. On POSIX it must exist.
    - platform (Platform, optional): Strategy to use instead of the active one.

    Returns:
    - str: On POSIX the path with every symlink resolved. On Windows the
      absolute path, without symlink resolution.

    Raises:
    - PathError: If the path cannot be resolved.
    """
    return resolve_platform(platform).make_canonical(os.fspath(path))


def path_executable(platform: Optional[Platform] = None) -> str:
    """
    Get the path of the running executable.

    Raises:
    - PathError: If the platform has no known method or the query fails.
    """
    return resolve_platform(platform).executable_file()


# ------------------------------
# Create Functions
# ------------------------------

def dir_create(path: PathLike, platform: Optional[Platform] = None) -> bool:
    """
    Create a directory and every missing parent.

    The absolute form of `path` is walked from its root one component at a
    time. A level that already exists is skipped, so concurrent callers
    creating the same tree do not fail each other.

    Parameters:
    - path (str or PathLike): The directory path.
    - platform (Platform, optional): Strategy to use instead of the active one.

    Returns:
    - bool: True if at least one directory was created, False if the whole
      chain already existed.

    Raises:
    - PathError: If the path has no usable root or a level cannot be created.
    """
    platform = resolve_platform(platform)
    directory = platform.resolve_absolute(os.fspath(path))
    offset = platform.creation_root_offset(directory)
    created = False

    while True:
        end = platform.index_of_first_separator(directory, offset)
        subdir = directory if end < 0 else directory[:end]
        offset = end + 1

        try:
            os.mkdir(subdir, config.DIRECTORY_MODE)
        except FileExistsError:
            pass
        except (OSError, ValueError) as exc:
            raise fail(f"unable to create directory '{subdir}'", subdir, exc) from exc
        else:
            logger.debug("Created directory %s", subdir)
            created = True

        if end < 0:
            return created


def link_create(target: PathLike, new_path: PathLike, platform: Optional[Platform] = None) -> str:
    """
    Create a symbolic link at `new_path` pointing to `target`.

    On POSIX an existing link at `new_path` that already points to exactly
    `target` is accepted.

    Parameters:
    - target (str or PathLike): What the link points to, stored verbatim.
    - new_path (str or PathLike): Where the link is created.
    - platform (Platform, optional): Strategy to use instead of the active one.

    Returns:
    - str: `new_path`.

    Raises:
    - PathError: If the link cannot be created.
    """
    target = os.fspath(target)
    new_path = os.fspath(new_path)
    link = resolve_platform(platform).create_symlink(target, new_path)
    logger.debug("Linked %s -> %s", link, target)
    return link


# ------------------------------
# Query Functions
# ------------------------------

def path_exists(path: PathLike) -> bool:
    """
    Check if anything exists at a path.

    Parameters:
    - path (str or PathLike): The path.

    Returns:
    - bool: True if the path can be stat'ed, False on any failure.
    """
    try:
        os.stat(path)
    except (OSError, ValueError):
        return False
    return True


def is_file(path: PathLike, platform: Optional[Platform] = None) -> bool:
    """
    Check if a path is a regular file.

    Parameters:
    - path (str or PathLike): The path.
    - platform (Platform, optional): Strategy to use instead of the active one.

    Returns:
    - bool: True for a regular file (following symlinks), False for anything
      else or when the path does not exist.

    Raises:
    - PathError: If the path exists but cannot be queried.
    """
    return resolve_platform(platform).is_file(os.fspath(path))


def file_mtime(path: PathLike) -> int:
    """
    Get the modification time of a path.

    Parameters:
    - path (str or PathLike): The path.

    Returns:
    - int: Seconds since the epoch.

    Raises:
    - PathError: If the path cannot be stat'ed, including when it is missing.
    """
    path = os.fspath(path)
    try:
        return int(os.stat(path).st_mtime)
    except (OSError, ValueError) as exc:
        raise fail(f"unable to stat file '{path}'", path, exc) from exc


# ------------------------------
# Directory Listing Functions
# ------------------------------

def _entry_type(entry: os.DirEntry) -> DirEntryType:
    if entry.is_symlink():
        return DirEntryType.LINK
    if entry.is_dir(follow_symlinks=False):
        return DirEntryType.DIRECTORY
    if entry.is_file(follow_symlinks=False):
        return DirEntryType.REGULAR_FILE
    try:
        mode = entry.stat(follow_symlinks=False).st_mode
    except OSError as exc:
        logger.debug("Cannot classify %s: %s", entry.path, exc)
        return DirEntryType.UNKNOWN
    for test, entry_type in _SPECIAL_TYPES:
        if test(mode):
            return entry_type
    return DirEntryType.UNKNOWN


def dir_ls(path: PathLike) -> DirEntryList:
    """
    List the entries of a directory.

    Parameters:
    - path (str or PathLike): The directory path.

    Returns:
    - List[DirEntry]: Entries in OS order, without '.' and '..'.

    Raises:
    - PathError: If the directory cannot be opened or read.
    """
    path = os.fspath(path)
    entries: DirEntryList = []
    try:
        with os.scandir(path) as iterator:
            for entry in iterator:
                if entry.name in (".", ".."):
                    continue
                entries.append(DirEntry(_entry_type(entry), entry.name))
    except (OSError, ValueError) as exc:
        raise fail(f"unable to enumerate contents of directory '{path}'", path, exc) from exc
    return entries


# ------------------------------
# Delete Functions
# ------------------------------

def file_delete(path: PathLike) -> None:
    """
    Delete a file or symbolic link.

    Parameters:
    - path (str or PathLike): The path.

    Raises:
    - PathError: If deletion fails for any reason, including a missing path.
    """
    path = os.fspath(path)
    try:
        os.unlink(path)
    except (OSError, ValueError) as exc:
        raise fail(f"unable to delete file '{path}'", path, exc) from exc
    logger.debug("Deleted file %s", path)
