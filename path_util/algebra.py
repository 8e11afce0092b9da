"""
Pure path string functions.

Nothing here touches the filesystem and nothing here raises. Every function
takes an optional `platform` strategy; by default the active one is used.
"""

import os
from typing import List, Optional

from .platforms import Platform, has_drive_letter, is_drive_letter, resolve_platform
from .types import PathLike


# ------------------------------
# Separator Functions
# ------------------------------

def path_to_native_separators(path: PathLike, platform: Optional[Platform] = None) -> str:
    """
    Rewrite every separator to the platform's preferred one.

    Parameters:
    - path (str or PathLike): The path.
    - platform (Platform, optional): Strategy to use instead of the active one.

    Returns:
    - str: The path with native separators. Unchanged on POSIX.
    """
    return resolve_platform(platform).to_native_separators(os.fspath(path))


def path_to_unix_separators(path: PathLike, platform: Optional[Platform] = None) -> str:
    """
    Rewrite every separator to '/'.

    Parameters:
    - path (str or PathLike): The path.
    - platform (Platform, optional): Strategy to use instead of the active one.

    Returns:
    - str: The path with forward slashes. Unchanged on POSIX.
    """
    return resolve_platform(platform).to_unix_separators(os.fspath(path))


def path_separator(platform: Optional[Platform] = None) -> str:
    """Return the platform's canonical separator ('/' or '\\')."""
    return resolve_platform(platform).separator


def path_is_separator(ch: str, platform: Optional[Platform] = None) -> bool:
    """Check if `ch` separates path components ('/' always, '\\' on Windows)."""
    return resolve_platform(platform).is_separator(ch)


def path_index_of_first_separator(path: PathLike, start: int = 0, platform: Optional[Platform] = None) -> int:
    """
    Find the first separator at or after `start`.

    Parameters:
    - path (str or PathLike): The path to scan.
    - start (int): Index to start scanning at.
    - platform (Platform, optional): Strategy to use instead of the active one.

    Returns:
    - int: Index of the separator, or -1 if there is none.
    """
    return resolve_platform(platform).index_of_first_separator(os.fspath(path), start)


# ------------------------------
# Drive Letter Functions
# ------------------------------

def path_is_drive_letter(ch: str) -> bool:
    """Check if `ch` can name a Windows drive."""
    return is_drive_letter(ch)


def path_has_drive_letter(path: PathLike) -> bool:
    """Check if a path starts with a Windows drive prefix such as 'C:'."""
    return has_drive_letter(os.fspath(path))


# ------------------------------
# Absolute Path Functions
# ------------------------------

def path_is_absolute(path: PathLike, platform: Optional[Platform] = None) -> bool:
    """
    Check if a path is absolute, looking at its prefix only.

    On POSIX a leading separator, a lone '~' or '~' followed by a separator
    count as absolute. On Windows only a drive letter followed by a separator
    does; UNC paths such as '\\\\server\\share' are not absolute.

    Parameters:
    - path (str or PathLike): The path to check.
    - platform (Platform, optional): Strategy to use instead of the active one.

    Returns:
    - bool: True if absolute, False otherwise.
    """
    return resolve_platform(platform).is_absolute(os.fspath(path))


# ------------------------------
# Join and Simplify Functions
# ------------------------------

def path_concat(path1: PathLike, path2: PathLike, platform: Optional[Platform] = None) -> str:
    """
    Join two paths with exactly one separator.

    Parameters:
    - path1 (str or PathLike): Leading part.
    - path2 (str or PathLike): Trailing part.
    - platform (Platform, optional): Strategy to use instead of the active one.

    Returns:
    - str: The joined path. If either part is empty, the other one.
    """
    platform = resolve_platform(platform)
    path1 = os.fspath(path1)
    path2 = os.fspath(path2)
    if not path1:
        return path2
    if not path2:
        return path1
    if platform.is_separator(path1[-1]):
        return path1 + path2
    return path1 + platform.separator + path2


def path_simplify(path: PathLike, platform: Optional[Platform] = None) -> str:
    """
    Remove empty, '.' and resolvable '..' components from a path.

    The root, a '~/' prefix, a drive prefix or a UNC '\\\\server\\share\\'
    prefix is kept as is. A '..' climbs over the previous component; with no
    component to climb over it is kept, except right after a root where there
    is no parent and it is dropped. Components are joined with the native
    separator.

    Parameters:
    - path (str or PathLike): The path to simplify.
    - platform (Platform, optional): Strategy to use instead of the active one.

    Returns:
    - str: The simplified path. Simplifying it again returns it unchanged.

    Examples:
    - 'a/./b/../c' -> 'a/c'
    - '../a' -> '../a'
    - '/../a' -> '/a'
    """
    platform = resolve_platform(platform)
    path = os.fspath(path)

    root = platform.root_prefix(path)
    if root is None:
        return platform.to_native_separators(path)
    prefix, offset, rooted = root

    parts: List[str] = []
    while offset <= len(path):
        end = platform.index_of_first_separator(path, offset)
        if end < 0:
            end = len(path)
        part = path[offset:end]
        offset = end + 1

        if not part or part == ".":
            continue
        if part == "..":
            if parts and parts[-1] != "..":
                parts.pop()
                continue
            if rooted and not parts:
                continue
        parts.append(part)

    return prefix + platform.separator.join(parts)


# ------------------------------
# Component Functions
# ------------------------------

def path_index_of_file_name(path: PathLike, platform: Optional[Platform] = None) -> int:
    """
    Find where the file name component starts.

    Parameters:
    - path (str or PathLike): The path.
    - platform (Platform, optional): Strategy to use instead of the active one.

    Returns:
    - int: Index just past the last separator; 2 for a Windows 'C:name'
      path; 0 when the whole path is a file name.
    """
    platform = resolve_platform(platform)
    path = os.fspath(path)
    pos = platform.index_of_last_separator(path)
    if pos >= 0:
        return pos + 1
    return platform.file_name_floor(path)


def path_dir(path: PathLike, platform: Optional[Platform] = None) -> str:
    """
    Get the directory component of a path.

    Parameters:
    - path (str or PathLike): The path.
    - platform (Platform, optional): Strategy to use instead of the active one.

    Returns:
    - str: Everything before the file name, without the trailing separator.
      The root separator itself is kept ('/a' -> '/').
    """
    platform = resolve_platform(platform)
    path = os.fspath(path)
    pos = path_index_of_file_name(path, platform)
    if pos == 0:
        return ""
    if not platform.is_separator(path[pos - 1]):
        # 'C:name'
        return path[:pos]
    if pos == 1:
        return path[:1]
    return path[:pos - 1]


def path_file(path: PathLike, platform: Optional[Platform] = None) -> str:
    """
    Get the file name component of a path.

    Parameters:
    - path (str or PathLike): The path.
    - platform (Platform, optional): Strategy to use instead of the active one.

    Returns:
    - str: The file name. Empty if the path ends with a separator.
    """
    path = os.fspath(path)
    return path[path_index_of_file_name(path, platform):]


# ------------------------------
# Extension Functions
# ------------------------------

def path_ext(path: PathLike, platform: Optional[Platform] = None) -> str:
    """
    Get the short extension of a path: from the last dot of the file name.

    Parameters:
    - path (str or PathLike): The path.
    - platform (Platform, optional): Strategy to use instead of the active one.

    Returns:
    - str: The extension including the dot ('a.tar.gz' -> '.gz'), or '' when
      the file name has no dot.
    """
    path = os.fspath(path)
    pos = path.rfind(".")
    if pos < 0 or pos < path_index_of_file_name(path, platform):
        return ""
    return path[pos:]


def path_ext_full(path: PathLike, platform: Optional[Platform] = None) -> str:
    """
    Get the full extension of a path: from the first dot of the file name.

    Parameters:
    - path (str or PathLike): The path.
    - platform (Platform, optional): Strategy to use instead of the active one.

    Returns:
    - str: The extension including the dot ('a.tar.gz' -> '.tar.gz'), or ''.
    """
    path = os.fspath(path)
    pos = path.find(".", path_index_of_file_name(path, platform))
    return path[pos:] if pos >= 0 else ""


def path_ext_replace(path: PathLike, ext: str, platform: Optional[Platform] = None) -> str:
    """
    Replace the full extension of a path.

    Parameters:
    - path (str or PathLike): The path.
    - ext (str): The new extension, including its dot.
    - platform (Platform, optional): Strategy to use instead of the active one.

    Returns:
    - str: The path with everything from the first dot of the file name
      replaced by `ext`, or with `ext` appended when there is no dot.
    """
    path = os.fspath(path)
    pos = path.find(".", path_index_of_file_name(path, platform))
    return path + ext if pos < 0 else path[:pos] + ext
