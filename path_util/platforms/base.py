"""
Platform strategy interface.

A platform bundles the separator rules, the absolute-path test and the OS
queries whose behavior differs between POSIX and Windows. Implementations
hold no state; one instance per variant is enough.
"""

import os
from abc import ABC, abstractmethod
from typing import FrozenSet, Optional, Tuple

from ..errors import fail


def is_drive_letter(ch: str) -> bool:
    """
    Check if a character is an ASCII drive letter.

    Parameters:
    - ch (str): A single character.

    Returns:
    - bool: True for 'a'-'z' and 'A'-'Z'.
    """
    return len(ch) == 1 and ("a" <= ch <= "z" or "A" <= ch <= "Z")


def has_drive_letter(path: str) -> bool:
    """
    Check if a path starts with a drive letter followed by a colon ('C:').

    Parameters:
    - path (str): The path to check.

    Returns:
    - bool: True if the path carries a drive prefix.
    """
    return len(path) >= 2 and path[1] == ":" and is_drive_letter(path[0])


class Platform(ABC):
    """Capability set shared by every platform variant."""

    name = ""
    separator = "/"
    separators: FrozenSet[str] = frozenset("/")

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    # ------------------------------
    # Separator Rules
    # ------------------------------

    def is_separator(self, ch: str) -> bool:
        return ch in self.separators

    def to_native_separators(self, path: str) -> str:
        for sep in self.separators:
            if sep != self.separator:
                path = path.replace(sep, self.separator)
        return path

    def to_unix_separators(self, path: str) -> str:
        for sep in self.separators:
            if sep != "/":
                path = path.replace(sep, "/")
        return path

    def index_of_first_separator(self, path: str, start: int = 0) -> int:
        found = [pos for pos in (path.find(sep, start) for sep in self.separators) if pos >= 0]
        return min(found) if found else -1

    def index_of_last_separator(self, path: str) -> int:
        return max(path.rfind(sep) for sep in self.separators)

    # ------------------------------
    # Path Classification
    # ------------------------------

    @abstractmethod
    def is_absolute(self, path: str) -> bool:
        ...

    def root_prefix(self, path: str) -> Optional[Tuple[str, int, bool]]:
        """
        Split off the part of `path` that simplification must not touch.

        Returns:
        - tuple or None: ``(prefix, offset, rooted)`` where `prefix` is emitted
          verbatim, `offset` is where components start and `rooted` tells if a
          leading '..' has no parent to climb to. None means the path has no
          components to simplify and is returned with native separators.
        """
        if path and self.is_separator(path[0]):
            return self.separator, 1, True
        return "", 0, False

    def file_name_floor(self, path: str) -> int:
        """Index the file name starts at when the path holds no separator."""
        return 0

    # ------------------------------
    # OS Queries
    # ------------------------------

    def current_directory(self) -> str:
        try:
            return os.getcwd()
        except OSError as exc:
            raise fail("unable to determine current directory", None, exc) from exc

    @abstractmethod
    def home_directory(self) -> str:
        ...

    @abstractmethod
    def make_absolute(self, path: str, base: str) -> str:
        ...

    @abstractmethod
    def resolve_absolute(self, path: str) -> str:
        ...

    @abstractmethod
    def make_canonical(self, path: str) -> str:
        ...

    @abstractmethod
    def creation_root_offset(self, directory: str) -> int:
        ...

    @abstractmethod
    def is_file(self, path: str) -> bool:
        ...

    @abstractmethod
    def create_symlink(self, target: str, link: str) -> str:
        ...

    @abstractmethod
    def executable_file(self) -> str:
        ...
