"""Shared types: path-like alias and directory listing entries."""

import os
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Union

# Type alias for path-like objects
PathLike = Union[str, "os.PathLike[str]"]


class DirEntryType(IntEnum):
    """Kind of a directory entry as reported by the OS."""

    UNKNOWN = 0
    REGULAR_FILE = 1
    DIRECTORY = 2
    FIFO = 3
    SOCKET = 4
    CHAR_DEVICE = 5
    BLOCK_DEVICE = 6
    LINK = 7


@dataclass(frozen=True)
class DirEntry:
    """One item of a directory listing."""

    type: DirEntryType
    name: str


DirEntryList = List[DirEntry]
