"""
Platform strategies and selection of the active one.
"""

import logging
import os
from typing import Dict, Optional

from .. import config
from .base import Platform, has_drive_letter, is_drive_letter
from .posix import PosixPlatform
from .windows import WindowsPlatform

logger = logging.getLogger(__name__)

POSIX = PosixPlatform()
WINDOWS = WindowsPlatform()

PLATFORMS: Dict[str, Platform] = {
    POSIX.name: POSIX,
    WINDOWS.name: WINDOWS,
}


def get_platform() -> Platform:
    """
    Return the platform strategy for the running process.

    The environment variable named by `config.PLATFORM_ENV_VAR` overrides the
    choice made from `os.name`.

    Returns:
    - Platform: The active strategy.

    Raises:
    - ValueError: If the override names an unknown platform.
    """
    override = os.environ.get(config.PLATFORM_ENV_VAR)
    if override:
        try:
            platform = PLATFORMS[override.strip().lower()]
        except KeyError:
            raise ValueError(
                f"Invalid {config.PLATFORM_ENV_VAR}: {override!r} (expected one of {sorted(PLATFORMS)})"
            )
        logger.debug("Platform overridden to %s by %s", platform.name, config.PLATFORM_ENV_VAR)
        return platform
    return WINDOWS if os.name == 'nt' else POSIX


def resolve_platform(platform: Optional[Platform] = None) -> Platform:
    """Return `platform` itself, or the active strategy when it is None."""
    return platform if platform is not None else get_platform()


__all__ = [
    "Platform",
    "PosixPlatform",
    "WindowsPlatform",
    "POSIX",
    "WINDOWS",
    "PLATFORMS",
    "get_platform",
    "resolve_platform",
    "is_drive_letter",
    "has_drive_letter",
]
