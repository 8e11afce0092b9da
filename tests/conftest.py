"""
Shared fixtures for the path_util test suite.
"""

import os

import pytest

from path_util import config as path_config
from path_util.platforms import POSIX, WINDOWS


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "posix_only: mark test as requiring a POSIX host")


def pytest_collection_modifyitems(session, config, items):
    """Skip POSIX-only tests on Windows hosts."""
    _ = session
    _ = config

    if os.name == "nt":
        skip_posix = pytest.mark.skip(reason="POSIX-only test")
        for item in items:
            if "posix_only" in item.keywords:
                item.add_marker(skip_posix)


@pytest.fixture(autouse=True)
def no_platform_override(monkeypatch):
    """Keep a platform override from the outer environment out of the tests."""
    monkeypatch.delenv(path_config.PLATFORM_ENV_VAR, raising=False)


@pytest.fixture
def posix():
    return POSIX


@pytest.fixture
def windows():
    return WINDOWS
