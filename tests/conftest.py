"""
Pytest configuration and shared fixtures
"""

import os
import random

import pytest

# Expose additional fixtures from support library
pytest_plugins = ["tests.support.fixtures"]

from gobin_info.common.utils import Logger
from gobin_info.package_metadata import vanity


@pytest.fixture
def logger():
    """Provide a verbose logger for tests"""
    return Logger(verbose=True)


@pytest.fixture(autouse=True)
def no_request_hook_leak():
    """Make sure no test leaves a request hook installed"""
    yield
    vanity.set_request_fn(None)


def pytest_configure(config):
    os.environ.setdefault("TZ", "UTC")
    random.seed(1337)
