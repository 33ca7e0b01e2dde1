"""Shared fixtures for envoverlay tests."""

import pytest

from envoverlay.config import reset_settings
from envoverlay.host import reset_host_environment


class DictSource:
    """HostEnvironmentSource backed by a fixed dict that counts reads."""

    def __init__(self, values):
        self.values = dict(values)
        self.reads = 0

    def current(self):
        self.reads += 1
        return dict(self.values)


@pytest.fixture(autouse=True)
def fresh_process_state():
    """Each test sees a host snapshot and settings captured for it alone."""
    reset_host_environment()
    reset_settings()
    yield
    reset_host_environment()
    reset_settings()


@pytest.fixture
def host_source():
    """A host environment to capture instead of os.environ."""
    return DictSource({"Path": "/usr/bin", "HOME": "/home/ci", "lang": "C.UTF-8"})
