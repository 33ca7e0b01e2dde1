"""The environment this process inherited.

The host environment is captured once, on first use, and published as a
read-only ``HostEnvironmentSnapshot``. Overlays that want "the real starting
environment" copy it instead of re-reading ``os.environ``:

    env = get_host_environment().copy()
    env.override("PATH+TOOLS", "/opt/tools/bin")
"""

from __future__ import annotations

import os
import threading
from collections.abc import Mapping
from typing import Optional, Protocol, runtime_checkable

from envoverlay.exceptions import ReadOnlyEnvironmentError
from envoverlay.logger import get_logger
from envoverlay.overlay import EntrySource, EnvironmentOverlay

logger = get_logger("envoverlay")


@runtime_checkable
class HostEnvironmentSource(Protocol):
    """Supplies the raw environment pairs of the current process."""

    def current(self) -> Mapping[str, str]:
        """Return the environment variables as of this call."""
        ...


class OsEnvironmentSource:
    """Reads ``os.environ``."""

    def current(self) -> Mapping[str, str]:
        return dict(os.environ)


class HostEnvironmentSnapshot(EnvironmentOverlay):
    """A read-only overlay. Every mutator raises ReadOnlyEnvironmentError."""

    def __init__(self, source: Optional[EntrySource] = None) -> None:
        super().__init__()
        if source is not None:
            items = source.items() if isinstance(source, Mapping) else source
            for key, value in items:
                self._put(key, value)

    def __setitem__(self, key: str, value: str) -> None:
        raise ReadOnlyEnvironmentError("set")

    def __delitem__(self, key: str) -> None:
        raise ReadOnlyEnvironmentError("delete")

    def clear(self) -> None:
        raise ReadOnlyEnvironmentError("clear")

    def override(self, key: str, value: Optional[str]) -> None:
        raise ReadOnlyEnvironmentError("override")

    def override_all(self, entries: EntrySource) -> None:
        raise ReadOnlyEnvironmentError("override_all")


_snapshot: Optional[HostEnvironmentSnapshot] = None
_snapshot_lock = threading.Lock()


def get_host_environment(source: Optional[HostEnvironmentSource] = None) -> HostEnvironmentSnapshot:
    """Return the process-wide host environment snapshot.

    The first call captures it from ``source`` (``os.environ`` by default);
    later calls return the same object and ignore ``source``.
    """
    global _snapshot
    snapshot = _snapshot
    if snapshot is not None:
        return snapshot

    with _snapshot_lock:
        if _snapshot is None:
            source = source or OsEnvironmentSource()
            _snapshot = HostEnvironmentSnapshot(source.current())
            logger.debug("Captured host environment", entries=len(_snapshot))
        return _snapshot


def reset_host_environment() -> None:
    """Forget the captured snapshot so the next access captures it again (testing only)."""
    global _snapshot
    with _snapshot_lock:
        _snapshot = None
