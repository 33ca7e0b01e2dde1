"""Environment variable overlays.

An overlay is an ordered, case-insensitive mapping of environment variable
names to values. Besides the usual mapping operations it knows how to apply
*overrides*, which is how an environment for a child process gets built up
from an inherited base:

- ``override("JAVA_HOME", "/opt/jdk")`` replaces the value outright.
- ``override("JAVA_HOME", "")`` (or ``None``) removes the variable.
- ``override("PATH+MAVEN", "/opt/maven/bin")`` prepends to ``PATH`` using
  the platform path separator, so several tools can each contribute a
  ``PATH+<something>`` entry without knowing about one another.

Example:
    from envoverlay import EnvironmentOverlay, get_host_environment

    env = get_host_environment().copy()
    env.override_all({"PATH+JDK": "/opt/jdk/bin", "LANG": "C.UTF-8"})
"""

from __future__ import annotations

import os
import string
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any, Dict, Optional, Tuple, Union

from envoverlay.logger import get_logger

logger = get_logger("envoverlay")

EntrySource = Union[Mapping[str, str], Iterable[Tuple[str, str]]]

_ASCII_FOLD = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

MERGE_MARKER = "+"


def fold_key(key: str) -> str:
    """Fold a variable name for comparison.

    Only ASCII letters are folded, so the result never depends on locale.
    """
    return key.translate(_ASCII_FOLD)


def compare_keys(lhs: str, rhs: str) -> int:
    """Compare two variable names case-insensitively, returning -1, 0 or 1."""
    left, right = fold_key(lhs), fold_key(rhs)
    return (left > right) - (left < right)


class EnvironmentOverlay(MutableMapping):
    """Ordered, case-insensitive mapping of environment variables.

    Keys compare case-insensitively for lookup, uniqueness and ordering:
    ``env["path"]`` finds an entry stored as ``"PATH"``. When a key is
    assigned again under different casing the value is replaced but the
    casing of the first insertion is kept. Iteration yields keys sorted by
    their case-folded form, not in insertion order.

    Overlays do no locking. Mutating one instance from several threads
    requires external synchronisation.
    """

    def __init__(self, source: Optional[EntrySource] = None) -> None:
        # folded key -> (key as first inserted, value)
        self._entries: Dict[str, Tuple[str, str]] = {}
        if source is not None:
            self.update(source)

    def _put(self, key: str, value: str) -> None:
        if not isinstance(key, str):
            raise TypeError(f"environment variable names must be str, not {type(key).__name__}")
        if not isinstance(value, str):
            raise TypeError(f"value of {key} must be str, not {type(value).__name__}")
        folded = fold_key(key)
        existing = self._entries.get(folded)
        self._entries[folded] = (existing[0] if existing else key, value)

    def __getitem__(self, key: str) -> str:
        if not isinstance(key, str):
            raise KeyError(key)
        try:
            return self._entries[fold_key(key)][1]
        except KeyError:
            raise KeyError(key) from None

    def __setitem__(self, key: str, value: str) -> None:
        self._put(key, value)

    def __delitem__(self, key: str) -> None:
        if not isinstance(key, str):
            raise KeyError(key)
        try:
            del self._entries[fold_key(key)]
        except KeyError:
            raise KeyError(key) from None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and fold_key(key) in self._entries

    def __iter__(self) -> Iterator[str]:
        for folded in sorted(self._entries):
            yield self._entries[folded][0]

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, EnvironmentOverlay):
            return {k: v for k, (_, v) in self._entries.items()} == {
                k: v for k, (_, v) in other._entries.items()
            }
        if isinstance(other, Mapping):
            try:
                return self == EnvironmentOverlay(other)
            except TypeError:
                return False
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r})"

    def copy(self) -> "EnvironmentOverlay":
        """Return an independent, mutable copy."""
        return EnvironmentOverlay(self.items())

    def override(self, key: str, value: Optional[str]) -> None:
        """Apply a single override.

        An empty or None value removes ``key``. A key of the form
        ``NAME+SUFFIX`` prepends ``value`` to ``NAME`` using ``os.pathsep``;
        the suffixed key itself is never stored. A leading ``+`` does not
        name a variable, so such keys are stored verbatim like any other.

        Merges are not idempotent: applying the same ``NAME+SUFFIX``
        override twice prepends the value twice.
        """
        if value is None or value == "":
            if self.pop(key, None) is not None:
                logger.debug("Override removed variable", key=key, action="remove")
            return

        idx = key.find(MERGE_MARKER)
        if idx > 0:
            real_key = key[:idx]
            current = self.get(real_key)
            if current is None:
                self[real_key] = value
                logger.debug("Override created list variable", key=real_key, action="merge-new")
            else:
                self[real_key] = value + os.pathsep + current
                logger.debug("Override prepended to list variable", key=real_key, action="prepend")
            return

        self[key] = value
        logger.debug("Override set variable", key=key, action="set")

    def override_all(self, entries: EntrySource) -> None:
        """Apply ``override`` to every pair of ``entries`` in its iteration order.

        Later ``NAME+SUFFIX`` entries for the same NAME end up closer to the
        front of the merged value.
        """
        items = entries.items() if isinstance(entries, Mapping) else entries
        for key, value in items:
            self.override(key, value)
