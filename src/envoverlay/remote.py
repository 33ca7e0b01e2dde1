"""Fetching the environment of another process or host.

A peer is reached through a ``RemoteExecutor``: anything that can run a
zero-argument callable on the peer and hand back its result. How the call
travels (in-process, HTTP, ...) is the executor's business.

Example:
    from envoverlay.remote import LocalExecutor, fetch_remote_environment

    env = fetch_remote_environment(LocalExecutor())
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, TypeVar, Union, runtime_checkable

from envoverlay.host import get_host_environment
from envoverlay.logger import get_logger
from envoverlay.overlay import EnvironmentOverlay

logger = get_logger("envoverlay")

T = TypeVar("T")

# Passing NO_PEER means there is nothing to ask.
NO_PEER = None
NOT_APPLICABLE = "N/A"

_NOT_APPLICABLE_RESULT: Mapping[str, str] = MappingProxyType({NOT_APPLICABLE: NOT_APPLICABLE})


@runtime_checkable
class RemoteExecutor(Protocol):
    """Runs callables on a remote peer.

    ``call`` blocks until the peer answers. Implementations raise
    ChannelError when the peer cannot be reached and ChannelInterruptedError
    when the wait is cancelled; both are left for the caller to handle.
    """

    name: str

    def call(self, fn: Callable[[], T]) -> T:
        """Run ``fn`` on the peer and return its result."""
        ...


class LocalExecutor:
    """Executor whose "peer" is the current process."""

    def __init__(self, name: str = "local") -> None:
        self.name = name

    def call(self, fn: Callable[[], T]) -> T:
        return fn()

    def __repr__(self) -> str:
        return f"LocalExecutor(name={self.name!r})"


class GetEnvironment:
    """Returns the executing process's host environment as a plain dict.

    Executors that cannot ship code look calls up by ``name``.
    """

    name = "host-environment"

    def __call__(self) -> Dict[str, str]:
        return dict(get_host_environment().items())

    def __repr__(self) -> str:
        return "GetEnvironment()"


def fetch_remote_environment(
    peer: Optional[RemoteExecutor],
) -> Union[EnvironmentOverlay, Mapping[str, str]]:
    """Obtain the environment variables of a remote peer.

    Args:
        peer: Executor for the peer, or NO_PEER

    Returns:
        An EnvironmentOverlay holding the peer's environment. For NO_PEER,
        the read-only mapping ``{"N/A": "N/A"}``, which is informational and
        not real environment data.

    Raises:
        Whatever the executor raises; nothing is retried here.
    """
    if peer is NO_PEER:
        return _NOT_APPLICABLE_RESULT

    peer_name = getattr(peer, "name", repr(peer))
    logger.info("Fetching remote environment", peer=peer_name)
    raw: Any = peer.call(GetEnvironment())
    env = EnvironmentOverlay(raw)
    logger.info("Fetched remote environment", peer=peer_name, entries=len(env))
    return env
