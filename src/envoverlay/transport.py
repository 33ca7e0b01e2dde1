"""HTTP executor for reaching a peer server.

Code cannot be shipped over HTTP, so a call is sent by name: the callable
given to ``HttpExecutor.call`` must carry a ``name`` attribute matching a
call registered on the peer (see ``envoverlay.web.create_peer_app``).

Wire format:
    POST {base_url}/calls/{name}      body: {}
    200  {"call": "<name>", "result": {"KEY": "VALUE", ...}}

Results must be objects of strings to strings; anything else is treated as
a broken channel.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Optional

import httpx

from envoverlay.exceptions import ChannelError, ChannelInterruptedError
from envoverlay.logger import get_logger

logger = get_logger("envoverlay")


class HttpExecutor:
    """RemoteExecutor that talks to a peer server over HTTP.

    ``cancel()`` may be called from another thread to abandon an in-flight
    call; the waiting caller then gets ChannelInterruptedError.

    Example:
        with HttpExecutor("http://build-01:8765", timeout=10) as peer:
            env = fetch_remote_environment(peer)
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        name: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialize the executor.

        Args:
            base_url: Peer server base URL
            timeout: Seconds to wait for the peer (None waits indefinitely)
            name: Peer name used in logs (default: base_url)
            client: Preconfigured httpx client (tests pass one with a MockTransport);
                its own timeout applies, so ``timeout`` must not be given with it

        Raises:
            ValueError: If both ``client`` and ``timeout`` are given
        """
        if client is not None and timeout is not None:
            raise ValueError("pass timeout or client, not both; configure the timeout on the client")
        self.base_url = base_url.rstrip("/")
        self.name = name or self.base_url
        self._client = client or httpx.Client(timeout=timeout)
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def call(self, fn: Callable[[], Any]) -> Any:
        call_name = getattr(fn, "name", None)
        if not call_name:
            raise TypeError(f"{fn!r} has no 'name'; HTTP peers only run registered calls")

        if self.cancelled:
            raise self._interrupted(call_name)

        url = f"{self.base_url}/calls/{call_name}"
        try:
            response = self._client.post(url, json={})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if self.cancelled:
                raise self._interrupted(call_name) from e
            logger.error(
                "Peer rejected call", peer=self.name, call=call_name, status=e.response.status_code
            )
            raise ChannelError(
                f"peer {self.name} answered {e.response.status_code}",
                details={"peer": self.name, "call": call_name, "status": e.response.status_code},
            ) from e
        except httpx.TransportError as e:
            if self.cancelled:
                raise self._interrupted(call_name) from e
            logger.error("Peer unreachable", peer=self.name, call=call_name, error=str(e))
            raise ChannelError(
                f"cannot reach peer {self.name}: {e}",
                details={"peer": self.name, "call": call_name},
            ) from e
        except RuntimeError as e:
            # httpx refuses to send on a client that cancel() has closed
            if self.cancelled:
                raise self._interrupted(call_name) from e
            raise

        # Closing the client does not wake a thread blocked on the socket,
        # so a reply can still arrive after cancel()
        if self.cancelled:
            raise self._interrupted(call_name)

        return self._decode(response, call_name)

    def _interrupted(self, call_name: str) -> ChannelInterruptedError:
        logger.warning("Remote call cancelled", peer=self.name, call=call_name)
        return ChannelInterruptedError(
            f"call to {self.name} cancelled", details={"peer": self.name, "call": call_name}
        )

    def _decode(self, response: httpx.Response, call_name: str) -> Dict[str, str]:
        try:
            payload = response.json()
        except ValueError as e:
            raise ChannelError(
                f"peer {self.name} sent a malformed reply", details={"call": call_name}
            ) from e

        result = payload.get("result") if isinstance(payload, dict) else None
        if not isinstance(result, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in result.items()
        ):
            raise ChannelError(
                f"peer {self.name} sent a reply without a string mapping",
                details={"call": call_name},
            )
        return result

    def cancel(self) -> None:
        """Abandon pending and future calls."""
        self._cancelled.set()
        self._client.close()

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpExecutor":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"HttpExecutor({self.base_url!r})"
