"""Handles to remote peers and their execution acceptors."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from pathfinder.core.exceptions import PeerUnavailableError
from pathfinder.core.models import Envelope, RemoteCall

if TYPE_CHECKING:
    from pathfinder.config import PathfinderSettings
    from pathfinder.dispatch.units import UnitCatalog

logger = logging.getLogger(__name__)

EXECUTE_PATH = "/api/v1/execute"


class Peer(ABC):
    """A named destination that accepts remote calls."""

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    def submit(self, call: RemoteCall) -> Future[Envelope]:
        """Submit a call for asynchronous execution on this peer."""
        ...

    def close(self) -> None:
        """Release any resources held by this peer."""

    def __enter__(self) -> Peer:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class LocalPeer(Peer):
    """
    In-process acceptor backed by a thread pool.

    Submitted calls run concurrently on worker threads; exceptions raised
    by a unit are returned as error envelopes.
    """

    def __init__(self, name: str, catalog: UnitCatalog, max_workers: int = 4) -> None:
        super().__init__(name)
        self._catalog = catalog
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix=f"pathfinder-{name}",
        )

    def submit(self, call: RemoteCall) -> Future[Envelope]:
        return self._executor.submit(execute_call, self._catalog, call)

    def close(self) -> None:
        self._executor.shutdown(wait=True)


class HttpPeer(Peer):
    """
    Peer reached over HTTP through its execution acceptor service.

    The request runs on a background thread so ``submit`` returns at once;
    callers block on the returned future.
    """

    def __init__(
        self,
        name: str,
        base_url: str,
        *,
        timeout: float | None = None,
        client: httpx.Client | None = None,
        max_workers: int = 4,
    ) -> None:
        super().__init__(name)
        self.base_url = base_url
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            headers=self._get_default_headers(),
        )
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix=f"pathfinder-{name}",
        )

    def _get_default_headers(self) -> dict[str, str]:
        return {
            "User-Agent": "pathfinder/0.1",
            "Accept": "application/json",
        }

    def submit(self, call: RemoteCall) -> Future[Envelope]:
        return self._executor.submit(self._post, call)

    def _post(self, call: RemoteCall) -> Envelope:
        logger.info(f"Submitting {call.unit}.{call.entry_point} to peer {self.name}")
        try:
            response = self._client.post(
                EXECUTE_PATH,
                json=call.model_dump(mode="json", by_alias=True),
            )
        except httpx.HTTPError as e:
            raise PeerUnavailableError(
                message=f"HTTP error: {e}",
                peer=self.name,
            ) from e

        if not response.is_success:
            raise PeerUnavailableError(
                message=f"Acceptor returned HTTP {response.status_code}",
                peer=self.name,
                status_code=response.status_code,
                details={"body": response.text},
            )

        try:
            return Envelope.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise PeerUnavailableError(
                message=f"Malformed envelope from acceptor: {e}",
                peer=self.name,
                status_code=response.status_code,
            ) from e

    def close(self) -> None:
        self._executor.shutdown(wait=True)
        if self._owns_client:
            self._client.close()


def execute_call(catalog: UnitCatalog, call: RemoteCall) -> Envelope:
    """Run a submitted call against a unit catalog, capturing failures."""
    try:
        fn = catalog.get(call.unit, call.entry_point)
        return Envelope.success(fn(*call.args))
    except Exception as e:
        logger.exception(f"Remote call {call.unit}.{call.entry_point} failed: {e}")
        return Envelope.failure(e)


class PeerDirectory(Mapping[str, Peer]):
    """Peer id -> ``Peer`` handle, passed to the dispatcher explicitly."""

    def __init__(self, peers: Mapping[str, Peer] | None = None) -> None:
        self._peers: dict[str, Peer] = dict(peers or {})

    def register(self, peer: Peer) -> Peer:
        self._peers[peer.name] = peer
        return peer

    def __getitem__(self, name: str) -> Peer:
        return self._peers[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._peers)

    def __len__(self) -> int:
        return len(self._peers)

    @classmethod
    def from_settings(cls, settings: PathfinderSettings) -> PeerDirectory:
        """Create HTTP peers for every configured acceptor URL."""
        directory = cls()
        for name, url in settings.peers.items():
            directory.register(HttpPeer(name, url, timeout=settings.remote_timeout))
        return directory

    def close_all(self) -> None:
        for peer in self._peers.values():
            peer.close()

    def __enter__(self) -> PeerDirectory:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close_all()
