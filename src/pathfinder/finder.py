"""Main entry point: follow a (domain, sub-address) to its runner."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from pathfinder.core.models import ResolutionRequest
from pathfinder.dispatch.dispatcher import Dispatcher
from pathfinder.dispatch.peers import LocalPeer, Peer, PeerDirectory
from pathfinder.dispatch.units import UnitCatalog
from pathfinder.routing.engine import ResolutionEngine
from pathfinder.routing.interceptors import Interceptor, compose
from pathfinder.routing.table import DirectoryProvider, Registry

if TYPE_CHECKING:
    from pathfinder.config import PathfinderSettings

logger = logging.getLogger(__name__)


class Finder:
    """
    Resolves symbolic (domain, sub-address) names to runners and runs them.

    Usage:
        greeter = Unit("greeter")

        @greeter.entry_point
        def say(msg):
            return msg + "!"

        finder = Finder(
            directories=[Directory(tables={"greet": {"hi": ("local", "greeter", "say", ["hi"])}})],
            units=UnitCatalog([greeter]),
        )
        finder.follow("greet", "hi")  # "hi!"

    Every ``follow`` call builds a fresh registry from the directories and a
    fresh interceptor chain, so directories may change between calls but
    never during one.
    """

    def __init__(
        self,
        directories: Iterable[DirectoryProvider] = (),
        interceptors: Iterable[Interceptor] = (),
        *,
        units: UnitCatalog | None = None,
        peers: Mapping[str, Peer] | None = None,
        fallback: Any = None,
    ) -> None:
        """
        Initialize the finder.

        Args:
            directories: Table-providing units, merged left to right
            interceptors: Interceptors, first one outermost
            units: Catalog of local units (built-in unit only if not provided)
            peers: Peer id -> peer handle for remote runners
            fallback: Runner descriptor overriding the built-in fallback handler
        """
        self._directories = tuple(directories)
        self._interceptors = tuple(interceptors)
        self._fallback = fallback
        self._dispatcher = Dispatcher(units=units, peers=peers)
        self._engine = ResolutionEngine(self._dispatcher)

    @classmethod
    def from_settings(
        cls,
        settings: PathfinderSettings,
        directories: Iterable[DirectoryProvider] = (),
        interceptors: Iterable[Interceptor] = (),
        *,
        units: UnitCatalog | None = None,
        local_peers: Iterable[str] = (),
        fallback: Any = None,
    ) -> Finder:
        """
        Create a finder with peers configured from settings.

        Args:
            settings: Application settings
            directories: Table-providing units
            interceptors: Interceptor units
            units: Local unit catalog
            local_peers: Peer ids served in-process from ``units``
            fallback: Fallback runner override
        """
        units = units or UnitCatalog()
        peers = PeerDirectory.from_settings(settings)
        for name in local_peers:
            peers.register(LocalPeer(name, units, max_workers=settings.local_peer_workers))

        logger.info(f"Finder configured with peers: {sorted(peers)}")
        return cls(
            directories,
            interceptors,
            units=units,
            peers=peers,
            fallback=fallback,
        )

    @property
    def units(self) -> UnitCatalog:
        return self._dispatcher.units

    @property
    def peers(self) -> Mapping[str, Peer]:
        return self._dispatcher.peers

    def build_request(
        self,
        domain: str,
        sub_address: str,
        extra_args: Sequence[Any] = (),
    ) -> ResolutionRequest:
        """Create the initial resolution request for one call."""
        return ResolutionRequest(
            domain=domain,
            sub_address=sub_address,
            registry=Registry.build(self._directories, fallback=self._fallback),
            interceptors=self._interceptors,
            extra_args=tuple(extra_args),
        )

    def resolve(
        self,
        domain: str,
        sub_address: str,
        extra_args: Sequence[Any] = (),
    ) -> ResolutionRequest:
        """Run the full chain and return the final request state."""
        request = self.build_request(domain, sub_address, extra_args)
        return compose(request.interceptors, self._engine)(request)

    def follow(
        self,
        domain: str,
        sub_address: str,
        extra_args: Sequence[Any] = (),
    ) -> Any:
        """
        Resolve (domain, sub_address) and return the runner's result.

        Returns ``NoValidPathError`` when nothing, not even the fallback
        pair, resolves. Failures while running the resolved unit propagate.
        """
        return self.resolve(domain, sub_address, extra_args).result

    def close(self) -> None:
        """Close all peers owned by this finder."""
        for peer in self.peers.values():
            peer.close()

    def __enter__(self) -> Finder:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
