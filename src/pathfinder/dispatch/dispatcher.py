"""Execution of resolved runners, locally or on a remote peer."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pathfinder.core.exceptions import PeerUnavailableError, RemoteExecutionError
from pathfinder.core.models import RemoteCall, Runner
from pathfinder.dispatch.peers import Peer
from pathfinder.dispatch.units import UnitCatalog

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Runs a normalized ``Runner`` with the caller's extra arguments.

    Arguments are always ``extra_args`` followed by the runner's
    ``fixed_args``. Local units are called directly and anything they
    raise propagates unchanged. Remote units are submitted to the peer
    named by the runner's location and awaited without a timeout.
    """

    def __init__(
        self,
        units: UnitCatalog | None = None,
        peers: Mapping[str, Peer] | None = None,
    ) -> None:
        self.units = units if units is not None else UnitCatalog()
        self.peers: Mapping[str, Peer] = peers if peers is not None else {}

    def dispatch(self, runner: Runner, extra_args: Sequence[Any] = ()) -> Any:
        args = [*extra_args, *runner.fixed_args]
        if runner.is_local:
            return self._dispatch_local(runner, args)
        return self._dispatch_remote(runner, args)

    def _dispatch_local(self, runner: Runner, args: list[Any]) -> Any:
        fn = self.units.get(runner.unit, runner.entry_point)
        return fn(*args)

    def _dispatch_remote(self, runner: Runner, args: list[Any]) -> Any:
        peer = self.peers.get(runner.location)
        if peer is None:
            raise PeerUnavailableError(
                message=f"No acceptor configured for peer {runner.location!r}",
                peer=runner.location,
                runner=runner,
            )

        call = RemoteCall(unit=runner.unit, entry_point=runner.entry_point, args=args)
        future = peer.submit(call)
        try:
            envelope = future.result()
        except PeerUnavailableError as e:
            e.runner = runner
            raise

        if not envelope.ok:
            raise RemoteExecutionError(
                message=f"{runner} failed on {peer.name}: {envelope.error_message}",
                peer=peer.name,
                error_type=envelope.error_type,
                runner=runner,
            )

        logger.debug(f"Remote result for {runner} received from {peer.name}")
        return envelope.result
