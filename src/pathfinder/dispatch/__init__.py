"""Dispatch layer: local unit catalog, remote peers and the dispatcher."""

from pathfinder.dispatch.dispatcher import Dispatcher
from pathfinder.dispatch.peers import (
    HttpPeer,
    LocalPeer,
    Peer,
    PeerDirectory,
    execute_call,
)
from pathfinder.dispatch.units import BUILTIN_UNIT, Unit, UnitCatalog

__all__ = [
    "BUILTIN_UNIT",
    "Dispatcher",
    "HttpPeer",
    "LocalPeer",
    "Peer",
    "PeerDirectory",
    "Unit",
    "UnitCatalog",
    "execute_call",
]
