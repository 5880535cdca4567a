"""Pathfinder - resolve symbolic (domain, sub-address) names to local or remote runners."""

from pathfinder.config import PathfinderSettings, get_settings
from pathfinder.core.exceptions import (
    DispatchFailure,
    NoRunnerError,
    NoTableError,
    NoValidPathError,
    PathfinderError,
    PeerUnavailableError,
    RemoteExecutionError,
    UnknownUnitError,
)
from pathfinder.core.models import ResolutionRequest, Runner
from pathfinder.core.types import FALLBACK, LOCAL, ResolutionState
from pathfinder.dispatch import HttpPeer, LocalPeer, Peer, PeerDirectory, Unit, UnitCatalog
from pathfinder.finder import Finder
from pathfinder.logging_config import configure_logging
from pathfinder.routing import (
    Directory,
    FunctionInterceptor,
    Interceptor,
    LoggingInterceptor,
    Registry,
    RerouteInterceptor,
    Table,
)

__version__ = "0.1.0"
__all__ = [
    # Entry point
    "Finder",
    # Declarations
    "Directory",
    "Registry",
    "Runner",
    "Table",
    "Unit",
    "UnitCatalog",
    # Interceptors
    "FunctionInterceptor",
    "Interceptor",
    "LoggingInterceptor",
    "RerouteInterceptor",
    # Peers
    "HttpPeer",
    "LocalPeer",
    "Peer",
    "PeerDirectory",
    # Types
    "FALLBACK",
    "LOCAL",
    "ResolutionRequest",
    "ResolutionState",
    # Errors
    "DispatchFailure",
    "NoRunnerError",
    "NoTableError",
    "NoValidPathError",
    "PathfinderError",
    "PeerUnavailableError",
    "RemoteExecutionError",
    "UnknownUnitError",
    # Config
    "PathfinderSettings",
    "configure_logging",
    "get_settings",
    # Version
    "__version__",
]
