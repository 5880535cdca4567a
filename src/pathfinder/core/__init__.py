"""Core types, models, and exceptions."""

from .exceptions import (
    NO_VALID_PATH_MESSAGE,
    ConfigurationError,
    DispatchFailure,
    LookupMiss,
    NoRunnerError,
    NoTableError,
    NoValidPathError,
    PathfinderError,
    PeerUnavailableError,
    RemoteExecutionError,
    UnknownUnitError,
)
from .models import Envelope, RemoteCall, ResolutionRequest, Runner
from .types import FALLBACK, LOCAL, EnvelopeStatus, MissReason, ResolutionState

__all__ = [
    # Types
    "FALLBACK",
    "LOCAL",
    "EnvelopeStatus",
    "MissReason",
    "ResolutionState",
    # Models
    "Envelope",
    "RemoteCall",
    "ResolutionRequest",
    "Runner",
    # Exceptions
    "NO_VALID_PATH_MESSAGE",
    "ConfigurationError",
    "DispatchFailure",
    "LookupMiss",
    "NoRunnerError",
    "NoTableError",
    "NoValidPathError",
    "PathfinderError",
    "PeerUnavailableError",
    "RemoteExecutionError",
    "UnknownUnitError",
]
