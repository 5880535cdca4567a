"""Core enums and type definitions."""

from enum import StrEnum

# Location marker for runners executed in the calling process
LOCAL = "local"

# Sentinel domain and sub-address used for the single fallback retry
FALLBACK = "fallback"


class ResolutionState(StrEnum):
    """Progress of a resolution request through the engine."""

    UNRESOLVED = "unresolved"
    LOOKUP_HIT = "lookup_hit"
    LOOKUP_MISS = "lookup_miss"
    RETRYING = "retrying"
    DISPATCHED = "dispatched"
    TERMINAL_FALLBACK = "terminal_fallback"


class MissReason(StrEnum):
    """Why a registry lookup did not produce a runner."""

    NO_TABLE = "no_table"
    NO_RUNNER = "no_runner"


class EnvelopeStatus(StrEnum):
    """Status of a remote execution envelope."""

    OK = "ok"
    ERROR = "error"
