"""Custom exception hierarchy for pathfinder."""

from typing import Any

from pathfinder.core.types import MissReason

NO_VALID_PATH_MESSAGE = "pathfinder: no valid path found"


class PathfinderError(Exception):
    """Base exception for all pathfinder errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(PathfinderError):
    """A table, runner or peer declaration is malformed."""

    pass


class LookupMiss(PathfinderError):
    """
    Registry lookup found no runner.

    Lookups return instances of this class instead of raising them.
    """

    reason: MissReason

    def __init__(
        self,
        domain: str,
        sub_address: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"{self.reason.value}: {domain}/{sub_address}",
            details,
        )
        self.domain = domain
        self.sub_address = sub_address


class NoTableError(LookupMiss):
    """Domain is not present in the registry."""

    reason = MissReason.NO_TABLE


class NoRunnerError(LookupMiss):
    """Sub-address is not present in the domain's table."""

    reason = MissReason.NO_RUNNER


class NoValidPathError(PathfinderError):
    """
    Terminal result of a resolution that found nothing to run.

    Returned from ``Finder.follow`` as a value, never raised by it.
    """

    def __init__(
        self,
        gifts: tuple[Any, ...] = (),
        message: str = NO_VALID_PATH_MESSAGE,
    ) -> None:
        super().__init__(message)
        self.gifts = gifts

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NoValidPathError):
            return NotImplemented
        return self.message == other.message

    def __hash__(self) -> int:
        return hash(self.message)


class DispatchFailure(PathfinderError):
    """Executing a resolved runner failed."""

    def __init__(
        self,
        message: str,
        runner: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.runner = runner


class UnknownUnitError(DispatchFailure):
    """Unit or entry point is not in the unit catalog."""

    pass


class PeerUnavailableError(DispatchFailure):
    """Remote peer is not configured or its acceptor cannot be reached."""

    def __init__(
        self,
        message: str,
        peer: str,
        runner: Any = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, runner, details)
        self.peer = peer
        self.status_code = status_code


class RemoteExecutionError(DispatchFailure):
    """The unit raised while executing on a remote peer."""

    def __init__(
        self,
        message: str,
        peer: str,
        error_type: str | None = None,
        runner: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, runner, details)
        self.peer = peer
        self.error_type = error_type
