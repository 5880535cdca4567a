"""Domain models for runners, resolution requests and remote envelopes."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigurationError, LookupMiss
from .types import FALLBACK, LOCAL, EnvelopeStatus, ResolutionState

if TYPE_CHECKING:
    from pathfinder.routing.interceptors import Interceptor
    from pathfinder.routing.table import Registry


def to_camel_case(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(word.capitalize() for word in components[1:])


class Runner(BaseModel):
    """Concrete dispatch target for a (domain, sub-address) pair."""

    model_config = ConfigDict(frozen=True)

    location: str = Field(default=LOCAL, description="'local' or a remote peer id")
    unit: str = Field(..., min_length=1, description="Name of the callable group")
    entry_point: str = Field(..., min_length=1, description="Operation within the unit")
    fixed_args: tuple[Any, ...] = Field(
        default=(), description="Arguments appended after the caller's extras"
    )

    @property
    def is_local(self) -> bool:
        return self.location == LOCAL

    @classmethod
    def coerce(cls, value: Any) -> Runner:
        """
        Normalize a runner descriptor into its four-field form.

        Accepts a ``Runner``, a mapping of its fields, or a tuple of
        ``(location, unit, entry_point)`` with an optional fourth
        ``fixed_args`` sequence.
        """
        if isinstance(value, Runner):
            return value

        try:
            if isinstance(value, Mapping):
                return cls.model_validate(value)

            if isinstance(value, Sequence) and not isinstance(value, str):
                if len(value) == 3:
                    location, unit, entry_point = value
                    return cls(location=location, unit=unit, entry_point=entry_point)
                if len(value) == 4:
                    location, unit, entry_point, fixed_args = value
                    if isinstance(fixed_args, (str, bytes)) or not isinstance(fixed_args, Sequence):
                        raise ConfigurationError(
                            f"Invalid runner descriptor: {value!r}",
                            details={"error": "fixed_args must be a sequence of arguments"},
                        )
                    return cls(
                        location=location,
                        unit=unit,
                        entry_point=entry_point,
                        fixed_args=tuple(fixed_args),
                    )
        except (ValidationError, TypeError) as e:
            raise ConfigurationError(
                f"Invalid runner descriptor: {value!r}",
                details={"error": str(e)},
            ) from e

        raise ConfigurationError(f"Invalid runner descriptor: {value!r}")

    def __str__(self) -> str:
        return f"{self.location}:{self.unit}.{self.entry_point}"


@dataclass(frozen=True)
class ResolutionRequest:
    """
    State threaded through one ``follow`` invocation.

    Interceptors and the engine never mutate a request; they return a new
    one built with ``evolve``.
    """

    domain: str = FALLBACK
    sub_address: str = FALLBACK
    registry: Registry | None = None
    interceptors: tuple[Interceptor, ...] = ()
    runner: Runner | LookupMiss | None = None
    extra_args: tuple[Any, ...] = ()
    result: Any = None
    state: ResolutionState = ResolutionState.UNRESOLVED
    attempts: int = 0
    trail: tuple[tuple[str, str], ...] = field(default=())

    def evolve(self, **changes: Any) -> ResolutionRequest:
        """Return a copy of this request with the given fields replaced."""
        return replace(self, **changes)

    @property
    def at_sentinel(self) -> bool:
        """Whether the request already points at the fallback pair."""
        return self.domain == FALLBACK and self.sub_address == FALLBACK

    @property
    def resolved(self) -> bool:
        return isinstance(self.runner, Runner)


class WireModel(BaseModel):
    """Base for payloads exchanged with execution acceptors."""

    model_config = ConfigDict(
        alias_generator=to_camel_case,
        populate_by_name=True,
    )


class RemoteCall(WireModel):
    """A unit invocation submitted to a peer's acceptor."""

    unit: str = Field(..., min_length=1)
    entry_point: str = Field(..., min_length=1)
    args: list[Any] = Field(default_factory=list)


class Envelope(WireModel):
    """Outcome of a remote invocation."""

    status: EnvelopeStatus
    result: Any = None
    error_type: str | None = None
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == EnvelopeStatus.OK

    @classmethod
    def success(cls, result: Any) -> Envelope:
        return cls(status=EnvelopeStatus.OK, result=result)

    @classmethod
    def failure(cls, error: BaseException) -> Envelope:
        return cls(
            status=EnvelopeStatus.ERROR,
            error_type=type(error).__name__,
            error_message=str(error),
        )
