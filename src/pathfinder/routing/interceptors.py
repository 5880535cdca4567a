"""Interceptor chain wrapping resolution with before/after behavior."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from pathfinder.core.models import ResolutionRequest

logger = logging.getLogger(__name__)

Continuation = Callable[[ResolutionRequest], ResolutionRequest]


class Interceptor:
    """
    Base class for interceptors.

    ``wrap`` receives the continuation for the rest of the chain and returns
    a new continuation. The default runs ``before`` on the way in and
    ``after`` on the way out; both are no-ops unless overridden, so a bare
    ``Interceptor`` passes requests through unchanged.
    """

    def wrap(self, next_: Continuation) -> Continuation:
        def intercept(request: ResolutionRequest) -> ResolutionRequest:
            return self.after(next_(self.before(request)))

        return intercept

    def before(self, request: ResolutionRequest) -> ResolutionRequest:
        return request

    def after(self, request: ResolutionRequest) -> ResolutionRequest:
        return request

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FunctionInterceptor(Interceptor):
    """Adapt a plain ``fn(next) -> continuation`` into an interceptor."""

    def __init__(self, fn: Callable[[Continuation], Continuation]) -> None:
        self._fn = fn

    def wrap(self, next_: Continuation) -> Continuation:
        return self._fn(next_)

    def __repr__(self) -> str:
        return f"FunctionInterceptor({getattr(self._fn, '__name__', self._fn)!r})"


class LoggingInterceptor(Interceptor):
    """Log every resolution request and its result."""

    def __init__(self, level: int = logging.INFO, log: logging.Logger | None = None) -> None:
        self.level = level
        self._logger = log or logger

    def before(self, request: ResolutionRequest) -> ResolutionRequest:
        self._logger.log(
            self.level,
            f"Following {request.domain}/{request.sub_address} "
            f"with {len(request.extra_args)} extra args",
        )
        return request

    def after(self, request: ResolutionRequest) -> ResolutionRequest:
        self._logger.log(
            self.level,
            f"Resolved {request.domain}/{request.sub_address} "
            f"via {request.runner} ({request.state.value}): {request.result!r}",
        )
        return request


class RerouteInterceptor(Interceptor):
    """
    Replace domain tables before resolution continues.

    Used for environment-based rerouting, e.g. pointing a domain at mocked
    units under test or at a different peer in staging.

    Args:
        overrides: Domain -> table (mapping or table provider) to install
        environments: Environments in which the overrides apply (all if None)
        current_environment: The active environment name
    """

    def __init__(
        self,
        overrides: Mapping[str, Any],
        environments: Iterable[str] | None = None,
        current_environment: str | None = None,
    ) -> None:
        self.overrides = dict(overrides)
        self.environments = frozenset(environments) if environments is not None else None
        self.current_environment = current_environment

    @property
    def active(self) -> bool:
        if self.environments is None:
            return True
        return self.current_environment in self.environments

    def before(self, request: ResolutionRequest) -> ResolutionRequest:
        if not self.active or request.domain not in self.overrides:
            return request

        logger.debug(
            f"Rerouting domain {request.domain} "
            f"(environment={self.current_environment})"
        )
        registry = request.registry.with_domain(
            request.domain, self.overrides[request.domain]
        )
        return request.evolve(registry=registry)


def compose(
    interceptors: Iterable[Interceptor],
    innermost: Continuation,
) -> Continuation:
    """
    Build a single continuation from an interceptor list.

    The first interceptor becomes the outermost layer: it sees the request
    first and the final result last.
    """
    continuation = innermost
    for interceptor in reversed(tuple(interceptors)):
        continuation = interceptor.wrap(continuation)
    return continuation
