"""Resolution engine with one-shot fallback retry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pathfinder.core.exceptions import LookupMiss, NoValidPathError
from pathfinder.core.models import ResolutionRequest, Runner
from pathfinder.core.types import FALLBACK, ResolutionState

if TYPE_CHECKING:
    from pathfinder.dispatch.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


def handle_fallback(*gifts: Any) -> NoValidPathError:
    """Built-in terminal fallback: always reports that no path was found."""
    return NoValidPathError(gifts=gifts)


class ResolutionEngine:
    """
    Looks up the runner for a request and hands it to the dispatcher.

    States:
        UNRESOLVED -> LOOKUP_HIT -> DISPATCHED
        UNRESOLVED -> LOOKUP_MISS -> RETRYING -> LOOKUP_HIT | TERMINAL_FALLBACK

    A miss on anything other than the sentinel pair is retried once against
    (fallback, fallback). A miss on the sentinel pair itself ends with the
    built-in fallback handler.
    """

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def __call__(self, request: ResolutionRequest) -> ResolutionRequest:
        return self.resolve(request)

    def resolve(self, request: ResolutionRequest) -> ResolutionRequest:
        found = request.registry.lookup(request.domain, request.sub_address)
        request = request.evolve(
            attempts=request.attempts + 1,
            trail=request.trail + ((request.domain, request.sub_address),),
        )

        if isinstance(found, LookupMiss):
            return self._miss(request.evolve(runner=found, state=ResolutionState.LOOKUP_MISS))

        runner = Runner.coerce(found)
        return self._arrive(request.evolve(runner=runner, state=ResolutionState.LOOKUP_HIT))

    def _arrive(self, request: ResolutionRequest) -> ResolutionRequest:
        logger.debug(f"Dispatching {request.domain}/{request.sub_address} to {request.runner}")
        result = self._dispatcher.dispatch(request.runner, request.extra_args)
        return request.evolve(result=result, state=ResolutionState.DISPATCHED)

    def _miss(self, request: ResolutionRequest) -> ResolutionRequest:
        miss = request.runner
        if request.at_sentinel:
            logger.warning(
                f"No fallback runner registered ({miss.reason.value}); "
                f"tried {request.trail}"
            )
            return request.evolve(
                result=handle_fallback(*request.extra_args),
                state=ResolutionState.TERMINAL_FALLBACK,
            )

        logger.debug(
            f"Lookup miss for {request.domain}/{request.sub_address} "
            f"({miss.reason.value}), retrying with fallback"
        )
        return self.resolve(
            request.evolve(
                domain=FALLBACK,
                sub_address=FALLBACK,
                state=ResolutionState.RETRYING,
            )
        )
