"""Catalog of local units and their declared entry points."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from pathfinder.core.exceptions import ConfigurationError, UnknownUnitError

BUILTIN_UNIT = "pathfinder"


class Unit:
    """
    A named group of callables, addressed by entry-point name.

    Usage:
        greeter = Unit("greeter")

        @greeter.entry_point
        def say(msg: str) -> str:
            return msg + "!"
    """

    def __init__(self, name: str, entry_points: dict[str, Callable[..., Any]] | None = None) -> None:
        self.name = name
        self._entry_points: dict[str, Callable[..., Any]] = dict(entry_points or {})

    def entry_point(
        self,
        fn: Callable[..., Any] | None = None,
        *,
        name: str | None = None,
    ) -> Any:
        """Register a function as an entry point (usable bare or with ``name=``)."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._entry_points[name or func.__name__] = func
            return func

        if fn is not None:
            return decorator(fn)
        return decorator

    @classmethod
    def from_object(cls, name: str, obj: Any, entry_points: Iterable[str]) -> Unit:
        """Bind the declared methods of ``obj`` as entry points."""
        bound: dict[str, Callable[..., Any]] = {}
        for entry in entry_points:
            method = getattr(obj, entry, None)
            if not callable(method):
                raise ConfigurationError(f"{name} has no callable entry point {entry!r}")
            bound[entry] = method
        return cls(name, bound)

    def get(self, entry_point: str) -> Callable[..., Any]:
        try:
            return self._entry_points[entry_point]
        except KeyError:
            raise UnknownUnitError(
                f"Unit {self.name!r} has no entry point {entry_point!r}",
                details={"entry_points": sorted(self._entry_points)},
            ) from None

    @property
    def entry_points(self) -> tuple[str, ...]:
        return tuple(self._entry_points)

    def __repr__(self) -> str:
        return f"Unit({self.name!r}, entry_points={list(self._entry_points)!r})"


def _builtin_unit() -> Unit:
    from pathfinder.routing.engine import handle_fallback

    return Unit(BUILTIN_UNIT, {"handle_fallback": handle_fallback})


class UnitCatalog:
    """Explicit unit name -> ``Unit`` mapping used by local dispatch."""

    def __init__(self, units: Iterable[Unit] = ()) -> None:
        self._units: dict[str, Unit] = {BUILTIN_UNIT: _builtin_unit()}
        for unit in units:
            self.register(unit)

    def register(self, unit: Unit) -> Unit:
        if unit.name == BUILTIN_UNIT and BUILTIN_UNIT in self._units:
            raise ConfigurationError(f"Unit name {BUILTIN_UNIT!r} is reserved")
        self._units[unit.name] = unit
        return unit

    def unit(self, name: str) -> Unit:
        """Get a unit by name, creating an empty one if needed."""
        if name == BUILTIN_UNIT:
            raise ConfigurationError(f"Unit name {BUILTIN_UNIT!r} is reserved")
        if name not in self._units:
            self._units[name] = Unit(name)
        return self._units[name]

    def get(self, unit: str, entry_point: str) -> Callable[..., Any]:
        """Resolve (unit, entry_point) to a callable."""
        if unit not in self._units:
            raise UnknownUnitError(
                f"Unknown unit {unit!r}",
                details={"units": sorted(self._units)},
            )
        return self._units[unit].get(entry_point)

    @property
    def names(self) -> list[str]:
        return sorted(self._units)

    def __contains__(self, name: object) -> bool:
        return name in self._units

    def __repr__(self) -> str:
        return f"UnitCatalog({list(self._units)!r})"
