"""Tables, directories and the merged registry used for lookups."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

from pathfinder.core.exceptions import (
    ConfigurationError,
    LookupMiss,
    NoRunnerError,
    NoTableError,
)
from pathfinder.core.models import Runner
from pathfinder.core.types import FALLBACK, LOCAL

logger = logging.getLogger(__name__)

# Runner for the built-in terminal fallback handler
BUILTIN_FALLBACK = Runner(location=LOCAL, unit="pathfinder", entry_point="handle_fallback")


@runtime_checkable
class TableProvider(Protocol):
    """Anything that can look up a sub-address on its own."""

    def lookup(self, sub_address: str) -> Any: ...


@runtime_checkable
class DirectoryProvider(Protocol):
    """A declaration unit contributing domain tables to the registry."""

    def get_table(self) -> Mapping[str, Any]: ...


class Table:
    """
    Ordered mapping from sub-address to runner descriptor.

    Descriptors are stored as declared (tuples, mappings or ``Runner``);
    the engine normalizes them on a hit.
    """

    def __init__(self, entries: Mapping[str, Any] | Iterable[tuple[str, Any]] = ()) -> None:
        self._entries: dict[str, Any] = dict(entries)

    def add(self, sub_address: str, runner: Any) -> Table:
        """Register a runner under a sub-address, replacing any previous one."""
        self._entries[sub_address] = runner
        return self

    def lookup(self, sub_address: str) -> Any:
        if sub_address not in self._entries:
            return NoRunnerError(domain="", sub_address=sub_address)
        return self._entries[sub_address]

    def entries(self) -> Mapping[str, Any]:
        return MappingProxyType(self._entries)

    def __contains__(self, sub_address: object) -> bool:
        return sub_address in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Table({list(self._entries)!r})"


def as_table(value: Any) -> TableProvider:
    """Wrap plain mappings into a ``Table``; pass providers through."""
    if isinstance(value, TableProvider):
        return value
    if isinstance(value, Mapping):
        return Table(value)
    raise ConfigurationError(
        f"Domain value must be a mapping or table provider, got {type(value).__name__}"
    )


class Directory:
    """
    A named group of domain tables.

    Usage:
        directory = Directory("greetings")
        directory.add("greet", {"hi": ("local", "greeter", "say", ["hi"])})
        directory.add("shout", ShoutTable())
    """

    def __init__(self, name: str = "directory", tables: Mapping[str, Any] | None = None) -> None:
        self.name = name
        self._tables: dict[str, TableProvider] = {}
        for domain, table in (tables or {}).items():
            self.add(domain, table)

    def add(self, domain: str, table: Any) -> Directory:
        self._tables[domain] = as_table(table)
        return self

    def get_table(self) -> Mapping[str, TableProvider]:
        return dict(self._tables)

    def __repr__(self) -> str:
        return f"Directory({self.name!r}, domains={list(self._tables)!r})"


class Registry:
    """
    Immutable domain -> table mapping for one resolution request.

    Built fresh for every ``follow`` call by merging directories left to
    right. A later directory's domain replaces an earlier one wholesale.
    """

    def __init__(self, tables: Mapping[str, Any]) -> None:
        self._tables: Mapping[str, TableProvider] = MappingProxyType(
            {domain: as_table(table) for domain, table in tables.items()}
        )

    @classmethod
    def build(
        cls,
        directories: Iterable[DirectoryProvider],
        fallback: Any = None,
    ) -> Registry:
        """
        Merge directories into a registry.

        Args:
            directories: Table-providing units, in declaration order
            fallback: Runner used for the sentinel pair (built-in handler if None)

        Returns:
            A new immutable registry
        """
        merged: dict[str, Any] = {
            FALLBACK: Table({FALLBACK: fallback if fallback is not None else BUILTIN_FALLBACK}),
        }
        for directory in directories:
            merged.update(directory.get_table())

        logger.debug(f"Registry built with domains: {list(merged)}")
        return cls(merged)

    def lookup(self, domain: str, sub_address: str) -> Any:
        """
        Find the runner descriptor for (domain, sub_address).

        Never raises: misses are returned as ``NoTableError`` or
        ``NoRunnerError`` instances.
        """
        table = self._tables.get(domain)
        if table is None:
            return NoTableError(domain=domain, sub_address=sub_address)

        found = table.lookup(sub_address)
        if isinstance(found, LookupMiss):
            return NoRunnerError(domain=domain, sub_address=sub_address)
        if found is None:
            return NoRunnerError(domain=domain, sub_address=sub_address)
        return found

    def with_domain(self, domain: str, table: Any) -> Registry:
        """Return a copy with one domain's table replaced."""
        return Registry({**self._tables, domain: table})

    def without_domain(self, domain: str) -> Registry:
        """Return a copy with one domain removed."""
        return Registry({d: t for d, t in self._tables.items() if d != domain})

    @property
    def domains(self) -> tuple[str, ...]:
        return tuple(self._tables)

    def __contains__(self, domain: object) -> bool:
        return domain in self._tables

    def __getitem__(self, domain: str) -> TableProvider:
        return self._tables[domain]

    def __repr__(self) -> str:
        return f"Registry(domains={list(self._tables)!r})"
