"""Routing layer: tables, registry, interceptors and the resolution engine."""

from pathfinder.routing.engine import ResolutionEngine, handle_fallback
from pathfinder.routing.interceptors import (
    Continuation,
    FunctionInterceptor,
    Interceptor,
    LoggingInterceptor,
    RerouteInterceptor,
    compose,
)
from pathfinder.routing.table import (
    BUILTIN_FALLBACK,
    Directory,
    DirectoryProvider,
    Registry,
    Table,
    TableProvider,
)

__all__ = [
    # Tables
    "BUILTIN_FALLBACK",
    "Directory",
    "DirectoryProvider",
    "Registry",
    "Table",
    "TableProvider",
    # Interceptors
    "Continuation",
    "FunctionInterceptor",
    "Interceptor",
    "LoggingInterceptor",
    "RerouteInterceptor",
    "compose",
    # Engine
    "ResolutionEngine",
    "handle_fallback",
]
