"""Shared test fixtures for all tests."""

from __future__ import annotations

import pytest

from pathfinder.config import PathfinderSettings
from pathfinder.dispatch.units import Unit, UnitCatalog
from pathfinder.finder import Finder
from pathfinder.routing.table import Directory

# ============================================================================
# Unit Fixtures
# ============================================================================


class Recorder:
    """Collects calls made to it, for asserting dispatch arguments."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def record(self, *args):
        self.calls.append(args)
        return args


@pytest.fixture
def greeter() -> Unit:
    """Create a unit with a 'say' entry point."""
    unit = Unit("greeter")

    @unit.entry_point
    def say(msg: str) -> str:
        return msg + "!"

    @unit.entry_point(name="fail")
    def explode(*args) -> None:
        raise RuntimeError("greeter exploded")

    return unit


@pytest.fixture
def speaker() -> Unit:
    """Create a unit with a 'shout' entry point."""
    unit = Unit("speaker")

    @unit.entry_point
    def shout(msg: str) -> str:
        return msg + "!!!"

    return unit


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def catalog(greeter: Unit, speaker: Unit, recorder: Recorder) -> UnitCatalog:
    """Create a catalog with greeter, speaker and recorder units."""
    return UnitCatalog(
        [greeter, speaker, Unit.from_object("recorder", recorder, ["record"])]
    )


# ============================================================================
# Directory Fixtures
# ============================================================================


@pytest.fixture
def greetings() -> Directory:
    """Create a directory with greet and sup domains."""
    return Directory(
        "greetings",
        {
            "greet": {"hi": ("local", "greeter", "say", ["hi"])},
            "sup": {"nub": ("local", "greeter", "say", ["omg"])},
        },
    )


@pytest.fixture
def finder(greetings: Directory, catalog: UnitCatalog) -> Finder:
    """Create a finder over the greetings directory."""
    return Finder([greetings], units=catalog)


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def mock_settings() -> PathfinderSettings:
    """Create mock settings for testing."""
    return PathfinderSettings(
        environment="test",
        peers={"node-b": "http://node-b.test:8750"},
        remote_timeout=5.0,
        local_peer_workers=2,
        debug=True,
        log_level="DEBUG",
    )


@pytest.fixture
def mock_settings_minimal() -> PathfinderSettings:
    """Create minimal settings without peers."""
    return PathfinderSettings(peers={}, remote_timeout=None)
