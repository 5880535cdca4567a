"""Unit test fixtures with HTTP mocking."""

from __future__ import annotations

import httpx
import pytest
import respx

from pathfinder.dispatch.peers import HttpPeer

PEER_URL = "http://node-b.test:8750"


# ============================================================================
# HTTP Mocking Fixtures
# ============================================================================


@pytest.fixture
def respx_mock():
    """Provide a respx mock router for HTTP mocking.

    Use this when you need fine-grained control over mocked responses.
    The mock is automatically started and stopped by respx.
    """
    with respx.mock(base_url=PEER_URL, assert_all_called=False) as router:
        yield router


# ============================================================================
# Peer Fixtures
# ============================================================================


@pytest.fixture
def http_peer():
    """Create an HTTP peer pointed at the mocked acceptor."""
    peer = HttpPeer("node-b", PEER_URL, client=httpx.Client(base_url=PEER_URL))
    yield peer
    peer.close()
