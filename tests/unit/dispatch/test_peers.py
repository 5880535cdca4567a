"""Tests for peer handles."""

from __future__ import annotations

import threading

import httpx
import pytest
from httpx import Response

from pathfinder.core.exceptions import PeerUnavailableError
from pathfinder.core.models import RemoteCall
from pathfinder.core.types import EnvelopeStatus
from pathfinder.dispatch.peers import (
    EXECUTE_PATH,
    HttpPeer,
    LocalPeer,
    PeerDirectory,
    execute_call,
)
from pathfinder.dispatch.units import Unit, UnitCatalog


class TestExecuteCall:
    """Tests for running a submitted call against a catalog."""

    def test_success(self, catalog):
        envelope = execute_call(catalog, RemoteCall(unit="greeter", entry_point="say", args=["hi"]))
        assert envelope.ok is True
        assert envelope.result == "hi!"

    def test_unit_error_becomes_envelope(self, catalog):
        envelope = execute_call(catalog, RemoteCall(unit="greeter", entry_point="fail"))
        assert envelope.status == EnvelopeStatus.ERROR
        assert envelope.error_type == "RuntimeError"
        assert envelope.error_message == "greeter exploded"

    def test_unknown_unit_becomes_envelope(self, catalog):
        envelope = execute_call(catalog, RemoteCall(unit="nobody", entry_point="say"))
        assert envelope.error_type == "UnknownUnitError"


class TestLocalPeer:
    """Tests for the in-process peer."""

    def test_submit_returns_future(self, catalog):
        with LocalPeer("node-b", catalog) as peer:
            future = peer.submit(RemoteCall(unit="speaker", entry_point="shout", args=["hey"]))
            assert future.result().result == "hey!!!"

    def test_runs_calls_concurrently(self):
        """Two calls that wait on each other only finish if run concurrently."""
        barrier = threading.Barrier(2, timeout=5)
        unit = Unit("sync", {"meet": lambda: barrier.wait() >= 0})

        with LocalPeer("node-b", UnitCatalog([unit]), max_workers=2) as peer:
            futures = [peer.submit(RemoteCall(unit="sync", entry_point="meet")) for _ in range(2)]
            assert all(f.result(timeout=10).result is True for f in futures)


class TestHttpPeer:
    """Tests for the HTTP peer."""

    def test_posts_call_and_parses_envelope(self, respx_mock, http_peer):
        route = respx_mock.post(EXECUTE_PATH).mock(
            return_value=Response(200, json={"status": "ok", "result": "hi!"})
        )

        envelope = http_peer.submit(
            RemoteCall(unit="greeter", entry_point="say", args=["hi"])
        ).result()

        assert envelope.ok is True
        assert envelope.result == "hi!"
        assert route.called
        sent = route.calls.last.request
        assert sent.headers["content-type"] == "application/json"
        assert b'"entryPoint"' in sent.content

    def test_error_envelope(self, respx_mock, http_peer):
        respx_mock.post(EXECUTE_PATH).mock(
            return_value=Response(
                200,
                json={"status": "error", "errorType": "ValueError", "errorMessage": "bad"},
            )
        )

        envelope = http_peer.submit(RemoteCall(unit="greeter", entry_point="say")).result()

        assert envelope.ok is False
        assert envelope.error_type == "ValueError"

    def test_connection_error(self, respx_mock, http_peer):
        respx_mock.post(EXECUTE_PATH).mock(side_effect=httpx.ConnectError("refused"))

        future = http_peer.submit(RemoteCall(unit="greeter", entry_point="say"))

        with pytest.raises(PeerUnavailableError) as exc_info:
            future.result()
        assert exc_info.value.peer == "node-b"

    def test_http_error_status(self, respx_mock, http_peer):
        respx_mock.post(EXECUTE_PATH).mock(return_value=Response(503, text="down"))

        with pytest.raises(PeerUnavailableError) as exc_info:
            http_peer.submit(RemoteCall(unit="greeter", entry_point="say")).result()
        assert exc_info.value.status_code == 503

    def test_malformed_envelope(self, respx_mock, http_peer):
        respx_mock.post(EXECUTE_PATH).mock(return_value=Response(200, json={"nope": 1}))

        with pytest.raises(PeerUnavailableError, match="Malformed envelope"):
            http_peer.submit(RemoteCall(unit="greeter", entry_point="say")).result()


class TestPeerDirectory:
    """Tests for PeerDirectory."""

    def test_from_settings(self, mock_settings):
        with PeerDirectory.from_settings(mock_settings) as peers:
            assert list(peers) == ["node-b"]
            assert isinstance(peers["node-b"], HttpPeer)
            assert peers["node-b"].base_url == "http://node-b.test:8750"

    def test_from_settings_without_peers(self, mock_settings_minimal):
        assert len(PeerDirectory.from_settings(mock_settings_minimal)) == 0

    def test_register(self, catalog):
        with PeerDirectory() as peers:
            peer = peers.register(LocalPeer("node-c", catalog))
            assert peers.get("node-c") is peer
            assert peers.get("node-z") is None
