"""Tests for the dispatcher."""

from __future__ import annotations

from concurrent.futures import Future

import pytest

from pathfinder.core.exceptions import (
    PeerUnavailableError,
    RemoteExecutionError,
    UnknownUnitError,
)
from pathfinder.core.models import Envelope, RemoteCall, Runner
from pathfinder.dispatch.dispatcher import Dispatcher
from pathfinder.dispatch.peers import LocalPeer, Peer, PeerDirectory


class FakePeer(Peer):
    """Peer returning a canned envelope and recording submissions."""

    def __init__(self, name: str, envelope: Envelope | None = None, error: Exception | None = None):
        super().__init__(name)
        self.envelope = envelope
        self.error = error
        self.submitted: list[RemoteCall] = []

    def submit(self, call: RemoteCall) -> Future[Envelope]:
        self.submitted.append(call)
        future: Future[Envelope] = Future()
        if self.error is not None:
            future.set_exception(self.error)
        else:
            future.set_result(self.envelope)
        return future


# ============================================================================
# Local Dispatch Tests
# ============================================================================


class TestLocalDispatch:
    """Tests for local runners."""

    def test_extra_args_come_before_fixed_args(self, catalog, recorder):
        dispatcher = Dispatcher(units=catalog)
        runner = Runner(unit="recorder", entry_point="record", fixed_args=("f1", "f2"))

        result = dispatcher.dispatch(runner, ["e1", "e2"])

        assert result == ("e1", "e2", "f1", "f2")
        assert recorder.calls == [("e1", "e2", "f1", "f2")]

    def test_returns_unit_result(self, catalog):
        dispatcher = Dispatcher(units=catalog)
        assert dispatcher.dispatch(Runner(unit="greeter", entry_point="say", fixed_args=("hi",))) == "hi!"

    def test_unit_errors_propagate_unchanged(self, catalog):
        dispatcher = Dispatcher(units=catalog)
        with pytest.raises(RuntimeError, match="greeter exploded"):
            dispatcher.dispatch(Runner(unit="greeter", entry_point="fail"))

    def test_unknown_unit(self, catalog):
        dispatcher = Dispatcher(units=catalog)
        with pytest.raises(UnknownUnitError):
            dispatcher.dispatch(Runner(unit="nobody", entry_point="say"))


# ============================================================================
# Remote Dispatch Tests
# ============================================================================


class TestRemoteDispatch:
    """Tests for runners located on remote peers."""

    def test_submits_merged_args_and_unwraps_result(self):
        peer = FakePeer("node-b", Envelope.success("hi!"))
        dispatcher = Dispatcher(peers={"node-b": peer})
        runner = Runner(location="node-b", unit="greeter", entry_point="say", fixed_args=("f",))

        result = dispatcher.dispatch(runner, ["e"])

        assert result == "hi!"
        assert peer.submitted == [RemoteCall(unit="greeter", entry_point="say", args=["e", "f"])]

    def test_unknown_peer(self):
        dispatcher = Dispatcher()
        runner = Runner(location="node-z", unit="greeter", entry_point="say")

        with pytest.raises(PeerUnavailableError) as exc_info:
            dispatcher.dispatch(runner)

        assert exc_info.value.peer == "node-z"
        assert exc_info.value.runner == runner

    def test_error_envelope_raises(self):
        peer = FakePeer("node-b", Envelope.failure(ValueError("bad")))
        dispatcher = Dispatcher(peers={"node-b": peer})

        with pytest.raises(RemoteExecutionError) as exc_info:
            dispatcher.dispatch(Runner(location="node-b", unit="greeter", entry_point="say"))

        assert exc_info.value.error_type == "ValueError"
        assert exc_info.value.peer == "node-b"

    def test_unreachable_peer_propagates(self):
        error = PeerUnavailableError("connection refused", peer="node-b")
        dispatcher = Dispatcher(peers={"node-b": FakePeer("node-b", error=error)})
        runner = Runner(location="node-b", unit="greeter", entry_point="say")

        with pytest.raises(PeerUnavailableError) as exc_info:
            dispatcher.dispatch(runner)

        assert exc_info.value.runner == runner

    def test_local_peer_round_trip(self, catalog):
        with LocalPeer("node-b", catalog, max_workers=2) as peer:
            dispatcher = Dispatcher(peers={"node-b": peer})
            runner = Runner(location="node-b", unit="speaker", entry_point="shout")
            assert dispatcher.dispatch(runner, ["hey"]) == "hey!!!"

    def test_empty_peer_directory_is_kept(self, catalog):
        peers = PeerDirectory()
        dispatcher = Dispatcher(units=catalog, peers=peers)
        assert dispatcher.peers is peers

        with peers.register(LocalPeer("node-b", catalog)):
            runner = Runner(location="node-b", unit="speaker", entry_point="shout")
            assert dispatcher.dispatch(runner, ["hey"]) == "hey!!!"
