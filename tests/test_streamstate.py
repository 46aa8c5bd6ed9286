import tempfile
import threading
import time
import uuid

import pytest

from moondeck.enums import StreamState
from moondeck.heartbeat import Heartbeat
from moondeck.streamstate import StreamStateHandler


@pytest.fixture
def key():
    return uuid.uuid4().hex


@pytest.fixture
def make_heartbeat(tmp_path, monkeypatch):
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
    created = []

    def factory(hb_key, **callbacks):
        heartbeat = Heartbeat(hb_key, **callbacks)
        created.append(heartbeat)
        return heartbeat

    yield factory
    for heartbeat in created:
        heartbeat.close()


def _wait_for(handler, state, timeout=3.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if handler.current_state() is state:
            return True
        time.sleep(0.05)
    return handler.current_state() is state


def test_without_stream_state_is_not_streaming(make_heartbeat, key):
    changes = []
    handler = StreamStateHandler(make_heartbeat(key), lambda: changes.append(True))
    assert handler.current_state() is StreamState.NotStreaming
    assert handler.end_stream() is True
    assert handler.current_state() is StreamState.NotStreaming
    assert changes == []


def test_direct_check_without_change_does_nothing(make_heartbeat, key):
    changes = []
    handler = StreamStateHandler(make_heartbeat(key), lambda: changes.append(True))
    handler.handle_process_state_changes()
    assert handler.current_state() is StreamState.NotStreaming
    assert changes == []


def test_alive_heartbeat_means_streaming(make_heartbeat, key):
    beater = make_heartbeat(key)
    beater.beat(True)
    changes = []
    handler = StreamStateHandler(make_heartbeat(key), lambda: changes.append(True))
    assert handler.current_state() is StreamState.Streaming
    assert len(changes) == 1


def test_end_stream_requests_termination(make_heartbeat, key):
    terminated = []
    beater = make_heartbeat(key, on_should_terminate=lambda: terminated.append(True))
    beater.beat(True)
    changes = []
    handler = StreamStateHandler(make_heartbeat(key), lambda: changes.append(True))

    assert handler.end_stream() is True
    assert handler.current_state() is StreamState.StreamEnding
    assert len(changes) == 2

    beater.beat(False)
    assert terminated == [True]

    assert handler.end_stream() is True
    assert len(changes) == 2


def test_stream_ends_when_helper_stops(make_heartbeat, key):
    stopped = threading.Event()
    beater = make_heartbeat(key)

    def stop():
        beater.close()
        stopped.set()

    beater.on_should_terminate = stop
    beater.start_beating()
    handler = StreamStateHandler(make_heartbeat(key))
    assert handler.current_state() is StreamState.Streaming

    handler.end_stream()
    assert stopped.wait(2.0) is True
    assert _wait_for(handler, StreamState.NotStreaming) is True