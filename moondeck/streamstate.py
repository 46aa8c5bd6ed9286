"""Streaming session state derived from the stream helper's heartbeat."""

import threading
from typing import Callable

from moondeck.enums import StreamState
from moondeck.heartbeat import Heartbeat


class StreamStateHandler:
    """Follows the stream helper's heartbeat and can ask it to end."""

    def __init__(self, heartbeat: Heartbeat, on_state_changed: Callable[[], None] | None = None):
        self._heartbeat = heartbeat
        self._on_state_changed = on_state_changed
        self._state = StreamState.NotStreaming
        self._lock = threading.RLock()
        heartbeat.on_state_changed = self.handle_process_state_changes
        heartbeat.start_listening()

    def _notify(self) -> None:
        if self._on_state_changed is not None:
            self._on_state_changed()

    def end_stream(self) -> bool:
        """Ask a running stream to end; always succeeds."""
        with self._lock:
            if self._state is not StreamState.Streaming:
                return True
            self._heartbeat.terminate()
            self._state = StreamState.StreamEnding
        self._notify()
        return True

    def current_state(self) -> StreamState:
        return self._state

    def handle_process_state_changes(self) -> None:
        """Update the state from the heartbeat's liveness."""
        with self._lock:
            alive = self._heartbeat.is_alive()
            if self._state is StreamState.NotStreaming:
                if not alive:
                    return
                self._state = StreamState.Streaming
            else:
                if alive:
                    return
                self._state = StreamState.NotStreaming
        self._notify()