"""Liveness signalling between two processes through a shared state file."""

import hashlib
import os
import struct
import tempfile
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator

from filelock import FileLock

HEARTBEAT_INTERVAL_MS = 250
HEARTBEAT_TIMEOUT_MS = 2000
_DAY_MS = 24 * 60 * 60 * 1000
_LAYOUT = struct.Struct("<qq")


def generate_key_hash(key: str, salt: str) -> str:
    """Return the hex SHA-1 digest of key followed by salt."""
    return hashlib.sha1((key + salt).encode("utf-8")).hexdigest()


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass
class _SharedState:
    time_ms: int
    should_terminate: bool


class Heartbeat:
    """One side of a heartbeat: either the process beating or one listening.

    The beating side refreshes a timestamp every HEARTBEAT_INTERVAL_MS; the
    listening side considers it alive while the timestamp is no older than
    HEARTBEAT_TIMEOUT_MS. A listener may ask the beating side to terminate.
    """

    def __init__(
        self,
        key: str,
        on_should_terminate: Callable[[], None] | None = None,
        on_state_changed: Callable[[], None] | None = None,
    ):
        self.key = key
        self.on_should_terminate = on_should_terminate
        self.on_state_changed = on_state_changed
        name = generate_key_hash(key, "_heartbeat_key")
        self.path = os.path.join(tempfile.gettempdir(), name + ".heartbeat")

        self._file_lock = FileLock(self.path + ".lock")
        self._guard = threading.RLock()
        self._timer: threading.Timer | None = None
        self._is_beating = False
        self._is_listening = False
        self._is_alive = False
        self._closed = False

        with self._guard, self._file_lock:
            if not os.path.exists(self.path) or os.path.getsize(self.path) < _LAYOUT.size:
                with open(self.path, "wb") as handle:
                    handle.write(_LAYOUT.pack(_now_ms() - _DAY_MS, 0))

    @contextmanager
    def _shared(self) -> Iterator[_SharedState]:
        with self._guard, self._file_lock, open(self.path, "r+b") as handle:
            time_ms, terminate = _LAYOUT.unpack(handle.read(_LAYOUT.size))
            state = _SharedState(time_ms, bool(terminate))
            yield state
            handle.seek(0)
            handle.write(_LAYOUT.pack(state.time_ms, int(state.should_terminate)))

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _schedule(self, callback: Callable[[], None]) -> None:
        if self._closed:
            return
        self._timer = threading.Timer(HEARTBEAT_INTERVAL_MS / 1000, callback)
        self._timer.daemon = True
        self._timer.start()

    def start_beating(self) -> None:
        """Begin beating; a listener cannot become the beating side."""
        with self._guard:
            if self._is_listening:
                raise RuntimeError("You cannot start heartbeating if you're a listener!")
            if self._is_beating:
                return
            self._is_beating = True
        self.beat(True)

    def start_listening(self) -> None:
        """Begin listening; the beating side cannot become a listener."""
        with self._guard:
            if self._is_beating:
                raise RuntimeError("You cannot start listening if you're the heartbeat!")
            if self._is_listening:
                return
            self._is_listening = True
        self.listen()

    def terminate(self) -> None:
        """Ask the beating side to terminate."""
        with self._shared() as state:
            state.should_terminate = True

    def is_alive(self) -> bool:
        return self._is_beating or self._is_alive

    def beat(self, fresh_start: bool = False) -> None:
        """Refresh the timestamp, or report a pending termination request."""
        terminate_requested = False
        with self._guard:
            if self._closed:
                return
            self._stop_timer()
            with self._shared() as state:
                if not fresh_start and state.should_terminate:
                    terminate_requested = True
                else:
                    state.should_terminate = False
                    state.time_ms = _now_ms()
            if not terminate_requested and self._is_beating:
                self._schedule(lambda: self.beat(False))

        if terminate_requested and self.on_should_terminate is not None:
            self.on_should_terminate()

    def listen(self) -> None:
        """Check the timestamp and report when liveness changes."""
        changed = False
        with self._guard:
            if self._closed:
                return
            self._stop_timer()
            with self._shared() as state:
                last_beat = state.time_ms
            alive = _now_ms() - last_beat <= HEARTBEAT_TIMEOUT_MS
            if alive != self._is_alive:
                self._is_alive = alive
                changed = True
            if self._is_listening:
                self._schedule(self.listen)

        if changed and self.on_state_changed is not None:
            self.on_state_changed()

    def close(self) -> None:
        """Stop the timer; a beating side leaves a timestamp that expires soon."""
        with self._guard:
            if self._closed:
                return
            self._closed = True
            self._stop_timer()
            if self._is_beating:
                with self._shared() as state:
                    state.time_ms = _now_ms() - HEARTBEAT_TIMEOUT_MS + HEARTBEAT_INTERVAL_MS