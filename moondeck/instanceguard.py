"""Guard that lets only one instance of an application run at a time."""

import os
import tempfile

from filelock import FileLock, Timeout

from moondeck.heartbeat import generate_key_hash


class SingleInstanceGuard:
    """Holds an exclusive lock file named after the application key."""

    def __init__(self, key: str, directory=None):
        self.key = key
        base = os.fspath(directory) if directory is not None else tempfile.gettempdir()
        os.makedirs(base, exist_ok=True)
        self.path = os.path.join(base, generate_key_hash(key, "_shared_mem_key") + ".lock")
        self._lock = FileLock(self.path, timeout=0)
        self._held = False

    def is_another_running(self) -> bool:
        """Whether another holder of the same key is running."""
        if self._held:
            return False
        try:
            self._lock.acquire()
        except Timeout:
            return True
        self._lock.release()
        return False

    def try_to_run(self) -> bool:
        """Claim the key; False if another instance holds it.

        Claiming again while already holding the key fails and releases it.
        """
        if self.is_another_running():
            return False
        if self._held:
            self.release()
            return False
        try:
            self._lock.acquire()
        except Timeout:
            return False
        self._held = True
        return True

    def release(self) -> None:
        if self._held:
            self._lock.release()
            self._held = False

    def __enter__(self) -> "SingleInstanceGuard":
        return self

    def __exit__(self, *args) -> None:
        self.release()