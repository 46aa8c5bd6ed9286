"""Quitting the application on SIGINT and SIGTERM."""

import signal
from typing import Callable


def install_signal_handler(callback: Callable[[], None]) -> None:
    """Call callback once on SIGINT or SIGTERM; a second signal acts as default.

    Must be called from the main thread.
    """

    def handler(signum, _frame):
        signal.signal(signum, signal.SIG_DFL)
        callback()

    for signum in (signal.SIGINT, signal.SIGTERM):
        signal.signal(signum, handler)