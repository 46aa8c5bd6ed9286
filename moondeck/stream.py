"""Stream helper: signals through its heartbeat that a stream is running."""

import argparse
import threading

from moondeck.appmetadata import App, AppMetadata
from moondeck.heartbeat import Heartbeat
from moondeck.instanceguard import SingleInstanceGuard
from moondeck.logcategories import STREAM_MAIN, get_logger
from moondeck.logsettings import get_log_settings
from moondeck.signals import install_signal_handler

VERSION = "1.0.0"

_log = get_logger(STREAM_MAIN)


def main(argv=None) -> int:
    """Run the stream helper until terminated; returns the exit status."""
    meta = AppMetadata(App.STREAM)
    app_name = meta.app_name()

    parser = argparse.ArgumentParser(prog=app_name, description="Keeps a heartbeat while a stream runs.")
    parser.add_argument("--version", action="version", version=VERSION)
    parser.parse_args(argv)

    guard = SingleInstanceGuard(app_name)
    if not guard.try_to_run():
        _log.warning("another instance of %s is already running!", app_name)
        return 1

    try:
        stop = threading.Event()
        install_signal_handler(stop.set)
        get_log_settings().init(meta.log_path())
        _log.info("startup. Version: %s", VERSION)

        heartbeat = Heartbeat(app_name, on_should_terminate=stop.set)
        try:
            heartbeat.start_beating()
            _log.info("startup finished.")
            while not stop.wait(0.1):
                pass
            _log.info("shutdown.")
        finally:
            heartbeat.close()
    finally:
        guard.release()
    return 0