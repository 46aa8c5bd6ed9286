import logging
import signal
import tempfile
import threading
from pathlib import Path

import pytest

from moondeck.appmetadata import App, AppMetadata
from moondeck.heartbeat import Heartbeat
from moondeck.instanceguard import SingleInstanceGuard
from moondeck.stream import VERSION, main


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
    saved_signals = {signum: signal.getsignal(signum) for signum in (signal.SIGINT, signal.SIGTERM)}
    root = logging.getLogger()
    handlers = list(root.handlers)
    yield
    for signum, handler in saved_signals.items():
        signal.signal(signum, handler)
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()


def test_refuses_second_instance():
    guard = SingleInstanceGuard(AppMetadata(App.STREAM).app_name())
    try:
        assert guard.try_to_run() is True
        assert main([]) == 1
    finally:
        guard.release()


def test_version_option(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert VERSION in capsys.readouterr().out


def test_runs_until_terminated():
    meta = AppMetadata(App.STREAM)
    controller = Heartbeat(meta.app_name())
    done = threading.Event()

    def keep_terminating():
        while not done.wait(0.05):
            controller.terminate()

    thread = threading.Thread(target=keep_terminating, daemon=True)
    thread.start()
    try:
        result = main([])
    finally:
        done.set()
        thread.join()
        controller.close()

    assert result == 0
    text = Path(meta.log_path()).read_text(encoding="utf-8")
    assert "startup finished." in text
    assert "shutdown." in text
    assert SingleInstanceGuard(meta.app_name()).is_another_running() is False