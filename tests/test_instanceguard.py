from pathlib import Path

from moondeck.instanceguard import SingleInstanceGuard


def test_first_instance_runs(tmp_path):
    guard = SingleInstanceGuard("app", tmp_path)
    try:
        assert guard.try_to_run() is True
        assert guard.is_another_running() is False
    finally:
        guard.release()


def test_second_instance_is_refused(tmp_path):
    first = SingleInstanceGuard("app", tmp_path)
    second = SingleInstanceGuard("app", tmp_path)
    try:
        assert first.try_to_run() is True
        assert second.is_another_running() is True
        assert second.try_to_run() is False
    finally:
        first.release()
        second.release()


def test_release_lets_another_run(tmp_path):
    first = SingleInstanceGuard("app", tmp_path)
    second = SingleInstanceGuard("app", tmp_path)
    try:
        assert first.try_to_run() is True
        first.release()
        assert second.is_another_running() is False
        assert second.try_to_run() is True
    finally:
        second.release()


def test_different_keys_do_not_conflict(tmp_path):
    first = SingleInstanceGuard("one", tmp_path)
    second = SingleInstanceGuard("two", tmp_path)
    try:
        assert first.try_to_run() is True
        assert second.try_to_run() is True
        assert Path(first.path) != Path(second.path)
    finally:
        first.release()
        second.release()


def test_claiming_twice_fails_and_releases(tmp_path):
    guard = SingleInstanceGuard("app", tmp_path)
    other = SingleInstanceGuard("app", tmp_path)
    try:
        assert guard.try_to_run() is True
        assert guard.try_to_run() is False
        assert other.is_another_running() is False
    finally:
        guard.release()
        other.release()


def test_context_manager_releases(tmp_path):
    other = SingleInstanceGuard("app", tmp_path)
    with SingleInstanceGuard("app", tmp_path) as guard:
        assert guard.try_to_run() is True
        assert other.is_another_running() is True
    assert other.is_another_running() is False


def test_creates_missing_directory(tmp_path):
    directory = tmp_path / "nested" / "dir"
    guard = SingleInstanceGuard("app", directory)
    try:
        assert guard.try_to_run() is True
        assert Path(guard.path).parent == directory
    finally:
        guard.release()