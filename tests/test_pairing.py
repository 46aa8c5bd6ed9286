import base64

import pytest

from moondeck.clientids import ClientIds
from moondeck.pairing import PairingManager


def _hashed(client_id, pin):
    return base64.b64encode(f"{client_id}{pin}".encode("utf-8")).decode("ascii")


@pytest.fixture
def client_ids(tmp_path):
    return ClientIds(tmp_path / "clients.json")


def test_start_pairing_requests_input(client_ids):
    calls = []
    manager = PairingManager(client_ids, on_request_input=lambda: calls.append("input"))
    assert manager.start_pairing("deck", _hashed("deck", 1234)) is True
    assert calls == ["input"]
    assert manager.is_pairing()
    assert manager.is_pairing("deck")
    assert not manager.is_pairing("other")


def test_second_pairing_is_refused(client_ids):
    manager = PairingManager(client_ids)
    assert manager.start_pairing("deck", _hashed("deck", 1234))
    assert manager.start_pairing("other", _hashed("other", 1234)) is False
    assert manager.is_pairing("deck")


@pytest.mark.parametrize("client_id, hashed_id", [("", "abc"), ("deck", ""), ("", "")])
def test_empty_values_are_refused(client_ids, client_id, hashed_id):
    manager = PairingManager(client_ids)
    assert manager.start_pairing(client_id, hashed_id) is False
    assert not manager.is_pairing()


def test_already_paired_is_refused(client_ids):
    client_ids.add("deck")
    manager = PairingManager(client_ids)
    assert manager.is_paired("deck")
    assert manager.start_pairing("deck", _hashed("deck", 1234)) is False


def test_finish_with_correct_pin_stores_id(client_ids, tmp_path):
    manager = PairingManager(client_ids)
    manager.start_pairing("deck", _hashed("deck", 4321))
    assert manager.finish_pairing(4321) is True
    assert manager.is_paired("deck")
    assert not manager.is_pairing()

    reloaded = ClientIds(tmp_path / "clients.json")
    reloaded.load()
    assert "deck" in reloaded


def test_finish_with_wrong_pin_keeps_pairing(client_ids):
    manager = PairingManager(client_ids)
    manager.start_pairing("deck", _hashed("deck", 4321))
    assert manager.finish_pairing(1111) is False
    assert not manager.is_paired("deck")
    assert manager.is_pairing("deck")


def test_finish_without_pairing(client_ids):
    manager = PairingManager(client_ids)
    assert manager.finish_pairing(1234) is False
    assert not manager.is_paired("deck")


def test_abort_pairing(client_ids):
    aborted = []
    manager = PairingManager(client_ids, on_abort=lambda: aborted.append(True))
    manager.start_pairing("deck", _hashed("deck", 1234))
    assert manager.abort_pairing("other") is False
    assert manager.is_pairing("deck")
    assert aborted == []
    assert manager.abort_pairing("deck") is True
    assert aborted == [True]
    assert not manager.is_pairing()


def test_abort_without_pairing_succeeds(client_ids):
    aborted = []
    manager = PairingManager(client_ids, on_abort=lambda: aborted.append(True))
    assert manager.abort_pairing("deck") is True
    assert aborted == []


def test_reject_pairing_clears_state(client_ids):
    manager = PairingManager(client_ids)
    manager.start_pairing("deck", _hashed("deck", 1234))
    manager.reject_pairing()
    assert not manager.is_pairing()
    assert manager.finish_pairing(1234) is False
    assert not manager.is_paired("deck")