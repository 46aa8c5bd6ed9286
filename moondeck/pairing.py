"""Pairing of new clients confirmed by a user-entered PIN."""

import base64
from dataclasses import dataclass
from typing import Callable

from moondeck.clientids import ClientIds
from moondeck.logcategories import SERVER, get_logger

_log = get_logger(SERVER)


@dataclass(frozen=True)
class _PairingData:
    client_id: str
    hashed_id: str


class PairingManager:
    """Tracks one pairing attempt at a time and stores the paired id."""

    def __init__(
        self,
        client_ids: ClientIds,
        on_request_input: Callable[[], None] | None = None,
        on_abort: Callable[[], None] | None = None,
    ):
        self._client_ids = client_ids
        self._on_request_input = on_request_input
        self._on_abort = on_abort
        self._pairing: _PairingData | None = None

    def is_paired(self, client_id: str) -> bool:
        return client_id in self._client_ids

    def is_pairing(self, client_id: str | None = None) -> bool:
        """Whether any pairing, or the pairing of client_id, is in progress."""
        if self._pairing is None:
            return False
        return client_id is None or self._pairing.client_id == client_id

    def start_pairing(self, client_id: str, hashed_id: str) -> bool:
        """Begin pairing client_id; returns False if it cannot start."""
        if self._pairing is not None:
            _log.warning(
                "Cannot start pairing as %s is currently being paired!", self._pairing.client_id
            )
            return False

        if not client_id or not hashed_id:
            _log.warning("Invalid id or hashed_id provided for pairing!")
            return False

        if client_id in self._client_ids:
            _log.warning("Id %s is already paired!", client_id)
            return False

        self._pairing = _PairingData(client_id, hashed_id)
        if self._on_request_input is not None:
            self._on_request_input()
        return True

    def abort_pairing(self, client_id: str) -> bool:
        """Abort the pairing of client_id; False if another id is pairing."""
        if not self.is_pairing():
            return True

        if not self.is_pairing(client_id):
            _log.warning("Cannot abort pairing for other id than %s", client_id)
            return False

        _log.debug("Aborting pairing for %s", client_id)
        if self._on_abort is not None:
            self._on_abort()
        self._pairing = None
        return True

    def finish_pairing(self, pin: int) -> bool:
        """Complete pairing with the entered PIN; True if the id was stored.

        A wrong PIN keeps the pairing in progress.
        """
        if self._pairing is None:
            _log.warning("Pairing is not in progress!")
            return False

        text = self._pairing.client_id + str(pin)
        if base64.b64encode(text.encode("utf-8")).decode("ascii") != self._pairing.hashed_id:
            _log.warning("Pairing code does not match.")
            return False

        self._client_ids.add(self._pairing.client_id)
        self._client_ids.save()
        self._pairing = None
        return True

    def reject_pairing(self) -> None:
        _log.debug("Pairing was rejected.")
        self._pairing = None