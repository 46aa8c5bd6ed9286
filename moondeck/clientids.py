"""Persistent set of paired client identifiers."""

import json
from pathlib import Path

from moondeck.logcategories import SERVER, get_logger

_log = get_logger(SERVER)


class ClientIdsError(Exception):
    """The client ids file cannot be read, decoded or written."""


class ClientIds:
    """Client identifiers stored as a JSON array in a file."""

    def __init__(self, filepath):
        self.filepath = Path(filepath)
        self._ids: set[str] = set()

    def load(self) -> None:
        """Replace the ids in memory with those stored in the file.

        A missing file yields no ids. Entries that are not non-empty strings
        are skipped.
        """
        self._ids.clear()

        path = self.filepath
        if not path.exists():
            return

        try:
            data = path.read_bytes()
        except OSError as exc:
            raise ClientIdsError(f'File exists, but could not be opened: "{path}"') from exc

        try:
            document = json.loads(data)
        except ValueError as exc:
            raise ClientIdsError(f"Failed to decode JSON data! Reason: {exc}. Read data: {data!r}") from exc

        if not isinstance(document, (list, dict)):
            raise ClientIdsError(f"Failed to decode JSON data! Read data: {data!r}")

        if not document:
            return

        if not isinstance(document, list):
            raise ClientIdsError("Client Ids file contains invalid JSON data!")

        skipped = False
        for client_id in document:
            if not isinstance(client_id, str) or not client_id:
                skipped = True
                continue
            self._ids.add(client_id)

        if skipped:
            _log.warning("Client Ids file contained ids that were skipped!")

    def save(self) -> None:
        """Write the ids to the file, creating its directory if needed."""
        path = self.filepath
        if not path.exists():
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise ClientIdsError(f'Failed at mkpath: "{path}".') from exc

        try:
            path.write_text(json.dumps(sorted(self._ids), indent=4) + "\n", encoding="utf-8")
        except OSError as exc:
            raise ClientIdsError(f'File could not be opened for writing: "{path}".') from exc

        _log.info("Finished saving: %s", path)

    def __contains__(self, client_id) -> bool:
        return client_id in self._ids

    def add(self, client_id: str) -> None:
        self._ids.add(client_id)

    def remove(self, client_id: str) -> None:
        """Remove an id; removing an unknown id does nothing."""
        self._ids.discard(client_id)