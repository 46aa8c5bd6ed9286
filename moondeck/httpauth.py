"""Client identification from HTTP Basic authorization headers."""

import base64
import string
from collections.abc import Mapping

from moondeck.clientids import ClientIds

_BASE64_CHARS = frozenset(string.ascii_letters + string.digits + "+/")
_SCHEME = "basic "


def _header_value(headers: Mapping, name: str) -> str:
    for key, value in headers.items():
        if str(key).lower() == name:
            return value.decode("latin-1") if isinstance(value, bytes) else str(value)
    return ""


def _lenient_b64decode(text: str) -> bytes:
    chars = "".join(c for c in text if c in _BASE64_CHARS)
    if len(chars) % 4 == 1:
        chars = chars[:-1]
    chars += "=" * (-len(chars) % 4)
    return base64.b64decode(chars)


def get_authorization_id(headers: Mapping) -> str:
    """Return the client id carried in a Basic authorization header, or ''."""
    auth = " ".join(_header_value(headers, "authorization").split())
    if len(auth) > len(_SCHEME) and auth[: len(_SCHEME)].lower() == _SCHEME:
        client_id = _lenient_b64decode(auth[len(_SCHEME):])
        if client_id:
            return client_id.decode("utf-8", errors="replace")
    return ""


class ApiAuthorizer:
    """Checks requests against the set of paired client ids."""

    def __init__(self, api_version: int, client_ids: ClientIds):
        self.api_version = api_version
        self._client_ids = client_ids

    def is_authorized(self, headers: Mapping) -> bool:
        return get_authorization_id(headers) in self._client_ids