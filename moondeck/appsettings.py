"""Settings file of the buddy application, created with defaults when needed."""

import json
import math
import sys
from enum import Enum, auto
from pathlib import Path

from moondeck.logcategories import UTILS, get_logger

_log = get_logger(UTILS)

DEFAULT_PORT = 59999
_PORT_MAX = 65535
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class SslProtocol(Enum):
    """TLS protocol selections accepted in the settings file."""

    SecureProtocols = auto()
    TlsV1_2 = auto()
    TlsV1_2OrLater = auto()
    TlsV1_3 = auto()
    TlsV1_3OrLater = auto()


class SettingsError(Exception):
    """The settings file cannot be read, decoded or written."""


def protocol_from_string(value: str) -> SslProtocol | None:
    """Map a protocol name to its SslProtocol, or None if unknown."""
    protocol = SslProtocol.__members__.get(value)
    if protocol is not None:
        _log.debug("Mapped %s to %s", value, protocol)
    return protocol


def _is_linux() -> bool:
    return sys.platform.startswith("linux")


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_int(value, default: int) -> int:
    if math.isfinite(value) and float(value).is_integer() and _INT_MIN <= value <= _INT_MAX:
        return int(value)
    return default


def _reject_constant(name: str):
    raise ValueError(f"invalid JSON constant {name}")


class AppSettings:
    """Settings loaded from a JSON file.

    Missing or invalid entries are filled with defaults and the file is
    rewritten.
    """

    def __init__(self, filepath):
        self.filepath = Path(filepath)
        self.port: int = DEFAULT_PORT
        self.logging_rules: str = ""
        self.handled_displays: set[str] = set()
        self.sunshine_apps_filepath: str = ""
        self.prefer_hibernation: bool = False
        self.ssl_protocol: SslProtocol = SslProtocol.SecureProtocols
        self.force_big_picture: bool = True
        self.close_steam_before_sleep: bool = True
        self.registry_file_override: str = ""
        self.steam_binary_override: str = ""
        self.mac_address_override: str = ""

        if not self._parse():
            _log.info("Saving default settings to %s", self.filepath)
            self._save_default()
            if not self._parse():
                raise SettingsError(f'Failed to parse "{self.filepath}"!')

    def _parse(self) -> bool:
        path = self.filepath
        if not path.exists():
            return False

        try:
            data = path.read_bytes()
        except OSError as exc:
            raise SettingsError(f'File exists, but could not be opened: "{path}"') from exc

        try:
            document = json.loads(data, parse_constant=_reject_constant)
        except ValueError as exc:
            raise SettingsError(f"Failed to decode JSON data! Reason: {exc}. Read data: {data!r}") from exc

        obj = document if isinstance(document, dict) else {}
        expected_entries = 9 + (2 if _is_linux() else 0)
        valid_entries = 0

        port = obj.get("port")
        if _is_number(port):
            port = _to_int(port, -1)
            if not 0 <= port <= _PORT_MAX:
                raise SettingsError(f"Port value ({port}) is out of range!")
            self.port = port
            valid_entries += 1

        logging_rules = obj.get("logging_rules")
        if isinstance(logging_rules, str):
            self.logging_rules = logging_rules
            valid_entries += 1

        displays = obj.get("handled_displays")
        if isinstance(displays, list):
            self.handled_displays = set()
            skipped = False
            for entry in displays:
                name = entry if isinstance(entry, str) else ""
                if not name or name in self.logging_rules:
                    skipped = True
                    continue
                self.handled_displays.add(name)
            if not skipped:
                valid_entries += 1

        apps_filepath = obj.get("sunshine_apps_filepath")
        if isinstance(apps_filepath, str):
            self.sunshine_apps_filepath = apps_filepath
            valid_entries += 1

        prefer_hibernation = obj.get("prefer_hibernation")
        if isinstance(prefer_hibernation, bool):
            self.prefer_hibernation = prefer_hibernation
            valid_entries += 1

        ssl_protocol = obj.get("ssl_protocol")
        if isinstance(ssl_protocol, str):
            protocol = protocol_from_string(ssl_protocol)
            if protocol is not None:
                self.ssl_protocol = protocol
                valid_entries += 1

        force_big_picture = obj.get("force_big_picture")
        if isinstance(force_big_picture, bool):
            self.force_big_picture = force_big_picture
            valid_entries += 1

        close_steam = obj.get("close_steam_before_sleep")
        if isinstance(close_steam, bool):
            self.close_steam_before_sleep = close_steam
            valid_entries += 1

        mac_override = obj.get("mac_address_override")
        if isinstance(mac_override, str):
            self.mac_address_override = mac_override.strip()
            valid_entries += 1

        if _is_linux():
            registry_override = obj.get("registry_file_override")
            if isinstance(registry_override, str):
                self.registry_file_override = registry_override
                valid_entries += 1

            steam_override = obj.get("steam_binary_override")
            if isinstance(steam_override, str):
                self.steam_binary_override = steam_override
                valid_entries += 1

        return valid_entries == expected_entries

    def _save_default(self) -> None:
        obj = {
            "port": self.port,
            "logging_rules": self.logging_rules,
            "handled_displays": sorted(self.handled_displays),
            "sunshine_apps_filepath": self.sunshine_apps_filepath,
            "prefer_hibernation": self.prefer_hibernation,
            "ssl_protocol": SslProtocol.SecureProtocols.name,
            "force_big_picture": self.force_big_picture,
            "close_steam_before_sleep": self.close_steam_before_sleep,
            "mac_address_override": self.mac_address_override,
        }
        if _is_linux():
            obj["registry_file_override"] = self.registry_file_override
            obj["steam_binary_override"] = self.steam_binary_override

        path = self.filepath
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SettingsError(f'Failed at mkpath: "{path}".') from exc

        try:
            path.write_text(json.dumps(obj, indent=4, sort_keys=True) + "\n", encoding="utf-8")
        except OSError as exc:
            raise SettingsError(f'File could not be opened for writing: "{path}".') from exc