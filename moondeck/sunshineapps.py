"""Reading the list of application names configured in Sunshine."""

import json
import posixpath
import sys
from pathlib import Path

from moondeck.appmetadata import config_dir
from moondeck.logcategories import OS, get_logger

_log = get_logger(OS)

_REGISTRY_SUBKEY = r"Software\LizardByte\Sunshine"


def _clean_path(path: str) -> str:
    return posixpath.normpath(path.replace("\\", "/"))


def _registry_install_dir() -> str:
    try:
        import winreg
    except ImportError:
        return ""
    try:
        with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, _REGISTRY_SUBKEY) as key:
            value, _kind = winreg.QueryValueEx(key, "")
    except OSError:
        return ""
    if isinstance(value, int):
        return str(value)
    return value.replace("\0", "") if isinstance(value, str) else ""


def default_apps_path() -> str:
    """Return the usual location of Sunshine's apps.json, or '' if unknown."""
    if sys.platform.startswith("win"):
        install_dir = _registry_install_dir()
        return _clean_path(install_dir + "/config/apps.json") if install_dir else ""
    return _clean_path(config_dir() + "/sunshine/apps.json")


class SunshineApps:
    """Loads app names from a Sunshine apps.json file."""

    def __init__(self, filepath):
        self.filepath = str(filepath) if filepath else ""

    def load(self) -> set[str] | None:
        """Return the app names, or None if the file cannot be read or parsed."""
        filepath = self.filepath or default_apps_path()

        _log.debug("selected filepath for Sunshine apps: %s", filepath)
        if not filepath:
            _log.warning("filepath for Sunshine apps is empty!")
            return None

        try:
            data = Path(filepath).read_bytes()
        except OSError as exc:
            _log.warning("file %s could not be opened! Reason: %s", filepath, exc)
            return None

        try:
            document = json.loads(data)
        except ValueError as exc:
            _log.warning("failed to decode JSON data! Reason: %s | data: %r", exc, data)
            return None

        _log.debug("Sunshine apps file content:\n%s", json.dumps(document, indent=4))
        apps = document.get("apps") if isinstance(document, dict) else None
        if not isinstance(apps, list):
            _log.warning("file %s could not be parsed!", self.filepath)
            return None

        if not apps:
            _log.debug("there are no Sunshine apps to parse.")
            return set()

        parsed: set[str] = set()
        for app in apps:
            if not isinstance(app, dict):
                _log.debug("skipping entry as it's not an object: %r", app)
                continue
            if "name" not in app:
                _log.debug('skipping entry as it does not contain "name" field: %r', app)
                continue
            name = app["name"]
            if not isinstance(name, str):
                _log.debug('skipping entry as the "name" field does not contain a string: %r', name)
                continue
            parsed.add(name)

        _log.debug("parsed the following Sunshine apps: %s", parsed)
        return parsed