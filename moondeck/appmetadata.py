"""Application names and the platform-specific paths derived from them."""

import os
import posixpath
import sys
from enum import Enum, auto
from pathlib import Path

from moondeck.logcategories import SHARED, get_logger

_log = get_logger(SHARED)


class App(Enum):
    """The applications of the suite."""

    BUDDY = auto()
    STREAM = auto()


_APP_NAMES = {
    App.BUDDY: "MoonDeckBuddy",
    App.STREAM: "MoonDeckStream",
}


def _is_windows() -> bool:
    return sys.platform.startswith("win")


def _clean_path(path: str) -> str:
    return posixpath.normpath(path.replace("\\", "/"))


def _app_file_path() -> str:
    if sys.argv and sys.argv[0]:
        return _clean_path(os.path.abspath(sys.argv[0]))
    return _clean_path(sys.executable)


def _app_dir_path() -> str:
    return posixpath.dirname(_app_file_path())


def config_dir() -> str:
    """Return the user configuration directory (XDG_CONFIG_HOME or ~/.config)."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg_config and os.path.isdir(xdg_config):
        return _clean_path(os.path.abspath(xdg_config))
    return _clean_path(str(Path.home()) + "/.config")


class AppMetadata:
    """Names and locations of logs, settings and autostart entries for an app."""

    def __init__(self, app: App):
        self.app = app
        for name in (
            "app_name",
            "log_dir",
            "log_name",
            "log_path",
            "settings_dir",
            "settings_name",
            "settings_path",
            "autostart_dir",
            "autostart_path",
            "autostart_exec",
        ):
            _log.debug("%s() >> %s", name, getattr(self, name)())

    def app_name(self, app: App | None = None) -> str:
        """Return the name of the given app, or of this one."""
        return _APP_NAMES[self.app if app is None else app]

    def log_dir(self) -> str:
        if _is_windows():
            return _app_dir_path()
        return "/tmp"

    def log_name(self) -> str:
        return self.app_name().lower() + ".log"

    def log_path(self) -> str:
        return _clean_path(self.log_dir() + "/" + self.log_name())

    def settings_dir(self) -> str:
        if _is_windows():
            return _app_dir_path()
        return _clean_path(config_dir() + "/" + self.app_name(App.BUDDY).lower())

    def settings_name(self) -> str:
        return "settings.json"

    def settings_path(self) -> str:
        return _clean_path(self.settings_dir() + "/" + self.settings_name())

    def autostart_dir(self) -> str:
        if _is_windows():
            appdata = os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming"))
            return _clean_path(appdata + "/Microsoft/Windows/Start Menu/Programs/Startup")
        return _clean_path(config_dir() + "/autostart")

    def autostart_name(self) -> str:
        if _is_windows():
            return self.app_name() + ".lnk"
        return self.app_name().lower() + ".desktop"

    def autostart_path(self) -> str:
        return _clean_path(self.autostart_dir() + "/" + self.autostart_name())

    def autostart_exec(self) -> str:
        if not _is_windows():
            app_image = os.environ.get("APPIMAGE", "")
            if app_image:
                return app_image
        return _app_file_path()