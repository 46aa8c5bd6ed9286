"""Log output format, log file and category filter rules."""

import logging
import sys
import time
from pathlib import Path

from moondeck.logcategories import CATEGORIES, UTILS, get_logger

_LEVEL_LABELS = (
    (logging.CRITICAL, "FATAL    "),
    (logging.ERROR, "CRITICAL "),
    (logging.WARNING, "WARNING  "),
    (logging.INFO, "INFO     "),
    (logging.NOTSET, "DEBUG    "),
)

_DEFAULT_ENABLED = {"debug": False, "info": True, "warning": True, "critical": True}


def _level_label(levelno: int) -> str:
    for threshold, label in _LEVEL_LABELS:
        if levelno >= threshold:
            return label
    return _LEVEL_LABELS[-1][1]


def _message_type(levelno: int) -> str:
    if levelno >= logging.ERROR:
        return "critical"
    if levelno >= logging.WARNING:
        return "warning"
    if levelno >= logging.INFO:
        return "info"
    return "debug"


class _LogFormatter(logging.Formatter):
    """Formats records as "[hh:mm:ss.zzz] LEVEL    category: message"."""

    def format(self, record: logging.LogRecord) -> str:
        stamp = time.strftime("%H:%M:%S", self.converter(record.created))
        category = f"{record.name}: " if record.name != "root" else ""
        text = f"[{stamp}.{int(record.msecs):03d}] {_level_label(record.levelno)}{category}{record.getMessage()}"
        if record.exc_info:
            text += "\n" + self.formatException(record.exc_info)
        return text


class _RuleFilter(logging.Filter):
    def __init__(self, enabled: dict[str, bool]):
        super().__init__()
        self.enabled = dict(enabled)

    def filter(self, record: logging.LogRecord) -> bool:
        return self.enabled[_message_type(record.levelno)]


def _matches(pattern: str, category: str) -> bool:
    if pattern == "*":
        return True
    starts = pattern.startswith("*")
    ends = pattern.endswith("*")
    core = pattern[1 if starts else 0 : len(pattern) - 1 if ends else len(pattern)]
    if starts and ends:
        return core in category
    if starts:
        return category.endswith(core)
    if ends:
        return category.startswith(core)
    return category == pattern


def _parse_rules(rules: str) -> list[tuple[str, str | None, bool]]:
    parsed = []
    for line in rules.splitlines():
        line = line.strip()
        if not line or line.startswith("[") or "=" not in line:
            continue
        pattern, value = (part.strip() for part in line.split("=", 1))
        value = value.lower()
        if value not in ("true", "false") or not pattern:
            continue
        base, _, suffix = pattern.rpartition(".")
        if base and suffix in _DEFAULT_ENABLED:
            parsed.append((base, suffix, value == "true"))
        else:
            parsed.append((pattern, None, value == "true"))
    return parsed


class LogSettings:
    """Routes log output to the console and, once initialised, a log file."""

    def __init__(self):
        self.filepath = ""
        self._handlers: list[logging.Handler] = []

    def _install(self, handlers: list[logging.Handler]) -> None:
        root = logging.getLogger()
        for handler in self._handlers:
            root.removeHandler(handler)
            handler.close()
        formatter = _LogFormatter()
        for handler in handlers:
            handler.setFormatter(formatter)
            root.addHandler(handler)
        self._handlers = handlers

    def init(self, filepath) -> None:
        """Set the output format; with a filepath, start a fresh log file there."""
        if not filepath:
            self._install([logging.StreamHandler(sys.stderr)])
            return

        self.filepath = str(filepath)
        Path(self.filepath).unlink(missing_ok=True)
        self._install(
            [
                logging.StreamHandler(sys.stdout),
                logging.FileHandler(self.filepath, mode="a", encoding="utf-8"),
            ]
        )
        get_logger(UTILS).info("Log location: %s", self.filepath)

    def set_logging_rules(self, rules: str) -> None:
        """Apply "category[.type]=true|false" rules, one per line.

        Categories may use a leading or trailing "*"; later rules win.
        """
        if not rules:
            return
        parsed = _parse_rules(rules)
        for category in CATEGORIES:
            enabled = dict(_DEFAULT_ENABLED)
            for pattern, message_type, value in parsed:
                if not _matches(pattern, category):
                    continue
                if message_type is None:
                    enabled = dict.fromkeys(enabled, value)
                else:
                    enabled[message_type] = value

            logger = get_logger(category)
            for existing in list(logger.filters):
                if isinstance(existing, _RuleFilter):
                    logger.removeFilter(existing)
            logger.setLevel(logging.DEBUG)
            logger.addFilter(_RuleFilter(enabled))


_INSTANCE = LogSettings()


def get_log_settings() -> LogSettings:
    """Return the process-wide log settings."""
    return _INSTANCE