"""
Categorized logging for the desktop app and the static server.

Each subsystem is a category owning one or more logger name prefixes.
Levels are set on the prefix loggers, so every module logger below a
prefix inherits its category's level without being listed here.

Output goes to a daily rotating file (seven days kept) and the console.
"""
import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple


class LoggerCategory:
    CORE = "core"          # config, context, flows, results, session store
    API = "api"            # backend client
    NETWORK = "network"    # shared requests session
    SERVER = "server"      # static asset server
    DOWNLOAD = "download"  # download trigger
    UI = "ui"              # window, views, workers
    PREVIEW = "preview"    # preview selection, overlay, players


DEFAULT_LOG_LEVELS: Dict[str, int] = {
    LoggerCategory.CORE: logging.INFO,
    LoggerCategory.API: logging.INFO,
    LoggerCategory.NETWORK: logging.INFO,
    LoggerCategory.SERVER: logging.INFO,
    LoggerCategory.DOWNLOAD: logging.INFO,
    LoggerCategory.UI: logging.WARNING,
    LoggerCategory.PREVIEW: logging.INFO,
}

# Longer prefixes win over shorter ones (sentirax.ui.preview is PREVIEW, not UI).
CATEGORY_PREFIXES: Dict[str, Tuple[str, ...]] = {
    LoggerCategory.CORE: ("sentirax.core",),
    LoggerCategory.API: ("sentirax.core.api",),
    LoggerCategory.NETWORK: ("sentirax.core.http_client",),
    LoggerCategory.SERVER: ("sentirax.core.static_server",),
    LoggerCategory.DOWNLOAD: ("sentirax.core.downloads",),
    LoggerCategory.UI: ("sentirax.ui",),
    LoggerCategory.PREVIEW: ("sentirax.core.preview", "sentirax.ui.preview"),
}

NOISY_LIBRARIES = ("urllib3", "requests", "aiohttp", "asyncio", "qasync")

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
LOG_FILE_NAME = "sentirax.log"


def category_for(logger_name: str) -> Optional[str]:
    """Category owning a logger name, by longest matching prefix."""
    best, best_len = None, -1
    for category, prefixes in CATEGORY_PREFIXES.items():
        for prefix in prefixes:
            if (logger_name == prefix or logger_name.startswith(prefix + ".")) and len(prefix) > best_len:
                best, best_len = category, len(prefix)
    return best


def _category_loggers(category: str) -> Iterator[logging.Logger]:
    for prefix in CATEGORY_PREFIXES.get(category, ()):
        yield logging.getLogger(prefix)


class LoggingManager:
    """Owns the category levels and installs the root handlers."""

    def __init__(self, log_dir: Optional[Path] = None, levels: Optional[Dict[str, str]] = None):
        """
        Args:
            log_dir: Where sentirax.log is written; created if missing
            levels: Level-name overrides per category, e.g. {"api": "DEBUG"}.
                Unknown categories and unknown level names are ignored.
        """
        self.log_dir = Path(log_dir) if log_dir else Path.home() / ".sentirax" / "logs"
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._levels: Dict[str, int] = dict(DEFAULT_LOG_LEVELS)
        for category, name in (levels or {}).items():
            level = logging.getLevelName(str(name).upper())
            if category in self._levels and isinstance(level, int):
                self._levels[category] = level

    @property
    def log_file(self) -> Path:
        return self.log_dir / LOG_FILE_NAME

    def get_category_level(self, category: str) -> int:
        return self._levels.get(category, logging.INFO)

    def set_category_level(self, category: str, level: int):
        self._levels[category] = level
        for logger in _category_loggers(category):
            logger.setLevel(level)

    def get_all_levels(self) -> Dict[str, int]:
        return dict(self._levels)

    def _build_handlers(self):
        formatter = logging.Formatter(LOG_FORMAT)
        file_handler = TimedRotatingFileHandler(
            self.log_file,
            when="midnight",
            backupCount=7,
            encoding="utf-8",
        )
        console_handler = logging.StreamHandler()
        for handler in (file_handler, console_handler):
            handler.setFormatter(formatter)
        return file_handler, console_handler

    def setup_logging(self, root_level: int = logging.INFO):
        """Replace the root handlers and apply every category level."""
        root = logging.getLogger()
        root.setLevel(root_level)
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in self._build_handlers():
            root.addHandler(handler)

        for category, level in self._levels.items():
            for logger in _category_loggers(category):
                logger.setLevel(level)
        for name in NOISY_LIBRARIES:
            logging.getLogger(name).setLevel(logging.WARNING)


_logging_manager: Optional[LoggingManager] = None


def get_logging_manager(log_dir: Optional[Path] = None, levels: Optional[Dict[str, str]] = None) -> LoggingManager:
    """Process-wide manager; arguments only matter on the first call."""
    global _logging_manager
    if _logging_manager is None:
        _logging_manager = LoggingManager(log_dir=log_dir, levels=levels)
    return _logging_manager


def setup_logging(log_dir: Optional[Path] = None, levels: Optional[Dict[str, str]] = None) -> LoggingManager:
    manager = get_logging_manager(log_dir, levels)
    manager.setup_logging()
    return manager
