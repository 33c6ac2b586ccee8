"""
Application configuration.

Everything configurable lives on AppConfig and is read from the environment
once at startup. Defaults match the hosted backend and the original web build.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

from sentirax.utils.file_utils import get_resource_path

logger = logging.getLogger(__name__)


DEFAULT_API_BASE = "https://sentirax-downloader-backend.onrender.com"
DEFAULT_PORT = 5173
DEFAULT_HOST = "0.0.0.0"
DEFAULT_REQUEST_TIMEOUT = 120


def _parse_log_levels(raw: Optional[str]) -> Dict[str, str]:
    """"api=DEBUG,server=WARNING" -> {"api": "DEBUG", "server": "WARNING"}"""
    levels: Dict[str, str] = {}
    for item in (raw or "").split(","):
        name, sep, level = item.partition("=")
        if sep and name.strip() and level.strip():
            levels[name.strip().lower()] = level.strip().upper()
    return levels


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default


@dataclass(frozen=True)
class AppConfig:
    """Runtime settings for the desktop app and the static asset server."""

    api_base: str = DEFAULT_API_BASE
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    web_root: Path = field(default_factory=lambda: get_resource_path("web"))
    log_dir: Path = field(default_factory=lambda: Path.home() / ".sentirax" / "logs")
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    log_levels: Dict[str, str] = field(default_factory=dict)

    # Hosts for which the backend returns no direct file; the source page URL
    # is used as the download target instead.
    page_url_fallback_hosts: Tuple[str, ...] = ("youtube",)

    @property
    def info_endpoint(self) -> str:
        return f"{self.api_base}/api/info"

    @property
    def download_endpoint(self) -> str:
        return f"{self.api_base}/api/download"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """
        Build a config from environment variables.

        Args:
            env: Mapping to read from (defaults to os.environ)

        Returns:
            AppConfig with unset variables left at their defaults
        """
        env = os.environ if env is None else env
        kwargs = {
            "api_base": (env.get("SENTIRAX_API_BASE") or DEFAULT_API_BASE).rstrip("/"),
            "host": env.get("SENTIRAX_HOST") or DEFAULT_HOST,
            "port": _env_int(env, "PORT", DEFAULT_PORT),
            "request_timeout": _env_int(env, "SENTIRAX_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
            "log_levels": _parse_log_levels(env.get("SENTIRAX_LOG_LEVELS")),
        }
        if env.get("SENTIRAX_WEB_ROOT"):
            kwargs["web_root"] = Path(env["SENTIRAX_WEB_ROOT"])
        if env.get("SENTIRAX_LOG_DIR"):
            kwargs["log_dir"] = Path(env["SENTIRAX_LOG_DIR"])
        return cls(**kwargs)
