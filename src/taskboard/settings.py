from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - TASKBOARD_API_URL: base URL of the task store used by the client. Default 'http://localhost:8000'
    - TASKBOARD_POLL_INTERVAL_SECONDS: seconds between background refreshes (default: 60)
    - TASKBOARD_REQUEST_TIMEOUT_SECONDS: per-request HTTP timeout (default: 10)
    - TASKBOARD_LOG_LEVEL: console log level name (default: INFO)
    - TASKBOARD_LOG_DIR: directory for the full debug log file; unset disables the file log
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    """

    api_base_url: str
    poll_interval_seconds: float
    request_timeout_seconds: float
    log_level: str
    log_dir: Optional[str]
    cors_allow_origins: List[str]


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_float(value: str, default: float) -> float:
    try:
        parsed = float(value.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        # Star will be handled in main via allow_origins=["*"]
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    api_base_url = _get_env("TASKBOARD_API_URL", "http://localhost:8000").strip().rstrip("/")
    poll_interval = _parse_float(_get_env("TASKBOARD_POLL_INTERVAL_SECONDS", "60"), 60.0)
    timeout = _parse_float(_get_env("TASKBOARD_REQUEST_TIMEOUT_SECONDS", "10"), 10.0)
    log_level = _get_env("TASKBOARD_LOG_LEVEL", "INFO").strip().upper()
    log_dir = os.getenv("TASKBOARD_LOG_DIR") or None
    origins = _parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*"))

    return Settings(
        api_base_url=api_base_url,
        poll_interval_seconds=poll_interval,
        request_timeout_seconds=timeout,
        log_level=log_level,
        log_dir=log_dir,
        cors_allow_origins=origins,
    )
