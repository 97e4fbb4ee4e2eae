"""Logging helpers shared by the CLI, scanners and tag fetchers.

Keeps structured DEBUG traces consistent across modules: callers guard
expensive payloads with ``is_debug_enabled`` and attach fields through
``extra_context``. URLs are always passed through ``safe_url`` before they
reach a log record because repository locations may embed credentials.
"""
from __future__ import annotations

import logging
import os
import re
import time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from constants import Constants

_SECRET_PARAM = re.compile(r"(?i)((?:token|access_token|private_token|key)=)[^&\s]+")


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once, honouring SPM_OUTDATED_LOG_LEVEL."""
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "WARNING").upper()
    level_value = getattr(logging, level_name, logging.WARNING)
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level_value)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted for logger."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` mapping, dropping empty values."""
    return {k: v for k, v in fields.items() if v is not None}


def redact(text: str) -> str:
    """Mask token-like query parameters in free text."""
    if not text:
        return text
    return _SECRET_PARAM.sub(r"\1***", text)


def safe_url(url: str) -> str:
    """Strip userinfo and secret query parameters from a URL for logging.

    scp-style git locations (``git@host:owner/repo``) carry no secret and
    are returned unchanged.
    """
    if not url or "://" not in url:
        return url
    try:
        parts = urlsplit(url)
    except ValueError:
        return redact(url)
    netloc = parts.netloc
    if "@" in netloc:
        netloc = "***@" + netloc.rsplit("@", 1)[1]
    return urlunsplit((parts.scheme, netloc, parts.path, redact(parts.query), parts.fragment))


class Timer:
    """Context manager measuring wall-clock duration in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
