"""Shared HTTP helpers used by the hosting API tag clients.

Encapsulates timeout, retry and caching so repository clients avoid
duplicating try/except blocks. Failures are reported through the returned
status code (0 when no response was received) rather than exceptions.
"""
from __future__ import annotations

import json
import logging
import threading
import time
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


# Simple in-memory cache for HTTP responses, shared by worker threads
_http_cache: Dict[str, Tuple[Any, float]] = {}
_cache_lock = threading.Lock()


def _get_cache_key(method: str, url: str, headers: Optional[Dict[str, str]] = None) -> str:
    """Generate cache key from request parameters."""
    headers_str = str(sorted(headers.items())) if headers else ""
    return f"{method}:{url}:{headers_str}"


def _is_cache_valid(cache_entry: Tuple[Any, float]) -> bool:
    """Check if cache entry is still valid."""
    _, cached_time = cache_entry
    return time.time() - cached_time < Constants.HTTP_CACHE_TTL_SEC


def clear_cache() -> None:
    with _cache_lock:
        _http_cache.clear()


def robust_get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], str]:
    """Perform GET request with timeout, retries, and caching with DEBUG traces."""
    cache_key = _get_cache_key('GET', url, headers)
    safe_target = safe_url(url)

    with _cache_lock:
        entry = _http_cache.get(cache_key)
    if entry is not None and _is_cache_valid(entry):
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP cache hit",
                extra=extra_context(
                    event="cache_hit",
                    component="http_client",
                    action="GET",
                    target=safe_target
                )
            )
        return entry[0]

    last_exception = None

    for attempt in range(Constants.HTTP_RETRY_MAX):
        with Timer() as t:
            try:
                response = requests.get(
                    url,
                    timeout=Constants.REQUEST_TIMEOUT,
                    headers=headers,
                    **kwargs
                )
            except requests.Timeout:
                last_exception = "timeout"
                logger.debug("HTTP timeout for %s (attempt %d)", safe_target, attempt + 1)
                continue
            except requests.RequestException as exc:  # includes ConnectionError
                last_exception = str(exc)
                logger.debug("HTTP request exception for %s (attempt %d)", safe_target, attempt + 1)
                continue

        if response.status_code >= 500:
            last_exception = f"HTTP {response.status_code}"
            continue

        result = (response.status_code, dict(response.headers), response.text)
        with _cache_lock:
            _http_cache[cache_key] = (result, time.time())

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response ok",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    outcome="success",
                    status_code=response.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target
                )
            )
        return result

    # All retries failed
    return 0, {}, f"Request failed after {Constants.HTTP_RETRY_MAX} attempts: {last_exception}"


def get_json(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], Optional[Any]]:
    """Perform GET request and parse JSON response.

    Args:
        url: Target URL
        headers: Optional request headers
        **kwargs: Additional requests.get parameters

    Returns:
        Tuple of (status_code, headers_dict, parsed_json_or_none)
    """
    status_code, response_headers, text = robust_get(url, headers=headers, **kwargs)

    if status_code == 200 and text:
        try:
            return status_code, response_headers, json.loads(text)
        except json.JSONDecodeError:
            logger.debug("JSON decode error for %s", safe_url(url))
            return status_code, response_headers, None

    return status_code, response_headers, None
