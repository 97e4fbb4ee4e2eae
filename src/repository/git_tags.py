"""List remote tags with ``git ls-remote``.

Tag fetchers expose a single ``fetch_tags(repository_url)`` method returning
tag names and raising ``TagFetchError`` on any failure. The version checker
treats every failure the same way, so no finer error types exist.
"""
from __future__ import annotations

import logging
import os
import subprocess
from typing import List, Optional, Protocol

from constants import Constants
from common.logging_utils import Timer, extra_context, is_debug_enabled, safe_url

logger = logging.getLogger(__name__)

_TAG_REF_PREFIX = "refs/tags/"


class TagFetchError(Exception):
    """Raised when the tags of a repository cannot be listed."""

    def __init__(self, repository_url: str, reason: str = ""):
        self.repository_url = repository_url
        self.reason = reason
        message = f"Failed to fetch tags from: {safe_url(repository_url)}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class TagFetcher(Protocol):
    """Anything able to list tag names for a repository URL."""

    def fetch_tags(self, repository_url: str) -> List[str]:
        ...


def parse_ls_remote(output: str) -> List[str]:
    """Extract tag names from ``git ls-remote --tags --refs`` output.

    Each line has the form ``<sha>\\trefs/tags/<name>``; other lines are ignored.
    """
    tags = []
    for line in output.splitlines():
        parts = line.split("\t")
        if len(parts) != 2:
            continue
        ref = parts[1].strip()
        if ref.startswith(_TAG_REF_PREFIX):
            tags.append(ref[len(_TAG_REF_PREFIX):])
    return tags


class GitTagFetcher:
    """Tag fetcher backed by the git command line client."""

    def __init__(self, executable: Optional[str] = None, timeout: Optional[int] = None):
        self.executable = executable or Constants.GIT_EXECUTABLE
        self.timeout = timeout if timeout is not None else Constants.GIT_TIMEOUT_SEC

    def fetch_tags(self, repository_url: str) -> List[str]:
        """Return tag names of repository_url.

        Raises:
            TagFetchError: git is missing, timed out or exited non-zero.
        """
        cmd = [self.executable, "ls-remote", "--tags", "--refs", repository_url]
        # Never block on a credential prompt
        env = dict(os.environ, GIT_TERMINAL_PROMPT="0")
        with Timer() as t:
            try:
                result = subprocess.run(  # noqa: S603
                    cmd,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.DEVNULL,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                    timeout=self.timeout,
                    env=env,
                    check=False,
                )
            except FileNotFoundError as e:
                raise TagFetchError(repository_url, f"{self.executable} not found") from e
            except subprocess.TimeoutExpired as e:
                raise TagFetchError(repository_url, f"timed out after {self.timeout}s") from e

        if result.returncode != 0:
            raise TagFetchError(repository_url, f"git exited with {result.returncode}")

        tags = parse_ls_remote(result.stdout or "")
        if is_debug_enabled(logger):
            logger.debug(
                "Fetched tags",
                extra=extra_context(
                    event="tags_fetched",
                    component="git_tags",
                    target=safe_url(repository_url),
                    count=len(tags),
                    duration_ms=t.duration_ms(),
                ),
            )
        return tags
