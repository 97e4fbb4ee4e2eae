"""Locate the Package.resolved file for a path given on the command line."""

from __future__ import annotations

import logging
import os
from typing import List, Optional

from constants import Constants

from .models import ResolvedFileNotFoundError

logger = logging.getLogger(__name__)


def _bundles(directory: str, suffix: str) -> List[str]:
    """Return sorted paths of directories in directory ending with suffix."""
    try:
        entries = sorted(os.listdir(directory))
    except OSError:
        return []
    return [
        os.path.join(directory, e)
        for e in entries
        if e.endswith(suffix) and os.path.isdir(os.path.join(directory, e))
    ]


def _xcodeproj_resolved(xcodeproj: str) -> str:
    return os.path.join(xcodeproj, Constants.XCODEPROJ_RESOLVED_PATH)


def _xcworkspace_resolved(xcworkspace: str) -> str:
    return os.path.join(xcworkspace, Constants.XCWORKSPACE_RESOLVED_PATH)


def _workspace_resolved_upwards(start: str) -> Optional[str]:
    """Walk from start towards the root looking for a workspace lock file."""
    current = os.path.abspath(start)
    for _ in range(Constants.SEARCH_DEPTH):
        for workspace in _bundles(current, Constants.XCWORKSPACE_SUFFIX):
            candidate = _xcworkspace_resolved(workspace)
            if os.path.isfile(candidate):
                return candidate
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    return None


def locate_resolved_file(path: str) -> str:
    """Return the Package.resolved path to use for path.

    Resolution order for a directory: a Package.resolved directly inside
    it, then the nearest ``.xcworkspace`` lock file in it or any parent
    (so a workspace wins over a project), then an ``.xcodeproj`` in the
    directory itself.

    Raises:
        ResolvedFileNotFoundError: Nothing suitable exists.
    """
    path = os.path.normpath(path)

    if os.path.isfile(path):
        if os.path.basename(path) == Constants.RESOLVED_FILE:
            return path
        raise ResolvedFileNotFoundError(path)

    if path.endswith(Constants.XCODEPROJ_SUFFIX):
        candidate = _xcodeproj_resolved(path)
        if os.path.isfile(candidate):
            return candidate
        raise ResolvedFileNotFoundError(candidate)

    if path.endswith(Constants.XCWORKSPACE_SUFFIX):
        candidate = _xcworkspace_resolved(path)
        if os.path.isfile(candidate):
            return candidate
        raise ResolvedFileNotFoundError(candidate)

    if not os.path.isdir(path):
        raise ResolvedFileNotFoundError(path)

    direct = os.path.join(path, Constants.RESOLVED_FILE)
    if os.path.isfile(direct):
        return direct

    workspace_resolved = _workspace_resolved_upwards(path)
    if workspace_resolved:
        workspace = workspace_resolved[: -len(Constants.XCWORKSPACE_RESOLVED_PATH)].rstrip(os.sep)
        if os.path.dirname(workspace) != os.path.abspath(path):
            logger.info("No lock file in %s, using parent workspace %s", path, workspace)
        else:
            logger.debug("Using workspace lock file %s", workspace_resolved)
        return workspace_resolved

    for xcodeproj in _bundles(path, Constants.XCODEPROJ_SUFFIX):
        candidate = _xcodeproj_resolved(xcodeproj)
        if os.path.isfile(candidate):
            return candidate

    raise ResolvedFileNotFoundError(path)
