"""Table and JSON rendering of checked dependencies."""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from constants import Constants
from dependency import Dependency

UP_TO_DATE_MESSAGE = "All dependencies are up to date!"


class ANSIColor(Enum):
    """ANSI escape sequences used to highlight the latest version column."""
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"

    def apply(self, text: str) -> str:
        return f"{self.value}{text}{ANSIColor.RESET.value}"


def colors_supported(stream=None) -> bool:
    """True when stream is a terminal and NO_COLOR is not set."""
    if os.environ.get("NO_COLOR"):
        return False
    stream = stream or sys.stdout
    isatty = getattr(stream, "isatty", None)
    return bool(callable(isatty) and isatty())


def format_source_name(path: str) -> str:
    """Short label for a provenance path.

    ``Package.swift`` is labeled by its directory name and a pbxproj by its
    ``.xcodeproj`` bundle; anything else by its file name.
    """
    trimmed = path.rstrip("/")
    name = os.path.basename(trimmed)
    if name in (Constants.PACKAGE_SWIFT_FILE, Constants.PBXPROJ_FILE):
        return os.path.basename(os.path.dirname(trimmed))
    return name


def _version_text(version) -> str:
    return str(version) if version is not None else "unknown"


def _select(dependencies: Sequence[Dependency], show_all: bool) -> List[Dependency]:
    return list(dependencies) if show_all else [d for d in dependencies if d.is_outdated]


def format_table(
    dependencies: Sequence[Dependency],
    show_all: bool = False,
    use_colors: Optional[bool] = None,
) -> str:
    """Render dependencies as a pipe table.

    Only outdated dependencies are listed unless show_all is set. Outdated
    latest versions are colored green when the declared requirement allows
    them and red when it blocks them; blocked updates are also listed with
    the manifests that declare the blocking requirement.
    """
    if use_colors is None:
        use_colors = colors_supported()
    rows = _select(dependencies, show_all)
    if not rows:
        return UP_TO_DATE_MESSAGE

    headers = ("Package", "Current", "Latest")
    name_w = max([len(headers[0])] + [len(d.name) for d in rows])
    current_w = max([len(headers[1])] + [len(_version_text(d.current_version)) for d in rows])
    latest_w = max([len(headers[2])] + [len(_version_text(d.latest_version)) for d in rows])

    lines = [
        f"| {headers[0].ljust(name_w)} | {headers[1].ljust(current_w)} | {headers[2].ljust(latest_w)} |",
        f"|{'-' * (name_w + 2)}|{'-' * (current_w + 2)}|{'-' * (latest_w + 2)}|",
    ]

    for dep in rows:
        latest = _version_text(dep.latest_version).ljust(latest_w)
        if use_colors and dep.is_outdated and dep.version_requirement is not None:
            color = ANSIColor.GREEN if dep.can_auto_update else ANSIColor.RED
            latest = color.apply(latest)
        lines.append(
            f"| {dep.name.ljust(name_w)} | {_version_text(dep.current_version).ljust(current_w)} | {latest} |"
        )

    blocked = [
        d for d in rows
        if d.is_outdated and not d.can_auto_update and d.requirement_sources
    ]
    if blocked:
        lines.append("")
        lines.append("Blocked updates:")
        for dep in blocked:
            sources = ", ".join(format_source_name(p) for p in dep.requirement_sources)
            lines.append(f"  {dep.name}: {dep.version_requirement.description} ({sources})")

    return "\n".join(lines)


def _json_object(dep: Dependency, show_all: bool) -> Dict[str, Any]:
    obj: Dict[str, Any] = {
        "package": dep.name,
        "currentVersion": str(dep.current_version) if dep.current_version is not None else None,
        "latestVersion": str(dep.latest_version) if dep.latest_version is not None else None,
        "repositoryURL": dep.repository_url,
    }
    if show_all:
        obj["outdated"] = dep.is_outdated
    if dep.is_outdated and dep.version_requirement is not None:
        obj["canAutoUpdate"] = dep.can_auto_update
    return obj


def format_json(dependencies: Sequence[Dependency], show_all: bool = False) -> str:
    """Render dependencies as an indented JSON array with sorted keys."""
    objects = [_json_object(d, show_all) for d in _select(dependencies, show_all)]
    return json.dumps(objects, indent=2, sort_keys=True)
