"""Version string parsing utilities."""

import re
from typing import Iterable, List, Optional

from .models import SemanticVersion

_NUMERIC = re.compile(r"[0-9]+")


def _to_int(component: str) -> Optional[int]:
    if _NUMERIC.fullmatch(component):
        return int(component)
    return None


def parse_version(text: str) -> Optional[SemanticVersion]:
    """Parse a version or tag name into a SemanticVersion.

    Accepts an optional leading ``v``/``V``, build metadata after the first
    ``+`` and a prerelease tag after the first ``-``. Missing minor/patch
    default to 0. Returns None when the major component is not numeric.

    Note: a minor or patch component that is present but not numeric is
    read as 0 instead of rejecting the string (``1.x`` parses as 1.0.0).
    """
    if not text:
        return None
    rest = text
    if rest[0] in ("v", "V"):
        rest = rest[1:]

    build_metadata = None
    if "+" in rest:
        rest, build_metadata = rest.split("+", 1)

    prerelease = None
    if "-" in rest:
        rest, prerelease = rest.split("-", 1)

    # Empty segments are skipped, so "1..2" reads as 1.2.0
    components = [c for c in rest.split(".") if c]
    if not components:
        return None
    major = _to_int(components[0])
    if major is None:
        return None
    minor = (_to_int(components[1]) or 0) if len(components) >= 2 else 0
    patch = (_to_int(components[2]) or 0) if len(components) >= 3 else 0

    return SemanticVersion(
        major=major,
        minor=minor,
        patch=patch,
        prerelease=prerelease,
        build_metadata=build_metadata,
    )


def parse_versions(texts: Iterable[str]) -> List[SemanticVersion]:
    """Parse many strings, silently dropping those that are not versions."""
    parsed = []
    for text in texts:
        version = parse_version(text)
        if version is not None:
            parsed.append(version)
    return parsed
