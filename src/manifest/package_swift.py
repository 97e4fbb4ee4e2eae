"""Best-effort extraction of dependency declarations from Package.swift.

This is a pattern recognizer for the common ``.package(...)`` shapes, not a
Swift parser. Each declaration is matched up to its first closing
parenthesis, so nested calls such as ``.upToNextMajor(from: "1.0.0")`` work
only because they close together with the declaration; computed arguments
are not understood.

Requirement recognizers run in a fixed priority order and the first one
that produces a value wins:

    branch -> revision -> exact -> range -> upToNextMinor
        -> upToNextMajor / bare ``from:`` -> unknown
"""

from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional, Sequence

from common.logging_utils import extra_context, is_debug_enabled
from versioning.models import VersionRequirement
from versioning.parser import parse_version

from .models import ManifestDependency, PackageManifest

logger = logging.getLogger(__name__)

_DECLARATION = re.compile(r"\.package\s*\([^)]+\)", re.DOTALL)

_URL_PATTERNS = [
    re.compile(r'url:\s*"([^"]+)"'),
    re.compile(r'"(https?://[^"]+)"'),
    re.compile(r'"(git@[^"]+)"'),
]
_BRANCH_PATTERNS = [
    re.compile(r'branch:\s*"([^"]+)"'),
    re.compile(r'\.branch\s*\(\s*"([^"]+)"\s*\)'),
]
_REVISION_PATTERNS = [
    re.compile(r'revision:\s*"([^"]+)"'),
    re.compile(r'\.revision\s*\(\s*"([^"]+)"\s*\)'),
]
_EXACT_PATTERNS = [
    re.compile(r'exact:\s*"([^"]+)"'),
    re.compile(r'\.exact\s*\(\s*"([^"]+)"\s*\)'),
]
# "1.0.0"..<"2.0.0" and the closed form "1.0.0"..."2.0.0"
_RANGE_PATTERN = re.compile(r'"([^"]+)"\s*\.\.[.<]\s*"([^"]+)"')
_UP_TO_NEXT_MINOR_PATTERN = re.compile(r'\.upToNextMinor\s*\(\s*from:\s*"([^"]+)"\s*\)')
_FROM_PATTERNS = [
    re.compile(r'\.upToNextMajor\s*\(\s*from:\s*"([^"]+)"\s*\)'),
    re.compile(r'from:\s*"([^"]+)"'),
]


def _first_capture(patterns: Sequence[re.Pattern], text: str) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def extract_url(declaration: str) -> Optional[str]:
    """Return the repository URL of a declaration, labeled form first."""
    return _first_capture(_URL_PATTERNS, declaration)


def _branch(declaration: str) -> Optional[VersionRequirement]:
    name = _first_capture(_BRANCH_PATTERNS, declaration)
    return VersionRequirement.branch(name) if name is not None else None


def _revision(declaration: str) -> Optional[VersionRequirement]:
    rev = _first_capture(_REVISION_PATTERNS, declaration)
    return VersionRequirement.revision(rev) if rev is not None else None


def _exact(declaration: str) -> Optional[VersionRequirement]:
    raw = _first_capture(_EXACT_PATTERNS, declaration)
    version = parse_version(raw) if raw is not None else None
    return VersionRequirement.exact(version) if version is not None else None


def _range(declaration: str) -> Optional[VersionRequirement]:
    match = _RANGE_PATTERN.search(declaration)
    if not match:
        return None
    lower = parse_version(match.group(1))
    upper = parse_version(match.group(2))
    if lower is None or upper is None:
        return None
    return VersionRequirement.range(lower, upper)


def _up_to_next_minor(declaration: str) -> Optional[VersionRequirement]:
    raw = _first_capture([_UP_TO_NEXT_MINOR_PATTERN], declaration)
    version = parse_version(raw) if raw is not None else None
    return VersionRequirement.up_to_next_minor(version) if version is not None else None


def _up_to_next_major(declaration: str) -> Optional[VersionRequirement]:
    raw = _first_capture(_FROM_PATTERNS, declaration)
    version = parse_version(raw) if raw is not None else None
    return VersionRequirement.up_to_next_major(version) if version is not None else None


_REQUIREMENT_EXTRACTORS: List[Callable[[str], Optional[VersionRequirement]]] = [
    _branch,
    _revision,
    _exact,
    _range,
    _up_to_next_minor,
    _up_to_next_major,
]


def extract_requirement(declaration: str) -> VersionRequirement:
    """Run the recognizers in priority order; fall back to unknown."""
    for extractor in _REQUIREMENT_EXTRACTORS:
        requirement = extractor(declaration)
        if requirement is not None:
            return requirement
    return VersionRequirement.unknown()


def parse_declaration(declaration: str) -> Optional[ManifestDependency]:
    """Turn one ``.package(...)`` snippet into a declaration, or None without a URL."""
    url = extract_url(declaration)
    if url is None:
        return None
    return ManifestDependency(url=url, requirement=extract_requirement(declaration))


def parse_package_swift(content: str, source_path: str = "") -> PackageManifest:
    """Extract every recognizable dependency declaration from Package.swift text.

    Args:
        content: Full text of the manifest.
        source_path: Path recorded as provenance on each declaration.

    Returns:
        PackageManifest with declarations in order of appearance.
    """
    dependencies: List[ManifestDependency] = []
    for match in _DECLARATION.finditer(content or ""):
        dependency = parse_declaration(match.group(0))
        if dependency is None:
            if is_debug_enabled(logger):
                logger.debug(
                    "Skipping declaration without URL",
                    extra=extra_context(
                        event="parse_skip",
                        component="package_swift",
                        source=source_path or None,
                        offset=match.start(),
                    ),
                )
            continue
        if source_path:
            dependency = dependency.adding_source_path(source_path)
        dependencies.append(dependency)
    return PackageManifest(dependencies=dependencies, source_path=source_path)
