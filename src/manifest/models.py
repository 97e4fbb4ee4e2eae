"""Data models for dependency declarations found in manifests."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Tuple

from versioning.models import VersionRequirement

_PATH_SEPARATORS = re.compile(r"[/:]")


def identity_from_url(url: str) -> str:
    """Derive the join key used by Package.resolved pins from a repository URL.

    Strips a trailing ``.git``, keeps the last path segment and lowercases it.
    Both ``https://host/owner/repo`` and ``git@host:owner/repo`` forms work.
    """
    trimmed = url.strip().rstrip("/")
    if trimmed.lower().endswith(".git"):
        trimmed = trimmed[:-4]
    segments = [s for s in _PATH_SEPARATORS.split(trimmed) if s]
    name = segments[-1] if segments else trimmed
    return name.lower()


@dataclass(frozen=True)
class ManifestDependency:
    """A single dependency declaration and the manifests that declared it."""
    url: str
    requirement: VersionRequirement
    source_paths: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def identity(self) -> str:
        return identity_from_url(self.url)

    def adding_source_path(self, path: str) -> "ManifestDependency":
        """Return a copy with path appended to the provenance, unless already present."""
        if path in self.source_paths:
            return self
        return replace(self, source_paths=self.source_paths + (path,))


class ManifestKind(Enum):
    """Manifest formats a declaration can be extracted from."""
    PACKAGE_SWIFT = "package_swift"
    PBXPROJ = "pbxproj"


@dataclass(frozen=True)
class ManifestSource:
    """A manifest file on disk; ``path`` doubles as the provenance label."""
    path: str
    kind: ManifestKind


@dataclass
class PackageManifest:
    """Declarations extracted from one manifest file, in file order."""
    dependencies: List[ManifestDependency] = field(default_factory=list)
    source_path: str = ""
