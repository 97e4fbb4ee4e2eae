"""Data models for versioning and requirement checks."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class SemanticVersion:
    """Semantic version value.

    Equality compares all five fields. Ordering only looks at the numeric
    core and the prerelease tag; build metadata never affects precedence.
    Prerelease tags are ordered as plain strings, which is a simplification
    of the dot-separated identifier rules in semver 2.0.
    """
    major: int
    minor: int
    patch: int
    prerelease: Optional[str] = None
    build_metadata: Optional[str] = None

    def __str__(self) -> str:
        result = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease is not None:
            result += f"-{self.prerelease}"
        if self.build_metadata is not None:
            result += f"+{self.build_metadata}"
        return result

    @property
    def precedence_key(self) -> Tuple[int, int, int, bool, str]:
        """Sort key: a release sorts above any prerelease of the same core."""
        is_release = self.prerelease is None
        return (self.major, self.minor, self.patch, is_release, self.prerelease or "")

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    def __lt__(self, other: "SemanticVersion") -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.precedence_key < other.precedence_key

    def __le__(self, other: "SemanticVersion") -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.precedence_key <= other.precedence_key

    def __gt__(self, other: "SemanticVersion") -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.precedence_key > other.precedence_key

    def __ge__(self, other: "SemanticVersion") -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.precedence_key >= other.precedence_key


class RequirementKind(Enum):
    """Kinds of version requirement a manifest can declare."""
    UP_TO_NEXT_MAJOR = "upToNextMajor"
    UP_TO_NEXT_MINOR = "upToNextMinor"
    EXACT = "exact"
    RANGE = "range"
    BRANCH = "branch"
    REVISION = "revision"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class VersionRequirement:
    """A declared version requirement.

    ``lower`` carries the ``from`` version of the compatible-range kinds, the
    pinned version of ``EXACT`` and the inclusive bound of ``RANGE``;
    ``upper`` is the exclusive bound of ``RANGE``. ``ref`` holds the branch
    name or revision id. Use the classmethod constructors rather than
    building instances directly.
    """
    kind: RequirementKind
    lower: Optional[SemanticVersion] = None
    upper: Optional[SemanticVersion] = None
    ref: Optional[str] = None

    @classmethod
    def up_to_next_major(cls, from_version: SemanticVersion) -> "VersionRequirement":
        return cls(RequirementKind.UP_TO_NEXT_MAJOR, lower=from_version)

    @classmethod
    def up_to_next_minor(cls, from_version: SemanticVersion) -> "VersionRequirement":
        return cls(RequirementKind.UP_TO_NEXT_MINOR, lower=from_version)

    @classmethod
    def exact(cls, version: SemanticVersion) -> "VersionRequirement":
        return cls(RequirementKind.EXACT, lower=version)

    @classmethod
    def range(cls, lower: SemanticVersion, upper: SemanticVersion) -> "VersionRequirement":
        return cls(RequirementKind.RANGE, lower=lower, upper=upper)

    @classmethod
    def branch(cls, name: str) -> "VersionRequirement":
        return cls(RequirementKind.BRANCH, ref=name)

    @classmethod
    def revision(cls, revision_id: str) -> "VersionRequirement":
        return cls(RequirementKind.REVISION, ref=revision_id)

    @classmethod
    def unknown(cls) -> "VersionRequirement":
        return cls(RequirementKind.UNKNOWN)

    def is_satisfied_by(self, version: SemanticVersion) -> bool:
        """Return True when version is acceptable under this requirement.

        Branch, revision and unknown requirements carry no numeric bound and
        therefore accept every version.
        """
        kind = self.kind
        base = self.lower
        if kind == RequirementKind.UP_TO_NEXT_MAJOR:
            return version.major == base.major and version >= base
        if kind == RequirementKind.UP_TO_NEXT_MINOR:
            return (
                version.major == base.major
                and version.minor == base.minor
                and version >= base
            )
        if kind == RequirementKind.EXACT:
            return (
                version.major == base.major
                and version.minor == base.minor
                and version.patch == base.patch
            )
        if kind == RequirementKind.RANGE:
            return base <= version < self.upper
        return True

    @property
    def description(self) -> str:
        """Human-readable form used by the console output."""
        kind = self.kind
        if kind == RequirementKind.UP_TO_NEXT_MAJOR:
            return f"from: {self.lower} (up to next major)"
        if kind == RequirementKind.UP_TO_NEXT_MINOR:
            return f"from: {self.lower} (up to next minor)"
        if kind == RequirementKind.EXACT:
            return f"exact: {self.lower}"
        if kind == RequirementKind.RANGE:
            return f"{self.lower}..<{self.upper}"
        if kind == RequirementKind.BRANCH:
            return f"branch: {self.ref}"
        if kind == RequirementKind.REVISION:
            return f"revision: {(self.ref or '')[:7]}"
        return "unknown"

    def __str__(self) -> str:
        return self.description
