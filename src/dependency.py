"""Dependency record joining lock file state, manifest requirements and the latest tag."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from manifest.models import ManifestDependency
from resolved.models import Pin
from versioning.models import SemanticVersion, VersionRequirement
from versioning.parser import parse_version


@dataclass(frozen=True)
class Dependency:
    """One pinned dependency and what is known about its newer versions.

    Instances are immutable; ``with_latest_version`` and
    ``with_version_requirement`` return enriched copies.
    """
    name: str
    repository_url: str
    current_version: Optional[SemanticVersion]
    current_revision: str
    latest_version: Optional[SemanticVersion] = None
    branch: Optional[str] = None
    version_requirement: Optional[VersionRequirement] = None
    requirement_sources: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_pin(cls, pin: Pin) -> "Dependency":
        version = parse_version(pin.state.version) if pin.state.version else None
        return cls(
            name=pin.identity,
            repository_url=pin.location,
            current_version=version,
            current_revision=pin.state.revision,
            branch=pin.state.branch,
        )

    @property
    def is_outdated(self) -> bool:
        """True when a strictly newer tagged version than the pinned one exists."""
        if self.current_version is None or self.latest_version is None:
            return False
        return self.latest_version > self.current_version

    @property
    def can_auto_update(self) -> bool:
        """True unless the known requirement rejects the known latest version."""
        if self.latest_version is None or self.version_requirement is None:
            return True
        return self.version_requirement.is_satisfied_by(self.latest_version)

    def with_latest_version(self, version: Optional[SemanticVersion]) -> "Dependency":
        return replace(self, latest_version=version)

    def with_version_requirement(
        self,
        requirement: Optional[VersionRequirement],
        sources: Sequence[str] = (),
    ) -> "Dependency":
        return replace(self, version_requirement=requirement, requirement_sources=tuple(sources))


def dependencies_from_pins(pins: Iterable[Pin]) -> List[Dependency]:
    return [Dependency.from_pin(pin) for pin in pins]


def apply_requirements(
    dependencies: Iterable[Dependency],
    declarations: Iterable[ManifestDependency],
) -> List[Dependency]:
    """Attach each dependency's matching manifest requirement and provenance.

    Matching compares the lowercased lock file identity with the identity
    derived from the declaration URL. Unmatched dependencies are returned
    unchanged.
    """
    by_identity: Dict[str, ManifestDependency] = {}
    for declaration in declarations:
        by_identity.setdefault(declaration.identity, declaration)

    result = []
    for dependency in dependencies:
        declaration = by_identity.get(dependency.name.lower())
        if declaration is None:
            result.append(dependency)
            continue
        result.append(
            dependency.with_version_requirement(declaration.requirement, declaration.source_paths)
        )
    return result
