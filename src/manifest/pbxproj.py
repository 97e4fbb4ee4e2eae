"""Extract Swift package references from Xcode ``project.pbxproj`` files.

Xcode stores remote package dependencies as ``XCRemoteSwiftPackageReference``
objects in the OpenStep-style property list:

    ABC123 /* XCRemoteSwiftPackageReference "swift-collections" */ = {
        isa = XCRemoteSwiftPackageReference;
        repositoryURL = "https://github.com/apple/swift-collections.git";
        requirement = {
            kind = upToNextMajorVersion;
            minimumVersion = 1.0.0;
        };
    };

Only these objects are inspected; the rest of the project graph is ignored.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional

from versioning.models import VersionRequirement
from versioning.parser import parse_version

from .models import ManifestDependency, PackageManifest

logger = logging.getLogger(__name__)

_ISA = re.compile(r"\bisa\s*=\s*(\w+)\s*;")
_REPOSITORY_URL = re.compile(r'\brepositoryURL\s*=\s*("?)([^";]+)\1\s*;')
_REQUIREMENT = re.compile(r"\brequirement\s*=\s*\{([^}]*)\}", re.DOTALL)
_ENTRY = re.compile(r'(\w+)\s*=\s*("?)([^";]*)\2\s*;')


def _requirement_fields(body: str) -> Dict[str, str]:
    return {m.group(1): m.group(3).strip() for m in _ENTRY.finditer(body)}


def _version(fields: Dict[str, str], key: str):
    raw = fields.get(key)
    return parse_version(raw) if raw else None


def map_requirement(fields: Optional[Dict[str, str]]) -> VersionRequirement:
    """Translate a pbxproj requirement dictionary into a VersionRequirement."""
    if not fields:
        return VersionRequirement.unknown()
    kind = fields.get("kind", "")

    if kind in ("upToNextMajorVersion", "upToNextMinorVersion"):
        version = _version(fields, "minimumVersion")
        if version is None:
            return VersionRequirement.unknown()
        if kind == "upToNextMajorVersion":
            return VersionRequirement.up_to_next_major(version)
        return VersionRequirement.up_to_next_minor(version)
    if kind == "exactVersion":
        version = _version(fields, "version")
        return VersionRequirement.exact(version) if version else VersionRequirement.unknown()
    if kind == "versionRange":
        lower = _version(fields, "minimumVersion")
        upper = _version(fields, "maximumVersion")
        if lower is None or upper is None:
            return VersionRequirement.unknown()
        return VersionRequirement.range(lower, upper)
    if kind == "branch" and fields.get("branch"):
        return VersionRequirement.branch(fields["branch"])
    if kind == "revision" and fields.get("revision"):
        return VersionRequirement.revision(fields["revision"])
    return VersionRequirement.unknown()


def parse_pbxproj(content: str, source_path: str = "") -> PackageManifest:
    """Return the remote package references declared in a pbxproj file.

    Args:
        content: Text of ``project.pbxproj``.
        source_path: Provenance label, normally the ``.xcodeproj`` path.

    Returns:
        PackageManifest with one declaration per remote package reference.
    """
    text = content or ""
    objects = list(_ISA.finditer(text))
    dependencies: List[ManifestDependency] = []

    for index, isa in enumerate(objects):
        if isa.group(1) != "XCRemoteSwiftPackageReference":
            continue
        end = objects[index + 1].start() if index + 1 < len(objects) else len(text)
        body = text[isa.end():end]

        url_match = _REPOSITORY_URL.search(body)
        if not url_match:
            logger.debug("Remote package reference without repositoryURL in %s", source_path)
            continue
        requirement_match = _REQUIREMENT.search(body)
        fields = _requirement_fields(requirement_match.group(1)) if requirement_match else None

        dependency = ManifestDependency(
            url=url_match.group(2).strip(),
            requirement=map_requirement(fields),
        )
        if source_path:
            dependency = dependency.adding_source_path(source_path)
        dependencies.append(dependency)

    return PackageManifest(dependencies=dependencies, source_path=source_path)
