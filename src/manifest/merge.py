"""Merge declarations found in several manifests of one project or workspace."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from .models import ManifestDependency, PackageManifest

logger = logging.getLogger(__name__)


def merge_manifests(manifests: Iterable[PackageManifest]) -> List[ManifestDependency]:
    """Combine per-file declarations into one list keyed by identity.

    Manifests are consumed in the given order. The first declaration of an
    identity fixes its requirement; later declarations only add their
    manifest path to the provenance. A later declaration with a different
    requirement is logged but does not replace the first one.

    Args:
        manifests: PackageManifest objects in discovery order.

    Returns:
        Merged declarations in order of first appearance.
    """
    merged: Dict[str, ManifestDependency] = {}

    for manifest in manifests:
        path = manifest.source_path
        for dependency in manifest.dependencies:
            identity = dependency.identity
            existing = merged.get(identity)
            if existing is None:
                merged[identity] = ManifestDependency(
                    url=dependency.url,
                    requirement=dependency.requirement,
                    source_paths=(path,) if path else (),
                )
                continue
            if dependency.requirement != existing.requirement:
                logger.info(
                    "Conflicting requirement for %s in %s (%s); keeping %s",
                    identity,
                    path or "<unknown>",
                    dependency.requirement.description,
                    existing.requirement.description,
                )
            if path:
                merged[identity] = existing.adding_source_path(path)

    return list(merged.values())
