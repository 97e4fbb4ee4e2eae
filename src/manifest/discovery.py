"""Discover and load the manifests that declare requirements for a lock file.

A lock file belongs either to a Swift package (``Package.swift`` above it),
an Xcode project (``project.pbxproj`` inside the enclosing ``.xcodeproj``)
or a workspace whose members may be any mix of both. The order returned by
``discover_manifest_sources`` is the order used for merging.
"""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from typing import Iterator, List, Optional

from constants import Constants

from .models import ManifestKind, ManifestSource, PackageManifest
from .package_swift import parse_package_swift
from .pbxproj import parse_pbxproj

logger = logging.getLogger(__name__)


def _walk_up(path: str) -> Iterator[str]:
    """Yield path's directory and its parents, at most SEARCH_DEPTH levels."""
    current = os.path.dirname(os.path.abspath(path))
    for _ in range(Constants.SEARCH_DEPTH):
        yield current
        parent = os.path.dirname(current)
        if parent == current:
            return
        current = parent


def _children(directory: str, suffix: str) -> List[str]:
    try:
        entries = sorted(os.listdir(directory))
    except OSError:
        return []
    return [
        os.path.join(directory, e)
        for e in entries
        if e.endswith(suffix) and os.path.isdir(os.path.join(directory, e))
    ]


def _is_project_workspace(path: str) -> bool:
    """True for the workspace Xcode embeds in every .xcodeproj bundle."""
    return os.path.dirname(path).endswith(Constants.XCODEPROJ_SUFFIX)


def locate_workspace(resolved_path: str) -> Optional[str]:
    """Return the ``.xcworkspace`` enclosing or sitting beside the lock file path."""
    for directory in _walk_up(resolved_path):
        if directory.endswith(Constants.XCWORKSPACE_SUFFIX) and not _is_project_workspace(directory):
            return directory
        for workspace in _children(directory, Constants.XCWORKSPACE_SUFFIX):
            if not _is_project_workspace(workspace):
                return workspace
    return None


def locate_xcodeproj(resolved_path: str) -> Optional[str]:
    """Return the ``.xcodeproj`` enclosing or sitting beside the lock file path."""
    for directory in _walk_up(resolved_path):
        if directory.endswith(Constants.XCODEPROJ_SUFFIX):
            return directory
        projects = _children(directory, Constants.XCODEPROJ_SUFFIX)
        if projects:
            return projects[0]
    return None


def locate_package_swift(resolved_path: str) -> Optional[str]:
    """Return the nearest Package.swift at or above the lock file's directory."""
    for directory in _walk_up(resolved_path):
        candidate = os.path.join(directory, Constants.PACKAGE_SWIFT_FILE)
        if os.path.isfile(candidate):
            return candidate
    return None


def _resolve_location(location: str, group_dir: str, container_dir: str) -> Optional[str]:
    kind, _, value = location.partition(":")
    if kind == "group":
        return os.path.normpath(os.path.join(group_dir, value))
    if kind == "container":
        return os.path.normpath(os.path.join(container_dir, value))
    if kind == "absolute":
        return os.path.normpath(value)
    # "self:" points at the workspace itself and carries no manifest
    return None


def workspace_members(workspace_path: str) -> List[str]:
    """Return the file references listed in a workspace, in document order.

    Groups nest: a ``group:`` location is relative to the enclosing group.
    """
    data_path = os.path.join(workspace_path, Constants.WORKSPACE_DATA_FILE)
    try:
        tree = ET.parse(data_path)
    except (OSError, ET.ParseError) as e:
        logger.warning("Cannot read workspace %s: %s", workspace_path, e)
        return []

    container_dir = os.path.dirname(os.path.abspath(workspace_path))
    members: List[str] = []

    def visit(element, group_dir: str) -> None:
        for child in element:
            location = child.get("location", "")
            if child.tag == "FileRef":
                resolved = _resolve_location(location, group_dir, container_dir)
                if resolved:
                    members.append(resolved)
            elif child.tag == "Group":
                nested = _resolve_location(location, group_dir, container_dir) if location else None
                visit(child, nested or group_dir)

    visit(tree.getroot(), container_dir)
    return members


def _source_for_member(member: str) -> Optional[ManifestSource]:
    if member.endswith(Constants.XCODEPROJ_SUFFIX):
        if os.path.isfile(os.path.join(member, Constants.PBXPROJ_FILE)):
            return ManifestSource(path=member, kind=ManifestKind.PBXPROJ)
        return None
    if os.path.basename(member) == Constants.PACKAGE_SWIFT_FILE and os.path.isfile(member):
        return ManifestSource(path=member, kind=ManifestKind.PACKAGE_SWIFT)
    package_swift = os.path.join(member, Constants.PACKAGE_SWIFT_FILE)
    if os.path.isdir(member) and os.path.isfile(package_swift):
        return ManifestSource(path=package_swift, kind=ManifestKind.PACKAGE_SWIFT)
    return None


def discover_manifest_sources(resolved_path: str) -> List[ManifestSource]:
    """Return the manifests relevant to a lock file, in merge order.

    Workspace members come first (in workspace order); without a workspace
    the enclosing Xcode project is used. The nearest Package.swift is always
    appended. Duplicates keep their first position.
    """
    sources: List[ManifestSource] = []

    workspace = locate_workspace(resolved_path)
    if workspace:
        for member in workspace_members(workspace):
            source = _source_for_member(member)
            if source:
                sources.append(source)
    else:
        xcodeproj = locate_xcodeproj(resolved_path)
        if xcodeproj and os.path.isfile(os.path.join(xcodeproj, Constants.PBXPROJ_FILE)):
            sources.append(ManifestSource(path=xcodeproj, kind=ManifestKind.PBXPROJ))

    package_swift = locate_package_swift(resolved_path)
    if package_swift:
        sources.append(ManifestSource(path=package_swift, kind=ManifestKind.PACKAGE_SWIFT))

    unique: List[ManifestSource] = []
    seen = set()
    for source in sources:
        key = os.path.abspath(source.path)
        if key in seen:
            continue
        seen.add(key)
        unique.append(source)
    logger.debug("Discovered %d manifest source(s) for %s", len(unique), resolved_path)
    return unique


def load_manifest(source: ManifestSource) -> PackageManifest:
    """Read and extract one manifest; unreadable files yield an empty manifest."""
    if source.kind == ManifestKind.PBXPROJ:
        file_path = os.path.join(source.path, Constants.PBXPROJ_FILE)
    else:
        file_path = source.path
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Skipping unreadable manifest %s: %s", file_path, e)
        return PackageManifest(dependencies=[], source_path=source.path)

    if source.kind == ManifestKind.PBXPROJ:
        return parse_pbxproj(content, source_path=source.path)
    return parse_package_swift(content, source_path=source.path)


def load_manifests(sources: List[ManifestSource]) -> List[PackageManifest]:
    return [load_manifest(source) for source in sources]
