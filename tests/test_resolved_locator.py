"""Tests for locating the Package.resolved file."""

import logging
import os

import pytest

from resolved.locator import locate_resolved_file
from resolved.models import ResolvedFileNotFoundError

LOCK = '{"pins": [], "version": 2}'


def touch(path):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(LOCK)
    return path


def project_lock(root, name="App"):
    return touch(os.path.join(root, f"{name}.xcodeproj", "project.xcworkspace",
                              "xcshareddata", "swiftpm", "Package.resolved"))


def workspace_lock(root, name="App"):
    return touch(os.path.join(root, f"{name}.xcworkspace", "xcshareddata", "swiftpm", "Package.resolved"))


class TestLocateResolvedFile:
    """Precedence rules for locate_resolved_file."""

    def test_explicit_file(self, tmp_path):
        lock = touch(str(tmp_path / "Package.resolved"))
        assert locate_resolved_file(lock) == lock

    def test_other_file_rejected(self, tmp_path):
        other = touch(str(tmp_path / "Package.swift"))
        with pytest.raises(ResolvedFileNotFoundError):
            locate_resolved_file(other)

    def test_package_directory(self, tmp_path):
        lock = touch(str(tmp_path / "Package.resolved"))
        assert locate_resolved_file(str(tmp_path)) == lock

    def test_direct_lock_beats_project(self, tmp_path):
        lock = touch(str(tmp_path / "Package.resolved"))
        project_lock(str(tmp_path))
        assert locate_resolved_file(str(tmp_path)) == lock

    def test_xcodeproj_path(self, tmp_path):
        lock = project_lock(str(tmp_path))
        assert locate_resolved_file(str(tmp_path / "App.xcodeproj")) == lock

    def test_xcworkspace_path(self, tmp_path):
        lock = workspace_lock(str(tmp_path))
        assert locate_resolved_file(str(tmp_path / "App.xcworkspace")) == lock

    def test_bundle_without_lock(self, tmp_path):
        os.makedirs(tmp_path / "App.xcodeproj")
        with pytest.raises(ResolvedFileNotFoundError):
            locate_resolved_file(str(tmp_path / "App.xcodeproj"))

    def test_workspace_beats_project(self, tmp_path):
        project_lock(str(tmp_path))
        lock = workspace_lock(str(tmp_path))
        assert locate_resolved_file(str(tmp_path)) == lock

    def test_workspace_in_parent(self, tmp_path):
        lock = workspace_lock(str(tmp_path))
        sub = tmp_path / "Modules" / "Feature"
        os.makedirs(sub)
        assert locate_resolved_file(str(sub)) == lock

    def test_parent_workspace_is_reported(self, tmp_path, caplog):
        """Falling back to a workspace above the directory is logged at INFO."""
        workspace_lock(str(tmp_path))
        sub = tmp_path / "Modules"
        os.makedirs(sub)
        with caplog.at_level(logging.INFO, logger="resolved.locator"):
            locate_resolved_file(str(sub))
        assert "using parent workspace" in caplog.text
        assert str(tmp_path / "App.xcworkspace") in caplog.text

    def test_sibling_workspace_is_not_reported(self, tmp_path, caplog):
        """A workspace in the directory itself is not a fallback."""
        workspace_lock(str(tmp_path))
        with caplog.at_level(logging.INFO, logger="resolved.locator"):
            locate_resolved_file(str(tmp_path))
        assert "parent workspace" not in caplog.text

    def test_project_in_directory(self, tmp_path):
        lock = project_lock(str(tmp_path))
        assert locate_resolved_file(str(tmp_path)) == lock

    def test_nothing_found(self, tmp_path):
        with pytest.raises(ResolvedFileNotFoundError):
            locate_resolved_file(str(tmp_path))

    def test_missing_path(self, tmp_path):
        with pytest.raises(ResolvedFileNotFoundError):
            locate_resolved_file(str(tmp_path / "nope"))
