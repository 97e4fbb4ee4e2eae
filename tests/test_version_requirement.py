"""Tests for VersionRequirement satisfaction and descriptions."""

import pytest

from versioning.models import RequirementKind, SemanticVersion, VersionRequirement


def v(major, minor=0, patch=0, prerelease=None, build=None):
    return SemanticVersion(major, minor, patch, prerelease=prerelease, build_metadata=build)


class TestSatisfaction:
    """Test is_satisfied_by for every requirement kind."""

    def test_up_to_next_major(self):
        req = VersionRequirement.up_to_next_major(v(1))
        assert req.is_satisfied_by(v(1))
        assert req.is_satisfied_by(v(1, 5))
        assert req.is_satisfied_by(v(1, 99, 99))
        assert not req.is_satisfied_by(v(2))
        assert not req.is_satisfied_by(v(0, 9))

    def test_up_to_next_minor(self):
        req = VersionRequirement.up_to_next_minor(v(1, 2))
        assert req.is_satisfied_by(v(1, 2))
        assert req.is_satisfied_by(v(1, 2, 99))
        assert not req.is_satisfied_by(v(1, 3))
        assert not req.is_satisfied_by(v(2, 2))

    def test_up_to_next_minor_respects_lower_patch(self):
        req = VersionRequirement.up_to_next_minor(v(1, 2, 3))
        assert not req.is_satisfied_by(v(1, 2, 2))

    def test_exact_ignores_prerelease_and_build(self):
        req = VersionRequirement.exact(v(1, 2, 3))
        assert req.is_satisfied_by(v(1, 2, 3))
        assert req.is_satisfied_by(v(1, 2, 3, "beta"))
        assert req.is_satisfied_by(v(1, 2, 3, None, "build.9"))
        assert not req.is_satisfied_by(v(1, 2, 4))
        assert not req.is_satisfied_by(v(1, 3, 3))

    def test_range_is_half_open(self):
        req = VersionRequirement.range(v(1), v(2))
        assert req.is_satisfied_by(v(1))
        assert req.is_satisfied_by(v(1, 99, 99))
        assert not req.is_satisfied_by(v(2))
        assert not req.is_satisfied_by(v(0, 9))

    @pytest.mark.parametrize(
        "req",
        [
            VersionRequirement.branch("main"),
            VersionRequirement.revision("abc123"),
            VersionRequirement.unknown(),
        ],
    )
    def test_non_numeric_kinds_always_satisfied(self, req):
        assert req.is_satisfied_by(v(99, 99, 99))
        assert req.is_satisfied_by(v(0))


class TestDescription:
    """Test human-readable descriptions."""

    def test_descriptions(self):
        assert VersionRequirement.up_to_next_major(v(1)).description == "from: 1.0.0 (up to next major)"
        assert VersionRequirement.up_to_next_minor(v(1, 2)).description == "from: 1.2.0 (up to next minor)"
        assert VersionRequirement.exact(v(1, 2, 3)).description == "exact: 1.2.3"
        assert VersionRequirement.range(v(1), v(2)).description == "1.0.0..<2.0.0"
        assert VersionRequirement.branch("main").description == "branch: main"
        assert VersionRequirement.unknown().description == "unknown"

    def test_revision_is_shortened(self):
        req = VersionRequirement.revision("0123456789abcdef")
        assert req.description == "revision: 0123456"
        assert str(req) == "revision: 0123456"

    def test_constructors_set_kind(self):
        assert VersionRequirement.range(v(1), v(2)).kind == RequirementKind.RANGE
        assert VersionRequirement.unknown() == VersionRequirement(RequirementKind.UNKNOWN)
