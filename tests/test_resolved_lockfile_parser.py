"""Tests for Package.resolved parsing."""

import json

import pytest

from resolved.lockfile_parser import load_resolved, parse_resolved
from resolved.models import (
    InvalidResolvedFormatError,
    PackageResolvedError,
    ResolvedFileNotFoundError,
    UnsupportedResolvedVersionError,
)

V2 = {
    "pins": [
        {
            "identity": "swift-argument-parser",
            "kind": "remoteSourceControl",
            "location": "https://github.com/apple/swift-argument-parser.git",
            "state": {"revision": "46989693916f56d1186bd59ac15124caef896560", "version": "1.3.1"},
        },
        {
            "identity": "snapkit",
            "kind": "remoteSourceControl",
            "location": "https://github.com/SnapKit/SnapKit",
            "state": {"branch": "develop", "revision": "f222cbdf325885926566172f6f5f06af95473158"},
        },
    ],
    "version": 2,
}


class TestParseResolved:
    """Test parse_resolved."""

    def test_v2(self):
        resolved = parse_resolved(json.dumps(V2))
        assert resolved.version == 2
        assert [p.identity for p in resolved.pins] == ["swift-argument-parser", "snapkit"]
        first = resolved.pins[0]
        assert first.location == "https://github.com/apple/swift-argument-parser.git"
        assert first.state.version == "1.3.1"
        assert first.state.branch is None

    def test_branch_pin(self):
        pin = parse_resolved(json.dumps(V2)).pins[1]
        assert pin.state.branch == "develop"
        assert pin.state.version is None
        assert pin.state.revision.startswith("f222cbd")

    def test_v3_with_origin_hash(self):
        data = dict(V2, version=3, originHash="8f3a0c")
        resolved = parse_resolved(json.dumps(data))
        assert resolved.version == 3
        assert len(resolved.pins) == 2

    def test_empty_pins(self):
        assert parse_resolved('{"pins": [], "version": 2}').pins == []

    def test_v1_unsupported(self):
        data = {"object": {"pins": []}, "version": 1}
        with pytest.raises(UnsupportedResolvedVersionError) as exc_info:
            parse_resolved(json.dumps(data))
        assert exc_info.value.version == 1
        assert "Only v2 and v3 are supported" in str(exc_info.value)

    def test_unknown_future_version_unsupported(self):
        with pytest.raises(UnsupportedResolvedVersionError):
            parse_resolved('{"pins": [], "version": 4}')

    @pytest.mark.parametrize(
        "text",
        [
            "not json",
            "[]",
            '{"pins": []}',
            '{"pins": [], "version": "2"}',
            '{"pins": {}, "version": 2}',
            '{"pins": [{"identity": "x"}], "version": 2}',
            '{"pins": [{"identity": "x", "kind": "k", "location": "l", "state": {}}], "version": 2}',
        ],
    )
    def test_invalid_format(self, text):
        with pytest.raises(InvalidResolvedFormatError):
            parse_resolved(text)

    def test_errors_share_base_class(self):
        with pytest.raises(PackageResolvedError):
            parse_resolved("{")


class TestLoadResolved:
    """Test load_resolved against the filesystem."""

    def test_load(self, tmp_path):
        path = tmp_path / "Package.resolved"
        path.write_text(json.dumps(V2), encoding="utf-8")
        assert len(load_resolved(str(path)).pins) == 2

    def test_missing_file(self, tmp_path):
        missing = str(tmp_path / "Package.resolved")
        with pytest.raises(ResolvedFileNotFoundError) as exc_info:
            load_resolved(missing)
        assert exc_info.value.path == missing
