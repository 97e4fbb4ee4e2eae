"""Shared fixtures for spm-outdated tests."""
import pytest

from constants import Constants

_MUTABLE = (
    "TAG_SOURCE",
    "MAX_CONCURRENCY",
    "GIT_EXECUTABLE",
    "GIT_TIMEOUT_SEC",
    "REQUEST_TIMEOUT",
    "GITHUB_API_BASE",
    "GITLAB_API_BASE",
    "HTTP_RETRY_MAX",
    "HTTP_CACHE_TTL_SEC",
    "SEARCH_DEPTH",
)


@pytest.fixture(autouse=True)
def restore_constants():
    """Undo config and CLI overrides applied to Constants by a test."""
    saved = {name: getattr(Constants, name) for name in _MUTABLE}
    yield
    for name, value in saved.items():
        setattr(Constants, name, value)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run from an empty directory with no config file in reach."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(Constants.ENV_CONFIG, raising=False)
    monkeypatch.setattr(Constants, "DEFAULT_CONFIG_PATHS", ["spm-outdated.yml"])
    return tmp_path
