"""Constants used in the project."""

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1


class TagSources(Enum):
    """Backends able to list the tags of a remote repository.

    Args:
        Enum (string): Tag source names accepted on the CLI and in config.
    """

    GIT = "git"
    API = "api"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    RESOLVED_FILE = "Package.resolved"
    PACKAGE_SWIFT_FILE = "Package.swift"
    PBXPROJ_FILE = "project.pbxproj"
    WORKSPACE_DATA_FILE = "contents.xcworkspacedata"
    XCODEPROJ_SUFFIX = ".xcodeproj"
    XCWORKSPACE_SUFFIX = ".xcworkspace"
    XCODEPROJ_RESOLVED_PATH = "project.xcworkspace/xcshareddata/swiftpm/Package.resolved"
    XCWORKSPACE_RESOLVED_PATH = "xcshareddata/swiftpm/Package.resolved"
    SUPPORTED_RESOLVED_VERSIONS = [2, 3]
    SEARCH_DEPTH = 10

    TAG_SOURCES = [TagSources.GIT.value, TagSources.API.value]
    TAG_SOURCE = TagSources.GIT.value
    MAX_CONCURRENCY = 8
    GIT_EXECUTABLE = "git"
    GIT_TIMEOUT_SEC = 60

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "SPM_OUTDATED_LOG_LEVEL"
    ENV_CONFIG = "SPM_OUTDATED_CONFIG"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests

    # Repository API constants
    GITHUB_API_BASE = "https://api.github.com"
    GITLAB_API_BASE = "https://gitlab.com/api/v4"
    ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
    ENV_GITLAB_TOKEN = "GITLAB_TOKEN"
    REPO_API_PER_PAGE = 100
    HTTP_RETRY_MAX = 3
    HTTP_CACHE_TTL_SEC = 300

    DEFAULT_CONFIG_PATHS = [
        "spm-outdated.yml",
        "spm-outdated.yaml",
        os.path.join("~", ".config", "spm-outdated", "config.yml"),
    ]


# YAML key -> (Constants attribute, coercion)
_CONFIG_KEYS = {
    "tag_source": ("TAG_SOURCE", str),
    "max_concurrency": ("MAX_CONCURRENCY", int),
    "git_executable": ("GIT_EXECUTABLE", str),
    "git_timeout": ("GIT_TIMEOUT_SEC", int),
    "request_timeout": ("REQUEST_TIMEOUT", int),
    "github_api_base": ("GITHUB_API_BASE", str),
    "gitlab_api_base": ("GITLAB_API_BASE", str),
    "http_retry_max": ("HTTP_RETRY_MAX", int),
    "http_cache_ttl": ("HTTP_CACHE_TTL_SEC", int),
    "search_depth": ("SEARCH_DEPTH", int),
}


def _config_candidates(explicit: Optional[str]) -> list:
    if explicit:
        return [explicit]
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path:
        return [env_path]
    return [os.path.expanduser(p) for p in Constants.DEFAULT_CONFIG_PATHS]


def _load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Return the first readable YAML config mapping, or {} when none applies."""
    import yaml  # pylint: disable=import-outside-toplevel

    for candidate in _config_candidates(path):
        if not os.path.isfile(candidate):
            if path:
                logger.warning("Config file not found: %s", candidate)
            continue
        try:
            with open(candidate, "r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Ignoring unreadable config %s: %s", candidate, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config %s: top level is not a mapping", candidate)
            return {}
        logger.debug("Loaded config from %s", candidate)
        return data
    return {}


def apply_config(data: Dict[str, Any]) -> None:
    """Apply YAML settings onto Constants; bad values are logged and skipped."""
    for key, value in (data or {}).items():
        target = _CONFIG_KEYS.get(key)
        if target is None:
            logger.debug("Ignoring unknown config key: %s", key)
            continue
        attr, coerce = target
        try:
            setattr(Constants, attr, coerce(value))
        except (TypeError, ValueError):
            logger.warning("Invalid value for config key %s: %r", key, value)
    if Constants.TAG_SOURCE not in Constants.TAG_SOURCES:
        logger.warning("Unknown tag_source %r, using git", Constants.TAG_SOURCE)
        Constants.TAG_SOURCE = TagSources.GIT.value
    if Constants.MAX_CONCURRENCY < 1:
        Constants.MAX_CONCURRENCY = 1
