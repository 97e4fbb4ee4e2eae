"""Parser for SwiftPM ``Package.resolved`` lock files (schema v2 and v3).

Unlike manifest extraction, lock file problems are fatal: a file that cannot
be read or is in an unsupported schema raises a ``PackageResolvedError``
subclass instead of silently yielding zero dependencies.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from constants import Constants

from .models import (
    InvalidResolvedFormatError,
    PackageResolved,
    Pin,
    PinState,
    ResolvedFileNotFoundError,
    UnsupportedResolvedVersionError,
)

logger = logging.getLogger(__name__)


def _optional_str(mapping: Dict[str, Any], key: str, where: str):
    value = mapping.get(key)
    if value is None or isinstance(value, str):
        return value
    raise InvalidResolvedFormatError(f"{where}: '{key}' must be a string")


def _required_str(mapping: Dict[str, Any], key: str, where: str) -> str:
    value = mapping.get(key)
    if not isinstance(value, str):
        raise InvalidResolvedFormatError(f"{where}: missing or invalid '{key}'")
    return value


def _parse_pin(raw: Any, index: int) -> Pin:
    where = f"pins[{index}]"
    if not isinstance(raw, dict):
        raise InvalidResolvedFormatError(f"{where} is not an object")
    state = raw.get("state")
    if not isinstance(state, dict):
        raise InvalidResolvedFormatError(f"{where}: missing 'state'")
    return Pin(
        identity=_required_str(raw, "identity", where),
        kind=_required_str(raw, "kind", where),
        location=_required_str(raw, "location", where),
        state=PinState(
            revision=_required_str(state, "revision", f"{where}.state"),
            version=_optional_str(state, "version", f"{where}.state"),
            branch=_optional_str(state, "branch", f"{where}.state"),
        ),
    )


def parse_resolved(text: str) -> PackageResolved:
    """Parse the JSON text of a Package.resolved file.

    Raises:
        InvalidResolvedFormatError: Not JSON, or required fields are missing.
        UnsupportedResolvedVersionError: Pins are not at the root (schema v1)
            or the schema version is not one of the supported versions.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidResolvedFormatError(str(e)) from e
    if not isinstance(data, dict):
        raise InvalidResolvedFormatError("top level is not an object")

    version = data.get("version")
    if not isinstance(version, int) or isinstance(version, bool):
        raise InvalidResolvedFormatError("missing or invalid 'version'")

    raw_pins = data.get("pins")
    if raw_pins is None:
        # v1 nests pins under "object"
        raise UnsupportedResolvedVersionError(version)
    if version not in Constants.SUPPORTED_RESOLVED_VERSIONS:
        raise UnsupportedResolvedVersionError(version)
    if not isinstance(raw_pins, list):
        raise InvalidResolvedFormatError("'pins' is not an array")

    pins: List[Pin] = [_parse_pin(raw, i) for i, raw in enumerate(raw_pins)]
    logger.debug("Parsed Package.resolved v%s with %d pins", version, len(pins))
    return PackageResolved(version=version, pins=pins)


def load_resolved(path: str) -> PackageResolved:
    """Read and parse a Package.resolved file from disk."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except FileNotFoundError as e:
        raise ResolvedFileNotFoundError(path) from e
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidResolvedFormatError(f"cannot read {path}: {e}") from e
    return parse_resolved(text)
