"""Data models for Package.resolved lock files."""

from dataclasses import dataclass, field
from typing import List, Optional


class PackageResolvedError(Exception):
    """Base class for lock files that cannot be turned into dependencies."""


class UnsupportedResolvedVersionError(PackageResolvedError):
    """Raised for schema versions without root-level pins (v1)."""

    def __init__(self, version):
        self.version = version
        super().__init__(
            f"Unsupported Package.resolved version: {version}. Only v2 and v3 are supported."
        )


class ResolvedFileNotFoundError(PackageResolvedError):
    """Raised when no Package.resolved can be found for a path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Package.resolved not found at: {path}")


class InvalidResolvedFormatError(PackageResolvedError):
    """Raised when the file is not valid JSON or misses required fields."""

    def __init__(self, details: str):
        self.details = details
        super().__init__(f"Invalid Package.resolved format: {details}")


@dataclass(frozen=True)
class PinState:
    """Checked-out state of a pin: always a revision, optionally a tag or branch."""
    revision: str
    version: Optional[str] = None
    branch: Optional[str] = None


@dataclass(frozen=True)
class Pin:
    """One resolved dependency."""
    identity: str
    kind: str
    location: str
    state: PinState


@dataclass
class PackageResolved:
    """Parsed lock file."""
    version: int
    pins: List[Pin] = field(default_factory=list)
