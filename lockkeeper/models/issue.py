"""
Issue model for lockkeeper.

An :class:`Issue` is one discrepancy between the merged lock file
requirements and the installed manifest. Issues are produced fresh by every
check and are never persisted.
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass
from typing import Dict, Optional


class IssueKind(Enum):
    """What is wrong with a required package."""

    MISSING = "missing"  # Not present in the installed manifest
    MISMATCH = "mismatch"  # Installed with a different version string


@dataclass(frozen=True)
class Issue:
    """A required package that is missing or installed at another version.

    Args:
        package: Package identifier (case-sensitive, never normalized).
        expected_version: Version required by the merged lock files.
        actual_version: Installed version, or ``None`` if the package is
            missing from the manifest.
    """

    package: str
    expected_version: str
    actual_version: Optional[str] = None

    @property
    def is_missing(self) -> bool:
        """True when the package is not installed at all."""
        return self.actual_version is None

    @property
    def kind(self) -> IssueKind:
        return IssueKind.MISSING if self.is_missing else IssueKind.MISMATCH

    def to_display_string(self) -> str:
        """Return a one-line human-readable description."""
        if self.is_missing:
            return f"Missing: {self.package} (v{self.expected_version})"
        return (
            f"Version mismatch {self.package}: "
            f"required={self.expected_version}, installed={self.actual_version}"
        )

    def to_json(self) -> Dict[str, Optional[str]]:
        """Return a JSON-serializable representation."""
        return {
            "package": self.package,
            "kind": self.kind.value,
            "expected_version": self.expected_version,
            "actual_version": self.actual_version,
        }

    def __str__(self) -> str:
        return self.to_display_string()
