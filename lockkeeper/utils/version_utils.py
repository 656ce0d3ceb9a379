"""
Change classification helpers for lockkeeper.

Issues are detected by literal string comparison, so ``1.0`` and ``1.0.0``
count as a mismatch. For display, this module labels what applying an
issue would actually do to the installed package. It parses with
``packaging`` (PEP 440), which accepts short spellings such as ``1.0`` and
normalizes semver prerelease tags like ``1.4.0-beta.2``.

Merge decisions never go through here; strict semantic-version ordering
lives in :mod:`lockkeeper.core.versioning`.
"""

from __future__ import annotations

from typing import Optional, Tuple

from packaging.version import InvalidVersion, Version, parse

#: Labels returned by :func:`get_update_type`.
CHANGE_TYPES: Tuple[str, ...] = (
    "missing",
    "respelled",
    "downgrade",
    "major",
    "minor",
    "patch",
    "prerelease",
    "unknown",
)


def get_update_type(
    installed_version: Optional[str],
    required_version: Optional[str],
) -> str:
    """Label the change from ``installed_version`` to ``required_version``.

    Args:
        installed_version: Version in the installed manifest, or ``None``
            when the package is missing.
        required_version: Version required by the merged lock files.

    Returns:
        ``"missing"`` when nothing is installed, ``"respelled"`` when both
        strings name the same version, ``"downgrade"`` when the requirement
        is lower, otherwise the highest release segment that grows
        (``"major"``, ``"minor"``, ``"patch"``) or ``"prerelease"`` when only
        the pre/post/dev part differs. ``"unknown"`` if either side does not
        parse.

    Examples:
        >>> get_update_type(None, "1.0.0")
        'missing'
        >>> get_update_type("1.0", "1.0.0")
        'respelled'
        >>> get_update_type("1.2.0", "1.10.0")
        'minor'
    """
    if required_version is None:
        return "unknown"

    if installed_version is None:
        return "missing"

    try:
        installed = _parse_version(installed_version)
        required = _parse_version(required_version)
    except InvalidVersion:
        return "unknown"

    if installed == required:
        return "respelled"

    if required < installed:
        return "downgrade"

    installed_release = _release_triple(installed)
    required_release = _release_triple(required)

    for label, old, new in zip(
        ("major", "minor", "patch"), installed_release, required_release
    ):
        if old != new:
            return label

    return "prerelease"


def _parse_version(value: str) -> Version:
    """Parse a version string into a PEP 440 Version object."""
    parsed = parse(value.strip())
    if not isinstance(parsed, Version):
        raise InvalidVersion(value)
    return parsed


def _release_triple(version: Version) -> Tuple[int, int, int]:
    """Pad or cut a release segment to (major, minor, patch)."""
    release = list(version.release[:3])
    release.extend([0] * (3 - len(release)))
    return release[0], release[1], release[2]
