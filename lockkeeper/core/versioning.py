"""Semantic version ordering for lock file merging.

Lock files from different authors may require different versions of the
same package; the merger keeps the highest. "Highest" follows Semantic
Versioning 2.0.0 precedence as implemented by ``semantic_version``:

- ``MAJOR.MINOR.PATCH`` compare numerically (``1.1278.0 > 1.1271.0``).
- A release outranks its own prereleases (``1.0.0 > 1.0.0-rc.1``).
- Prerelease identifiers compare left to right, numeric identifiers as
  integers and below alphanumeric ones (``1.14.4-beta.2 > 1.14.4-beta.1``).
- Build metadata (``+build.5``) is ignored.

A version that does not parse never wins: :func:`is_version_greater`
returns ``False`` instead of raising, so one malformed lock file only
loses its tie-breaks rather than aborting the whole merge.
"""

from __future__ import annotations

from typing import Optional

import semantic_version

from lockkeeper.utils.logger import get_logger

logger = get_logger("versioning")


def parse_semver(value: str) -> Optional[semantic_version.Version]:
    """Parse ``value`` as a strict semantic version without build metadata.

    Returns:
        The parsed version, or ``None`` if ``value`` is not valid semver.
    """
    if not isinstance(value, str):
        return None

    try:
        return semantic_version.Version(value.strip()).truncate("prerelease")
    except ValueError:
        return None


def is_version_greater(candidate: str, existing: str) -> bool:
    """Return True if ``candidate`` is strictly greater than ``existing``.

    Equal versions, and any pair where either side fails to parse, yield
    ``False``.

    Example::

        >>> is_version_greater("9.3.63", "8.1.166")
        True
        >>> is_version_greater("1.0.0", "1.0.0")
        False
        >>> is_version_greater("not-a-version", "1.0.0")
        False
    """
    parsed_candidate = parse_semver(candidate)
    parsed_existing = parse_semver(existing)

    if parsed_candidate is None or parsed_existing is None:
        logger.debug(
            "Cannot compare versions %r and %r; keeping existing", candidate, existing
        )
        return False

    return parsed_candidate > parsed_existing
