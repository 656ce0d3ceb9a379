"""Comparison of merged requirements against the installed manifest.

Versions are compared as literal strings: ``1.0`` and ``1.0.0`` are a
mismatch even though they name the same release. Packages that are
installed but not required are never reported.
"""

from __future__ import annotations

from typing import List, Mapping, Optional

from lockkeeper.models.issue import Issue
from lockkeeper.models.manifest import ManifestDocument
from lockkeeper.utils.logger import diagnostic_level, get_logger

logger = get_logger("differ")


def diff_manifest(
    requirements: Mapping[str, str],
    installed: Optional[ManifestDocument],
    *,
    debug: bool = False,
) -> Optional[List[Issue]]:
    """List the required packages the installed manifest does not satisfy.

    Args:
        requirements: Merged ``package → version`` map, in report order.
        installed: The installed manifest.
        debug: Log each issue at INFO instead of DEBUG.

    Returns:
        Issues in ``requirements`` order; an empty list when everything
        matches; ``None`` when ``installed`` has no package map and so
        cannot be compared.
    """
    level = diagnostic_level(debug)

    if installed is None or installed.locked is None:
        logger.log(level, "Missing locked field in manifest")
        return None

    issues: List[Issue] = []

    for name, required in requirements.items():
        record = installed.locked.get(name)

        if record is None:
            issue = Issue(name, required)
        elif record.version != required:
            issue = Issue(name, required, record.version)
        else:
            continue

        logger.log(level, "%s", issue)
        issues.append(issue)

    return issues
