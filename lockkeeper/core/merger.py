"""Highest-version-wins merging of lock files.

Each lock file lists the versions one author requires. Merging folds them
into a single ``package → version`` map:

- Lock files are visited in the order given, packages in document order.
- The first occurrence of a package seeds its version.
- A later occurrence replaces it only when ``is_greater(new, current)``.

Ties, lower versions and unparseable versions keep the earlier value, so
the order of ``lock_files`` is part of the result.
"""

from __future__ import annotations

from typing import Callable, Dict, Sequence

from lockkeeper.core.versioning import is_version_greater
from lockkeeper.models.manifest import ManifestDocument
from lockkeeper.utils.logger import get_logger

logger = get_logger("merger")

#: ``is_greater(candidate, existing)``.
VersionComparer = Callable[[str, str], bool]


def merge_lock_files(
    lock_files: Sequence[ManifestDocument],
    is_greater: VersionComparer = is_version_greater,
) -> Dict[str, str]:
    """Merge validated lock files into one requirement map.

    Args:
        lock_files: Lock files that passed
            :func:`~lockkeeper.core.validator.validate_manifest`.
        is_greater: Strict ordering used to resolve conflicts.

    Returns:
        Insertion-ordered ``package → required version`` map.
    """
    merged: Dict[str, str] = {}

    for lock_file in lock_files:
        for name, record in lock_file.packages.items():
            # Validated documents always carry a version
            required = record.version if record is not None else None
            if required is None:
                continue

            if name not in merged:
                merged[name] = required
                continue

            existing = merged[name]
            if is_greater(required, existing):
                logger.debug("%s: %s supersedes %s", name, required, existing)
                merged[name] = required

    return merged
