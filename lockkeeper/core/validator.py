"""Structural validation of manifests and lock files.

:func:`validate_manifest` is the gate every document passes before it is
merged or diffed. It checks shape only; whether versions parse is left to
:mod:`lockkeeper.core.versioning`.
"""

from __future__ import annotations

from typing import Optional

from lockkeeper.models.manifest import ManifestDocument
from lockkeeper.utils.logger import diagnostic_level, get_logger

logger = get_logger("validator")


def validate_manifest(
    document: Optional[ManifestDocument],
    *,
    debug: bool = False,
) -> bool:
    """Return True if ``document`` has the minimum shape the engine needs.

    A valid document has a non-empty ``locked`` map whose keys are
    non-blank strings and whose records each carry a non-blank version.

    Args:
        document: Parsed document, or ``None``.
        debug: Log the rejection reason at INFO instead of DEBUG.

    Returns:
        ``True`` if valid, ``False`` otherwise. Never raises.
    """
    level = diagnostic_level(debug)

    if document is None:
        logger.log(level, "Document is null")
        return False

    if document.locked is None:
        logger.log(level, "locked field is null")
        return False

    if not document.locked:
        logger.log(level, "locked field is empty")
        return False

    for name, record in document.locked.items():
        if not isinstance(name, str) or not name.strip():
            logger.log(level, "Package key is null or whitespace")
            return False

        if record is None or record.version is None or not record.version.strip():
            logger.log(level, "Package '%s' has null or whitespace version", name)
            return False

    return True
