"""Format-preserving repair of the installed manifest.

The manifest carries far more than the engine understands: per-package
``dependencies`` maps, top-level ``dependencies``, fields added by future
tool versions. :func:`patch_manifest` therefore edits the decoded JSON tree
directly instead of round-tripping through
:class:`~lockkeeper.models.manifest.ManifestDocument`:

- Existing package → only its ``version`` value changes. The key keeps its
  position; sibling fields and other packages are untouched.
- Missing package → ``{"version": <expected>, "dependencies": {}}`` is
  appended to ``locked``.

Python dicts keep insertion order, so untouched keys serialize in their
original order. The output uses two-space indentation; a trailing newline
is kept if the input had one.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Optional

from lockkeeper.constants import (
    DEPENDENCIES_FIELD,
    JSON_INDENT,
    LOCKED_FIELD,
    VERSION_FIELD,
)
from lockkeeper.models.issue import Issue
from lockkeeper.utils.logger import get_logger

logger = get_logger("patcher")


def patch_manifest(manifest_text: str, issues: Iterable[Issue]) -> Optional[str]:
    """Apply ``issues`` to a manifest and return the new document text.

    Args:
        manifest_text: Current manifest text.
        issues: Issues whose ``expected_version`` should be installed.

    Returns:
        The patched document, or ``None`` when ``manifest_text`` is not a
        JSON object with a ``locked`` object.
    """
    tree = _load_tree(manifest_text)
    if tree is None:
        return None

    locked = tree.get(LOCKED_FIELD)
    if not isinstance(locked, dict):
        logger.error("Manifest has invalid structure (missing '%s' field)", LOCKED_FIELD)
        return None

    for issue in issues:
        _apply_issue(locked, issue)

    patched = json.dumps(tree, indent=JSON_INDENT, ensure_ascii=False)
    if manifest_text.endswith("\n"):
        patched += "\n"
    return patched


def _load_tree(text: str) -> Optional[Dict[str, Any]]:
    """Decode ``text``; ``None`` unless it is a JSON object."""
    try:
        tree = json.loads(text)
    except (ValueError, RecursionError) as exc:
        logger.error("Manifest is not valid JSON: %s", exc)
        return None

    if not isinstance(tree, dict):
        logger.error("Manifest root is %s, expected an object", type(tree).__name__)
        return None

    return tree


def _apply_issue(locked: Dict[str, Any], issue: Issue) -> None:
    """Set one package's version in the ``locked`` map, inserting if needed."""
    record = locked.get(issue.package)

    if isinstance(record, dict):
        logger.debug(
            "Updating %s: %s → %s",
            issue.package,
            record.get(VERSION_FIELD),
            issue.expected_version,
        )
        record[VERSION_FIELD] = issue.expected_version
        return

    logger.debug("Adding %s %s", issue.package, issue.expected_version)
    # A non-object entry is replaced; re-assigning an existing key keeps its slot
    locked[issue.package] = {
        VERSION_FIELD: issue.expected_version,
        DEPENDENCIES_FIELD: {},
    }
