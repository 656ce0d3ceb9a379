"""
Core reconciliation engine for lockkeeper.

The pure components are importable on their own; :class:`Reconciler`
combines them with I/O collaborators:

    from lockkeeper.core import merge_lock_files, diff_manifest
"""

from __future__ import annotations

from lockkeeper.core.composer import compose_lock_file
from lockkeeper.core.differ import diff_manifest
from lockkeeper.core.merger import merge_lock_files
from lockkeeper.core.patcher import patch_manifest
from lockkeeper.core.validator import validate_manifest
from lockkeeper.core.versioning import is_version_greater, parse_semver
from lockkeeper.core.collaborators import (
    ExternalResolver,
    ListFiles,
    MoveFile,
    ReadText,
    WriteText,
)
from lockkeeper.core.resolver import CommandResolver
from lockkeeper.core.reconciler import (
    CheckResult,
    CheckStatus,
    DisableResult,
    FixResult,
    Reconciler,
    disabled_locks_dir,
    lock_file_name,
)

__all__ = [
    "is_version_greater",
    "parse_semver",
    "validate_manifest",
    "merge_lock_files",
    "diff_manifest",
    "compose_lock_file",
    "patch_manifest",
    "ReadText",
    "WriteText",
    "ListFiles",
    "MoveFile",
    "ExternalResolver",
    "CommandResolver",
    "Reconciler",
    "CheckResult",
    "CheckStatus",
    "DisableResult",
    "FixResult",
    "disabled_locks_dir",
    "lock_file_name",
]
