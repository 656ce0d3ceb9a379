"""
lockkeeper: lock file reconciliation for VPM package manifests.

lockkeeper checks a project's installed package manifest
(``Packages/vpm-manifest.json``) against the lock files shipped by asset
and plugin authors, reports missing packages and version mismatches, and
repairs the manifest without disturbing fields it does not own.

Features include:
    • Structural validation of manifest-shaped documents
    • Highest-version-wins merging of many lock files
    • Typed issue reports (missing / mismatched packages)
    • Lock file generation from a selection of installed packages
    • Format-preserving manifest repair

Typical library usage::

    from lockkeeper import Reconciler
    from lockkeeper.utils.filesystem import list_files, read_text, write_text

    reconciler = Reconciler(read_text, write_text, list_files)
    result = reconciler.check("Packages/vpm-manifest.json", "Locks")
"""

from __future__ import annotations

from lockkeeper.__version__ import __version__
from lockkeeper.core.reconciler import CheckResult, CheckStatus, FixResult, Reconciler
from lockkeeper.models import Issue, IssueKind, ManifestDocument, PackageRecord

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "lockkeeper Contributors"
__license__ = "Apache-2.0"
__description__ = "Reconcile VPM package manifests against author lock files."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "__version__",
    "Reconciler",
    "CheckResult",
    "CheckStatus",
    "FixResult",
    "Issue",
    "IssueKind",
    "ManifestDocument",
    "PackageRecord",
]
