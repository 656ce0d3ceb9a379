"""
Unified data model exports for lockkeeper.

Example:
    >>> from lockkeeper.models import Issue, ManifestDocument
"""

from __future__ import annotations

from lockkeeper.models.issue import Issue, IssueKind
from lockkeeper.models.manifest import ManifestDocument, PackageRecord

__all__ = [
    "Issue",
    "IssueKind",
    "ManifestDocument",
    "PackageRecord",
]
