"""Lock file composition from a selection of installed packages."""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Union

from lockkeeper.models.manifest import ManifestDocument, PackageRecord

PackageMap = Mapping[str, Optional[PackageRecord]]


def compose_lock_file(
    installed: Union[ManifestDocument, PackageMap, None],
    selection: Mapping[str, bool],
) -> ManifestDocument:
    """Build a lock file from the selected installed packages.

    Selected packages keep their full installed record (version and every
    other field) and their installed order. Packages missing from
    ``selection`` count as unselected.

    Args:
        installed: The installed manifest or its package map, or ``None``.
        selection: ``package → selected`` flags.

    Returns:
        A new document; its package map is empty when nothing is selected
        or nothing is installed.
    """
    if isinstance(installed, ManifestDocument):
        installed = installed.locked

    selected: Dict[str, Optional[PackageRecord]] = {}

    for name, record in (installed or {}).items():
        if selection.get(name) is not True:
            continue
        selected[name] = (
            PackageRecord(fields=record.to_dict()) if record is not None else None
        )

    return ManifestDocument(locked=selected)
