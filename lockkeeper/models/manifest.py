"""
Manifest and lock file data models for lockkeeper.

An installed manifest (``vpm-manifest.json``) and an author lock file share
one JSON shape::

    {
      "locked": {
        "com.vrchat.base": {"version": "3.5.0", "dependencies": {}},
        ...
      }
    }

:class:`ManifestDocument` is the typed view used by validation, merging,
diffing and lock composition. Parsing is deliberately tolerant: wrong
types become ``None`` rather than errors so that
:func:`~lockkeeper.core.validator.validate_manifest` can report every
structural problem through a single boolean gate. Patching does not use
these models; see :mod:`lockkeeper.core.patcher`.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from lockkeeper.constants import JSON_INDENT, LOCKED_FIELD, VERSION_FIELD
from lockkeeper.exceptions import ParseError


@dataclass
class PackageRecord:
    """A single entry of a package map.

    The record keeps all of its decoded fields, in document order, so that
    copying it into a lock file reproduces it unchanged. Only ``version``
    is interpreted.

    Attributes:
        fields: Every field of the record as decoded from JSON.
    """

    fields: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_version(cls, version: str, **extra: Any) -> "PackageRecord":
        """Build a record holding ``version`` followed by ``extra`` fields."""
        return cls(fields={VERSION_FIELD: version, **extra})

    @classmethod
    def from_dict(cls, data: Any) -> Optional["PackageRecord"]:
        """Build a record from a decoded JSON value.

        Returns ``None`` when ``data`` is not a JSON object.
        """
        if not isinstance(data, dict):
            return None
        return cls(fields=copy.deepcopy(data))

    @property
    def version(self) -> Optional[str]:
        """The version string, or ``None`` if absent or not a string."""
        value = self.fields.get(VERSION_FIELD)
        return value if isinstance(value, str) else None

    def to_dict(self) -> Dict[str, Any]:
        """Return a deep copy of the record's fields."""
        return copy.deepcopy(self.fields)


@dataclass
class ManifestDocument:
    """Typed view of an installed manifest or a lock file.

    Attributes:
        locked: Ordered package map, or ``None`` when the ``locked`` field
            is absent or not an object. Values are ``None`` for entries
            that are not objects.
    """

    locked: Optional[Dict[str, Optional[PackageRecord]]] = None

    @classmethod
    def from_dict(cls, data: Any) -> "ManifestDocument":
        """Build a document from decoded JSON without validating it."""
        raw_locked = data.get(LOCKED_FIELD) if isinstance(data, dict) else None
        if not isinstance(raw_locked, dict):
            return cls(locked=None)

        return cls(
            locked={
                name: PackageRecord.from_dict(record)
                for name, record in raw_locked.items()
            }
        )

    @classmethod
    def from_json(cls, text: str, *, source: Optional[str] = None) -> "ManifestDocument":
        """Parse document text.

        Args:
            text: JSON document text.
            source: Where the text came from, for error messages.

        Raises:
            ParseError: ``text`` is not valid JSON, is nested too deeply or its root is not an object.
        """
        try:
            data = json.loads(text)
        except (ValueError, RecursionError) as exc:
            raise ParseError(
                f"Invalid JSON: {exc}",
                file_path=source,
                content=text,
            ) from exc

        if not isinstance(data, dict):
            raise ParseError(
                f"Expected a JSON object, got {type(data).__name__}",
                file_path=source,
            )

        return cls.from_dict(data)

    @property
    def packages(self) -> Dict[str, Optional[PackageRecord]]:
        """The package map, or an empty dict when it is missing."""
        return self.locked if self.locked is not None else {}

    def get_version(self, package: str) -> Optional[str]:
        """Return the version of ``package``, or ``None`` if not present."""
        record = self.packages.get(package)
        return record.version if record is not None else None

    def to_dict(self) -> Dict[str, Any]:
        """Return the document as a JSON-ready dict."""
        return {
            LOCKED_FIELD: {
                name: record.to_dict() if record is not None else None
                for name, record in self.packages.items()
            }
        }

    def to_json(self) -> str:
        """Serialize with the indentation used for manifests and lock files."""
        return json.dumps(self.to_dict(), indent=JSON_INDENT, ensure_ascii=False)

    def __len__(self) -> int:
        return len(self.packages)
