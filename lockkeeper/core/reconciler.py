"""Reconciliation runs: check, fix, accept and lock file generation.

:class:`Reconciler` wires the pure components together around the I/O
collaborators a host supplies::

    read manifest ─► validate ─┐
    list + read lock files ─► validate each ─► merge ─► diff ─► issues
                                                                  │
    read manifest ─► patch(issues) ─► write ─► external resolve ◄─┘

    list lock files ─► move each to the disabled directory   (accept)

Every step reports failure as a value. Collaborators are called through
small guards that turn any exception they raise into that step's failure,
so nothing but programming errors escapes a run.

Typical usage::

    from lockkeeper.core import Reconciler
    from lockkeeper.utils.filesystem import list_files, read_text, write_text

    reconciler = Reconciler(read_text, write_text, list_files)
    result = reconciler.check("Packages/vpm-manifest.json", "Locks")

    if result.has_issues():
        reconciler.fix("Packages/vpm-manifest.json", result.issues)
"""

from __future__ import annotations

import os
from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from lockkeeper.constants import (
    DISABLED_LOCKS_DIR_NAME,
    LOCK_FILE_PATTERN,
    LOCK_FILE_SUFFIX,
)
from lockkeeper.core.collaborators import (
    ExternalResolver,
    ListFiles,
    MoveFile,
    ReadText,
    WriteText,
)
from lockkeeper.core.composer import compose_lock_file
from lockkeeper.core.differ import diff_manifest
from lockkeeper.core.merger import merge_lock_files
from lockkeeper.core.patcher import patch_manifest
from lockkeeper.core.validator import validate_manifest
from lockkeeper.exceptions import ParseError
from lockkeeper.models.issue import Issue
from lockkeeper.models.manifest import ManifestDocument
from lockkeeper.utils.logger import diagnostic_level, get_logger

logger = get_logger("reconciler")

__all__ = [
    "Reconciler",
    "CheckResult",
    "CheckStatus",
    "DisableResult",
    "FixResult",
    "disabled_locks_dir",
    "lock_file_name",
]


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


class CheckStatus(Enum):
    """Outcome of a check run."""

    OK = "ok"  # Every requirement is satisfied
    ISSUES = "issues"  # At least one package is missing or mismatched
    NO_LOCK_FILES = "no_lock_files"  # Nothing valid to check against
    MANIFEST_UNREADABLE = "manifest_unreadable"
    MANIFEST_INVALID = "manifest_invalid"


@dataclass
class CheckResult:
    """Result of :meth:`Reconciler.check`.

    Attributes:
        status: Overall outcome.
        issues: Discrepancies in requirement order (empty unless ``ISSUES``).
        merged: The merged ``package → version`` requirements.
        lock_file_count: Number of valid lock files that were merged.
    """

    status: CheckStatus
    issues: List[Issue] = field(default_factory=list)
    merged: Dict[str, str] = field(default_factory=dict)
    lock_file_count: int = 0

    def has_issues(self) -> bool:
        """Return True if the run found discrepancies."""
        return bool(self.issues)

    def succeeded(self) -> bool:
        """Return True if the manifest could be compared (or nothing to compare)."""
        return self.status in (CheckStatus.OK, CheckStatus.ISSUES, CheckStatus.NO_LOCK_FILES)


@dataclass
class FixResult:
    """Result of :meth:`Reconciler.fix`.

    Attributes:
        patched: Whether the manifest was rewritten.
        resolved: Outcome of the external resolver; ``None`` if none is
            configured or the manifest was not patched.
    """

    patched: bool
    resolved: Optional[bool] = None

    def succeeded(self) -> bool:
        return self.patched and self.resolved is not False


@dataclass
class DisableResult:
    """Result of :meth:`Reconciler.disable_lock_files`.

    Attributes:
        moved: Destination paths of the lock files that were set aside.
        failed: Source paths of the lock files that could not be moved.
    """

    moved: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    def succeeded(self) -> bool:
        return not self.failed


def disabled_locks_dir(locks_dir: str) -> str:
    """Return the ``Locks_Disabled`` directory next to ``locks_dir``."""
    parent = os.path.dirname(os.path.normpath(locks_dir))
    return os.path.join(parent, DISABLED_LOCKS_DIR_NAME)


def lock_file_name(author: str, asset: str) -> str:
    """Return the conventional lock file name ``{author}_{asset}.lock.json``.

    Raises:
        ValueError: If either part is blank.
    """
    author, asset = author.strip(), asset.strip()
    if not author or not asset:
        raise ValueError("author and asset names must not be empty")
    return f"{author}_{asset}{LOCK_FILE_SUFFIX}"


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class Reconciler:
    """Runs reconciliation steps against injected I/O collaborators.

    Holds no state between calls; every method is a function of its
    arguments and the collaborators' answers.

    Args:
        read_text: Returns a file's text or ``None``.
        write_text: Writes a file, returning ``True`` on success.
        list_files: Lists files in a directory matching a glob pattern.
        move_file: Moves a file; needed only by :meth:`disable_lock_files`.
        resolver: Optional tool run after a successful :meth:`fix`.
        debug: Emit engine diagnostics at INFO instead of DEBUG.
    """

    def __init__(
        self,
        read_text: ReadText,
        write_text: WriteText,
        list_files: ListFiles,
        *,
        move_file: Optional[MoveFile] = None,
        resolver: Optional[ExternalResolver] = None,
        debug: bool = False,
    ) -> None:
        self.read_text = read_text
        self.write_text = write_text
        self.list_files = list_files
        self.move_file = move_file
        self.resolver = resolver
        self.debug = debug

    # ------------------------------------------------------------------
    # Collaborator guards
    # ------------------------------------------------------------------

    def _read(self, path: str) -> Optional[str]:
        try:
            text = self.read_text(path)
        except Exception as exc:
            logger.error("Error reading file: %s - %s", path, exc)
            return None

        if text is None:
            self._diag("File could not be read: %s", path)
        return text

    def _write(self, path: str, text: str) -> bool:
        try:
            return bool(self.write_text(path, text))
        except Exception as exc:
            logger.error("Error writing file: %s - %s", path, exc)
            return False

    def _list(self, directory: str, pattern: str) -> List[str]:
        try:
            return list(self.list_files(directory, pattern))
        except Exception as exc:
            logger.error("Error listing %s: %s", directory, exc)
            return []

    def _move(self, source: str, destination: str) -> bool:
        if self.move_file is None:
            logger.error("No move collaborator configured; cannot move %s", source)
            return False
        try:
            return bool(self.move_file(source, destination))
        except Exception as exc:
            logger.error("Error moving file: %s - %s", source, exc)
            return False

    def _diag(self, message: str, *args: object) -> None:
        logger.log(diagnostic_level(self.debug), message, *args)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _parse(self, text: str, source: str) -> Optional[ManifestDocument]:
        try:
            return ManifestDocument.from_json(text, source=source)
        except ParseError as exc:
            self._diag("%s", exc)
            return None

    def load_manifest(self, path: str) -> Optional[ManifestDocument]:
        """Read and parse a manifest; ``None`` if unreadable or not JSON.

        The document is not validated.
        """
        text = self._read(path)
        if text is None:
            return None
        return self._parse(text, path)

    def list_lock_files(
        self,
        locks_dir: str,
        pattern: str = LOCK_FILE_PATTERN,
    ) -> List[str]:
        """Return the paths of the lock files in ``locks_dir``, unparsed."""
        return self._list(locks_dir, pattern)

    def load_lock_files(
        self,
        locks_dir: str,
        pattern: str = LOCK_FILE_PATTERN,
    ) -> List[ManifestDocument]:
        """Load every valid lock file in ``locks_dir``, in listing order.

        Unreadable, unparseable and structurally invalid files are skipped.
        """
        lock_files: List[ManifestDocument] = []

        for path in self.list_lock_files(locks_dir, pattern):
            document = self.load_manifest(path)
            if document is None:
                self._diag("Failed to read: %s", path)
                continue

            if not validate_manifest(document, debug=self.debug):
                self._diag("Invalid structure in: %s", path)
                continue

            lock_files.append(document)

        return lock_files

    # ------------------------------------------------------------------
    # Check
    # ------------------------------------------------------------------

    def check(
        self,
        manifest_path: str,
        locks_dir: str,
        pattern: str = LOCK_FILE_PATTERN,
    ) -> CheckResult:
        """Compare the installed manifest against every lock file.

        Args:
            manifest_path: Path of the installed manifest.
            locks_dir: Directory holding lock files.
            pattern: Glob selecting lock files inside ``locks_dir``.

        Returns:
            A :class:`CheckResult`; see :class:`CheckStatus` for outcomes.
        """
        installed = self.load_manifest(manifest_path)
        if installed is None:
            self._diag("Manifest file could not be read.")
            return CheckResult(CheckStatus.MANIFEST_UNREADABLE)

        if not validate_manifest(installed, debug=self.debug):
            self._diag("Manifest JSON structure is invalid.")
            return CheckResult(CheckStatus.MANIFEST_INVALID)

        lock_files = self.load_lock_files(locks_dir, pattern)
        if not lock_files:
            self._diag("No valid lock files in %s", locks_dir)
            return CheckResult(CheckStatus.NO_LOCK_FILES)

        merged = merge_lock_files(lock_files)
        issues = diff_manifest(merged, installed, debug=self.debug)

        if issues is None:
            return CheckResult(
                CheckStatus.MANIFEST_INVALID,
                merged=merged,
                lock_file_count=len(lock_files),
            )

        logger.info(
            "Checked %d requirement(s) from %d lock file(s): %d issue(s)",
            len(merged),
            len(lock_files),
            len(issues),
        )
        return CheckResult(
            CheckStatus.ISSUES if issues else CheckStatus.OK,
            issues=issues,
            merged=merged,
            lock_file_count=len(lock_files),
        )

    # ------------------------------------------------------------------
    # Repair
    # ------------------------------------------------------------------

    def preview_manifest(
        self,
        manifest_path: str,
        issues: Sequence[Issue],
    ) -> Optional[str]:
        """Return the manifest text with ``issues`` applied, without writing it.

        ``None`` when the manifest cannot be read or patched.
        """
        text = self._read(manifest_path)
        if text is None:
            logger.error("Failed to read manifest: %s", manifest_path)
            return None
        return patch_manifest(text, issues)

    def update_manifest(self, manifest_path: str, issues: Sequence[Issue]) -> bool:
        """Apply ``issues`` to the manifest at ``manifest_path``.

        Nothing is written when the manifest cannot be read or patched.
        """
        patched = self.preview_manifest(manifest_path, issues)
        if patched is None:
            return False

        if not self._write(manifest_path, patched):
            logger.error("Failed to write manifest: %s", manifest_path)
            return False

        logger.info("Updated %d package(s) in %s", len(issues), manifest_path)
        return True

    def fix(self, manifest_path: str, issues: Sequence[Issue]) -> FixResult:
        """Patch the manifest, then run the external resolver if one is set."""
        if not self.update_manifest(manifest_path, issues):
            return FixResult(patched=False)

        if self.resolver is None:
            return FixResult(patched=True)

        try:
            resolved = bool(self.resolver.trigger_external_resolve())
        except Exception as exc:
            logger.error("Failed to trigger external resolve: %s", exc)
            resolved = False

        if not resolved:
            logger.warning("Manifest updated but packages were not resolved")
        return FixResult(patched=True, resolved=resolved)

    # ------------------------------------------------------------------
    # Lock file generation
    # ------------------------------------------------------------------

    def create_lock_file(
        self,
        lock_data: ManifestDocument,
        file_name: str,
        locks_dir: str,
    ) -> bool:
        """Write ``lock_data`` as ``locks_dir/file_name``."""
        path = os.path.join(locks_dir, file_name)

        if not self._write(path, lock_data.to_json()):
            logger.error("Failed to create lock file '%s'", file_name)
            return False

        logger.info("Created lock file %s with %d package(s)", path, len(lock_data))
        return True

    def generate_lock_file(
        self,
        manifest_path: str,
        selection: Mapping[str, bool],
        file_name: str,
        locks_dir: str,
    ) -> Optional[ManifestDocument]:
        """Compose a lock file from the selected installed packages and write it.

        Returns:
            The written lock document, or ``None`` if the manifest could not
            be loaded or the file could not be written.
        """
        installed = self.load_manifest(manifest_path)
        if installed is None:
            logger.error("Failed to load current packages from %s", manifest_path)
            return None

        lock_data = compose_lock_file(installed, selection)
        if not self.create_lock_file(lock_data, file_name, locks_dir):
            return None
        return lock_data

    # ------------------------------------------------------------------
    # Accepting the installed state
    # ------------------------------------------------------------------

    def disable_lock_files(
        self,
        locks_dir: str,
        disabled_dir: Optional[str] = None,
        pattern: str = LOCK_FILE_PATTERN,
    ) -> DisableResult:
        """Move every lock file out of ``locks_dir`` so it no longer applies.

        Accepts the installed versions as they are: once the lock files are
        gone, :meth:`check` has nothing to compare against. Files keep their
        names, so moving them back restores the previous requirements. A
        file of the same name already in ``disabled_dir`` is replaced.

        Args:
            locks_dir: Directory holding lock files.
            disabled_dir: Destination; defaults to :func:`disabled_locks_dir`.
            pattern: Glob selecting lock files inside ``locks_dir``.
        """
        if disabled_dir is None:
            disabled_dir = disabled_locks_dir(locks_dir)

        result = DisableResult()
        for path in self.list_lock_files(locks_dir, pattern):
            destination = os.path.join(disabled_dir, os.path.basename(path))
            if self._move(path, destination):
                result.moved.append(destination)
            else:
                logger.warning("Failed to move %s", path)
                result.failed.append(path)

        logger.info(
            "Moved %d lock file(s) to %s", len(result.moved), disabled_dir
        )
        return result
