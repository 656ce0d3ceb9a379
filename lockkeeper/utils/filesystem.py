"""
Filesystem utilities for lockkeeper.

Two layers live here:

- ``safe_*`` helpers that read, atomically write and move text files and raise
  :class:`~lockkeeper.exceptions.FileOperationError` on any failure.
- Disk-backed implementations of the engine's I/O collaborators
  (:func:`read_text`, :func:`write_text`, :func:`list_files`,
  :func:`move_file`). These never raise; failures become ``None`` /
  ``False`` / ``[]`` as the :class:`~lockkeeper.core.reconciler.Reconciler`
  expects.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from datetime import datetime
from typing import List, Optional, Union

from lockkeeper.utils.logger import get_logger
from lockkeeper.exceptions import FileOperationError
from lockkeeper.constants import LOCK_FILE_PATTERN, MAX_FILE_SIZE

logger = get_logger("filesystem")

PathLike = Union[str, Path]


def _validated_file(path: Path) -> Path:
    """Resolve ``path`` and make sure it is an existing regular file."""
    if not path.exists():
        raise FileOperationError(
            f"File not found: {path}",
            file_path=str(path),
            operation="read",
        )
    if not path.is_file():
        raise FileOperationError(
            f"Not a file: {path}",
            file_path=str(path),
            operation="read",
        )
    return path.resolve()


def _atomic_write(target: Path, content: str) -> None:
    """Atomically write text to a file using a temporary file + replace."""
    temp_path: Optional[Path] = None

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            newline="",
            dir=str(target.parent),
            delete=False,
            prefix=f".{target.name}.",
            suffix=".tmp",
        ) as tmp:
            temp_path = Path(tmp.name)
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())

        temp_path.replace(target)

    except OSError as exc:
        if temp_path and temp_path.exists():
            try:
                temp_path.unlink()
                logger.debug("Cleaned up temporary file: %s", temp_path)
            except OSError as cleanup_exc:
                logger.warning(
                    "Failed to clean up temporary file %s: %s",
                    temp_path,
                    cleanup_exc,
                )

        raise FileOperationError(
            f"Atomic write failed: {exc}",
            file_path=str(target),
            operation="write",
            original_error=exc,
        ) from exc


def create_backup(file_path: PathLike) -> Path:
    """Copy ``file_path`` to ``<name>.<timestamp>.backup`` next to it."""
    path = _validated_file(Path(file_path))
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    backup_path = path.with_name(f"{path.name}.{timestamp}.backup")

    try:
        shutil.copy2(path, backup_path)
    except OSError as exc:
        raise FileOperationError(
            f"Failed to create backup: {exc}",
            file_path=str(path),
            operation="backup",
            original_error=exc,
        ) from exc

    logger.debug("Created backup: %s", backup_path)
    return backup_path


def safe_read_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
    encoding: str = "utf-8-sig",
) -> str:
    """Read a text file, refusing files larger than ``max_size`` bytes.

    Args:
        file_path: Path to the file.
        max_size: Maximum allowed file size in bytes (None disables limit).
        encoding: Text encoding. The default also accepts a UTF-8 BOM.

    Returns:
        File contents as a string.

    Raises:
        FileOperationError: The file is missing, too large or unreadable.
    """
    path = _validated_file(Path(file_path))
    size = path.stat().st_size

    if max_size is not None and size > max_size:
        raise FileOperationError(
            f"File too large: {size} bytes (max {max_size})",
            file_path=str(path),
            operation="read",
        )

    try:
        with open(path, "r", encoding=encoding, newline="") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise FileOperationError(
            f"Failed to read file: {exc}",
            file_path=str(path),
            operation="read",
            original_error=exc,
        ) from exc


def safe_move_file(source: PathLike, destination: PathLike) -> Path:
    """Move a file to ``destination``, replacing a file already there.

    Parent directories of ``destination`` are created as needed.

    Returns:
        The destination path.

    Raises:
        FileOperationError: ``source`` is not a file or the move failed.
    """
    path = _validated_file(Path(source))
    target = Path(destination)

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        if target.is_file():
            target.unlink()
        shutil.move(str(path), str(target))
    except OSError as exc:
        raise FileOperationError(
            f"Failed to move file: {exc}",
            file_path=str(path),
            operation="move",
            original_error=exc,
        ) from exc

    logger.debug("Moved %s to %s", path, target)
    return target


def safe_write_file(
    file_path: PathLike,
    content: str,
    *,
    backup: bool = False,
) -> Optional[Path]:
    """Write text to a file using atomic replacement.

    Parent directories are created as needed. When ``backup`` is set and
    the file already exists, a timestamped copy is made first.

    Args:
        file_path: Destination path.
        content: Text content to write.
        backup: Whether to create a backup before writing.

    Returns:
        Path to the created backup, if any.

    Raises:
        FileOperationError: The backup or the write failed.
    """
    path = Path(file_path)
    backup_path: Optional[Path] = None

    if backup and path.is_file():
        backup_path = create_backup(path)

    _atomic_write(path, content)
    return backup_path


# ---------------------------------------------------------------------------
# Engine collaborators
# ---------------------------------------------------------------------------


def read_text(path: str) -> Optional[str]:
    """Return the text at ``path``, or ``None`` if it cannot be read."""
    try:
        return safe_read_file(path)
    except FileOperationError as exc:
        logger.debug("Cannot read %s: %s", path, exc)
        return None


def write_text(path: str, text: str) -> bool:
    """Atomically write ``text`` to ``path``; return whether it succeeded."""
    try:
        safe_write_file(path, text)
    except FileOperationError as exc:
        logger.error("Cannot write %s: %s", path, exc)
        return False
    return True


def backup_and_write_text(path: str, text: str) -> bool:
    """Like :func:`write_text`, keeping a timestamped copy of the old file."""
    try:
        backup_path = safe_write_file(path, text, backup=True)
    except FileOperationError as exc:
        logger.error("Cannot write %s: %s", path, exc)
        return False
    if backup_path is not None:
        logger.info("Backed up %s to %s", path, backup_path)
    return True


def move_file(source: str, destination: str) -> bool:
    """Move ``source`` to ``destination``; return whether it succeeded."""
    try:
        safe_move_file(source, destination)
    except FileOperationError as exc:
        logger.error("Cannot move %s: %s", source, exc)
        return False
    return True


def list_files(directory: str, pattern: str) -> List[str]:
    """List files directly inside ``directory`` matching a glob ``pattern``.

    The listing is not recursive and is sorted by file name so that the
    merge order of lock files is reproducible. A missing directory yields
    an empty list.
    """
    root = Path(directory)
    if not root.is_dir():
        logger.debug("Directory not found: %s", root)
        return []

    try:
        matches = [p for p in root.glob(pattern) if p.is_file()]
    except OSError as exc:
        logger.warning("Cannot list %s: %s", root, exc)
        return []

    return [str(p) for p in sorted(matches, key=lambda p: p.name)]


def find_lock_files(directory: PathLike, pattern: str = LOCK_FILE_PATTERN) -> List[str]:
    """Return the lock files found in ``directory``."""
    return list_files(str(directory), pattern)
