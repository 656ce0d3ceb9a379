"""
Centralized constants for lockkeeper.

This module defines immutable configuration values used across lockkeeper,
including document field names, default project paths, lock file naming,
and logging formats. All values are intended to be treated as read-only.
"""

from typing import Final

# ---------------------------------------------------------------------------
# Manifest document shape
# ---------------------------------------------------------------------------

#: Top-level field holding the package map in manifests and lock files.
LOCKED_FIELD: Final[str] = "locked"

#: Field holding the version string inside a package record.
VERSION_FIELD: Final[str] = "version"

#: Placeholder sub-map written into records inserted by the patcher.
DEPENDENCIES_FIELD: Final[str] = "dependencies"

#: Indentation used when serializing manifests and lock files.
JSON_INDENT: Final[int] = 2

# ---------------------------------------------------------------------------
# Project layout defaults
# ---------------------------------------------------------------------------

#: Installed manifest location, relative to the project root.
DEFAULT_MANIFEST_PATH: Final[str] = "Packages/vpm-manifest.json"

#: Directory scanned for lock files, relative to the project root.
DEFAULT_LOCKS_DIR: Final[str] = "Locks"

#: Sibling directory that receives lock files set aside by ``accept``.
DISABLED_LOCKS_DIR_NAME: Final[str] = "Locks_Disabled"

#: Glob pattern selecting lock files inside the locks directory.
LOCK_FILE_PATTERN: Final[str] = "*.json"

#: Suffix appended to generated lock files.
LOCK_FILE_SUFFIX: Final[str] = ".lock.json"

# ---------------------------------------------------------------------------
# Configuration defaults
# ---------------------------------------------------------------------------

#: Create a backup of the manifest before it is rewritten.
DEFAULT_BACKUP: Final[bool] = False

#: Promote engine diagnostics from DEBUG to INFO.
DEFAULT_DEBUG: Final[bool] = False

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed file size (in bytes) when reading manifests and lock files.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
