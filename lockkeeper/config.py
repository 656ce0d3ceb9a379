"""Configuration file loader for lockkeeper.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``lockkeeper.toml``: settings under ``[lockkeeper]`` table
- ``pyproject.toml``: settings under ``[tool.lockkeeper]`` table

Discovery order:

1. Explicit path from ``--config`` or ``LOCKKEEPER_CONFIG``
2. ``lockkeeper.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.lockkeeper]`` section

Configuration precedence: defaults < config file < CLI args.

Example (``lockkeeper.toml``)::

    [lockkeeper]
    manifest_path = "Packages/vpm-manifest.json"
    locks_dir = "Assets/MyAsset/Locks"
    resolve_command = ["vpm", "resolve", "project"]
    backup = true
"""

from __future__ import annotations

import shlex
import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from lockkeeper.exceptions import ConfigError
from lockkeeper.utils.logger import get_logger
from lockkeeper.constants import (
    DEFAULT_BACKUP,
    DEFAULT_DEBUG,
    DEFAULT_LOCKS_DIR,
    DEFAULT_MANIFEST_PATH,
    LOCK_FILE_PATTERN,
)

logger = get_logger("config")


@dataclass
class LockKeeperConfig:
    """Parsed and validated lockkeeper configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        manifest_path: Installed manifest, relative to the working directory.
        locks_dir: Directory scanned for lock files.
        lock_pattern: Glob selecting lock files inside ``locks_dir``.
        resolve_command: Command run after the manifest is fixed, or
            ``None`` to skip resolving.
        backup: Keep a timestamped copy of the manifest before rewriting it.
        debug: Emit engine diagnostics at INFO level.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    manifest_path: str = DEFAULT_MANIFEST_PATH
    locks_dir: str = DEFAULT_LOCKS_DIR
    lock_pattern: str = LOCK_FILE_PATTERN
    resolve_command: Optional[List[str]] = None
    backup: bool = DEFAULT_BACKUP
    debug: bool = DEFAULT_DEBUG

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration options for debug logging, without metadata."""
        return {
            "manifest_path": self.manifest_path,
            "locks_dir": self.locks_dir,
            "lock_pattern": self.lock_pattern,
            "resolve_command": self.resolve_command,
            "backup": self.backup,
            "debug": self.debug,
        }


#: File names searched in the working directory, in order.
_CANDIDATES = ("lockkeeper.toml", "pyproject.toml")


def _section_of(raw: Dict[str, Any], path: Path) -> Optional[Any]:
    """Return the lockkeeper table of a decoded file, or ``None`` if absent.

    ``pyproject.toml`` keeps it under ``[tool.lockkeeper]``; any other file
    under ``[lockkeeper]``.
    """
    if path.name == "pyproject.toml":
        tool = raw.get("tool")
        return tool.get("lockkeeper") if isinstance(tool, dict) else None
    return raw.get("lockkeeper")


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Locate the configuration file.

    An explicit path must exist. Otherwise ``lockkeeper.toml`` in the
    working directory is used, then ``pyproject.toml`` if it has a
    ``[tool.lockkeeper]`` table.

    Raises:
        ConfigError: ``explicit_path`` does not name a file.
    """
    if explicit_path is not None:
        if not explicit_path.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        return explicit_path.resolve()

    for name in _CANDIDATES:
        candidate = Path.cwd() / name
        if not candidate.is_file():
            continue
        if name == "pyproject.toml" and not _pyproject_has_lockkeeper_section(candidate):
            continue
        logger.debug("Found configuration file %s", candidate)
        return candidate

    return None


def _pyproject_has_lockkeeper_section(path: Path) -> bool:
    """Return True if ``path`` parses and has a ``[tool.lockkeeper]`` table."""
    try:
        return _section_of(_read_toml(path), path) is not None
    except ConfigError:
        return False


def load_config(config_path: Optional[Path] = None) -> LockKeeperConfig:
    """Load the configuration, falling back to defaults when there is none.

    Args:
        config_path: File named by ``--config``; discovered when ``None``.

    Raises:
        ConfigError: The file cannot be read or holds invalid settings.
    """
    path = discover_config_file(config_path)
    if path is None:
        logger.debug("No configuration file, using defaults")
        return LockKeeperConfig()

    section = _section_of(_read_toml(path), path)
    if section is None or section == {}:
        return LockKeeperConfig(source_path=path)
    if not isinstance(section, dict):
        raise ConfigError(
            "lockkeeper settings must be a TOML table",
            config_path=str(path),
        )

    config = _parse_section(section, config_path=str(path))
    config.source_path = path
    logger.info("Loaded configuration from %s", path)
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


_STRING_OPTIONS = ("manifest_path", "locks_dir", "lock_pattern")
_BOOL_OPTIONS = ("backup", "debug")


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> LockKeeperConfig:
    """Validate a ``[lockkeeper]`` / ``[tool.lockkeeper]`` table.

    Raises:
        ConfigError: Unknown keys, wrong types or empty values.
    """
    config = LockKeeperConfig()

    known = set(_STRING_OPTIONS) | set(_BOOL_OPTIONS) | {"resolve_command"}
    unknown = set(section.keys()) - known
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    for option in _STRING_OPTIONS:
        if option not in section:
            continue
        val = section[option]
        if not isinstance(val, str) or not val.strip():
            raise ConfigError(
                f"{option} must be a non-empty string, got {val!r}",
                config_path=config_path,
                option=option,
            )
        setattr(config, option, val)

    for option in _BOOL_OPTIONS:
        if option not in section:
            continue
        val = section[option]
        if not isinstance(val, bool):
            raise ConfigError(
                f"{option} must be a boolean, got {type(val).__name__}",
                config_path=config_path,
                option=option,
            )
        setattr(config, option, val)

    if "resolve_command" in section:
        config.resolve_command = _parse_command(
            section["resolve_command"], config_path=config_path
        )

    return config


def _parse_command(value: Any, *, config_path: str) -> List[str]:
    """Accept a command as a string or a list of strings."""
    if isinstance(value, str):
        argv = shlex.split(value)
    elif isinstance(value, list) and all(isinstance(v, str) for v in value):
        argv = list(value)
    else:
        raise ConfigError(
            "resolve_command must be a string or a list of strings",
            config_path=config_path,
            option="resolve_command",
        )

    if not argv:
        raise ConfigError(
            "resolve_command must not be empty",
            config_path=config_path,
            option="resolve_command",
        )
    return argv
