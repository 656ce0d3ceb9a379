"""
Helpers shared by the lockkeeper engine and CLI.

- :mod:`~lockkeeper.utils.filesystem`: safe file I/O and the disk-backed
  engine collaborators
- :mod:`~lockkeeper.utils.logger`: logging setup under the ``lockkeeper``
  namespace
- :mod:`~lockkeeper.utils.console`: Rich output for commands
- :mod:`~lockkeeper.utils.version_utils`: change labels for issue reports
"""

from __future__ import annotations

from lockkeeper.utils.filesystem import (
    backup_and_write_text,
    create_backup,
    find_lock_files,
    list_files,
    move_file,
    read_text,
    safe_move_file,
    safe_read_file,
    safe_write_file,
    write_text,
)
from lockkeeper.utils.logger import (
    diagnostic_level,
    disable_logging,
    get_logger,
    is_logging_configured,
    level_for_verbosity,
    setup_logging,
)
from lockkeeper.utils.console import (
    colorize_update_type,
    confirm,
    get_raw_console,
    print_error,
    print_info,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)
from lockkeeper.utils.version_utils import get_update_type

__all__ = [
    # Filesystem
    "backup_and_write_text",
    "create_backup",
    "find_lock_files",
    "list_files",
    "move_file",
    "read_text",
    "safe_move_file",
    "safe_read_file",
    "safe_write_file",
    "write_text",
    # Logging
    "diagnostic_level",
    "disable_logging",
    "get_logger",
    "is_logging_configured",
    "level_for_verbosity",
    "setup_logging",
    # Console
    "colorize_update_type",
    "confirm",
    "get_raw_console",
    "print_error",
    "print_info",
    "print_success",
    "print_table",
    "print_warning",
    "reconfigure_console",
    # Versions
    "get_update_type",
]
