"""Accept command implementation for lockkeeper.

Accepts the installed package versions as they are by moving the lock
files out of the locks directory into a sibling ``Locks_Disabled``
directory. Afterwards ``check`` has nothing to compare against. The files
keep their names; moving them back restores the old requirements.

Typical usage::

    $ lockkeeper accept
    $ lockkeeper accept -y --disabled-dir Archive/Locks
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from lockkeeper.context import pass_context, LockKeeperContext
from lockkeeper.core import disabled_locks_dir
from lockkeeper.commands.common import build_reconciler, locks_dir_option
from lockkeeper.utils import (
    confirm,
    get_logger,
    print_error,
    print_info,
    print_success,
    print_warning,
)

logger = get_logger("commands.accept")


@click.command()
@locks_dir_option
@click.option(
    "--disabled-dir",
    "disabled_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Where to move the lock files (default: Locks_Disabled beside the locks directory).",
)
@click.option(
    "--yes",
    "-y",
    is_flag=True,
    help="Skip confirmation prompt.",
)
@pass_context
def accept(
    ctx: LockKeeperContext,
    locks_dir: Optional[Path],
    disabled_dir: Optional[Path],
    yes: bool,
) -> None:
    """Accept installed versions by disabling every lock file."""
    config = ctx.config
    locks_path = str(locks_dir) if locks_dir is not None else config.locks_dir
    if disabled_dir is not None:
        target = str(disabled_dir)
    else:
        target = disabled_locks_dir(locks_path)

    reconciler = build_reconciler(ctx, resolve=False)

    lock_files = reconciler.list_lock_files(locks_path, config.lock_pattern)
    if not lock_files:
        print_warning(f"No lock files found in {locks_path}")
        sys.exit(0)

    if not yes and not confirm(
        f"Move {len(lock_files)} lock file(s) to {target}?",
        default=False,
    ):
        logger.info("Accept cancelled by user")
        print_info("No changes made")
        sys.exit(0)

    result = reconciler.disable_lock_files(locks_path, target, config.lock_pattern)

    if result.moved:
        print_success(f"Moved {len(result.moved)} lock file(s) to {target}")
        print_info("Move them back to restore the requirements")

    if not result.succeeded():
        print_error(f"Failed to move: {', '.join(result.failed)}")
        sys.exit(1)

    sys.exit(0)
