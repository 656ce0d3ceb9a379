"""Lock command implementation for lockkeeper.

Writes an author lock file listing the exact versions of selected installed
packages. The file is named ``<author>_<asset>.lock.json`` and placed in the
locks directory, where ``check`` and ``fix`` pick it up.

Typical usage::

    $ lockkeeper lock --author Noppers --asset Avatar --all
    $ lockkeeper lock --author Noppers --asset Avatar -p com.vrchat.base -p com.vrcfury.vrcfury
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

import click

from lockkeeper.context import pass_context, LockKeeperContext
from lockkeeper.core import compose_lock_file, lock_file_name
from lockkeeper.commands.common import (
    build_reconciler,
    locks_dir_option,
    manifest_option,
    resolve_paths,
)
from lockkeeper.utils import get_logger, print_error, print_success, print_table

logger = get_logger("commands.lock")


@click.command()
@click.option("--author", required=True, help="Author name used in the file name.")
@click.option("--asset", required=True, help="Asset name used in the file name.")
@click.option(
    "--package",
    "-p",
    "packages",
    multiple=True,
    help="Installed package to lock (repeatable).",
)
@click.option(
    "--all",
    "lock_all",
    is_flag=True,
    help="Lock every installed package.",
)
@manifest_option
@locks_dir_option
@pass_context
def lock(
    ctx: LockKeeperContext,
    author: str,
    asset: str,
    packages: Tuple[str, ...],
    lock_all: bool,
    manifest: Optional[Path],
    locks_dir: Optional[Path],
) -> None:
    """Write a lock file pinning installed package versions."""
    if lock_all and packages:
        raise click.UsageError("Use either --package or --all, not both")
    if not lock_all and not packages:
        raise click.UsageError("Select packages with --package or use --all")

    try:
        file_name = lock_file_name(author, asset)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    manifest_path, locks_path = resolve_paths(ctx, manifest, locks_dir)
    reconciler = build_reconciler(ctx, resolve=False)

    installed = reconciler.load_manifest(manifest_path)
    if installed is None:
        print_error(f"Manifest file could not be read: {manifest_path}")
        sys.exit(1)

    available = installed.packages
    if lock_all:
        selection: Dict[str, bool] = {name: True for name in available}
    else:
        unknown = [name for name in packages if name not in available]
        if unknown:
            print_error(f"Not installed: {', '.join(unknown)}")
            sys.exit(1)
        selection = {name: name in packages for name in available}

    logger.info("Locking %d package(s) into %s", sum(selection.values()), file_name)

    lock_data = compose_lock_file(installed, selection)
    if not reconciler.create_lock_file(lock_data, file_name, locks_path):
        print_error(f"Failed to create lock file {file_name}")
        sys.exit(1)

    print_table(
        [
            {"Package": name, "Version": record.version if record else "-"}
            for name, record in lock_data.packages.items()
        ],
        title="Locked Packages",
        column_styles={"Package": {"style": "bold cyan"}},
    )
    print_success(f"Wrote {os.path.join(locks_path, file_name)}")
    sys.exit(0)
