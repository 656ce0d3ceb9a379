"""Fix command implementation for lockkeeper.

Rewrites the installed manifest so that every package required by the lock
files is present at its required version, then runs the configured
``resolve_command`` so the package manager installs the result.

Only ``version`` values change; every other field of the manifest keeps
its value and position. Missing packages are appended with an empty
``dependencies`` map.

Typical usage::

    # Preview the patched manifest without writing it
    $ lockkeeper fix --dry-run

    # Keep a backup and skip the confirmation prompt
    $ lockkeeper fix --backup -y

    # Patch only; do not run the resolver
    $ lockkeeper fix --no-resolve
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Sequence

import click

from lockkeeper.context import pass_context, LockKeeperContext
from lockkeeper.core import CheckStatus, Reconciler
from lockkeeper.models import Issue
from lockkeeper.commands.common import (
    build_reconciler,
    failure_message,
    locks_dir_option,
    manifest_option,
    print_issue_table,
    resolve_paths,
)
from lockkeeper.utils import (
    confirm,
    get_logger,
    print_error,
    print_info,
    print_success,
    print_warning,
)

logger = get_logger("commands.fix")


@click.command()
@manifest_option
@locks_dir_option
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print the patched manifest without writing it.",
)
@click.option(
    "--yes",
    "-y",
    is_flag=True,
    help="Skip confirmation prompt.",
)
@click.option(
    "--backup",
    is_flag=True,
    help="Create a backup of the manifest before rewriting it.",
)
@click.option(
    "--resolve/--no-resolve",
    default=True,
    help="Run the configured resolve command after patching.",
)
@pass_context
def fix(
    ctx: LockKeeperContext,
    manifest: Optional[Path],
    locks_dir: Optional[Path],
    dry_run: bool,
    yes: bool,
    backup: bool,
    resolve: bool,
) -> None:
    """Repair the installed manifest to satisfy the lock files.

    Exits with status 0 when the manifest already matches or was repaired,
    and 1 when it could not be checked, patched or resolved.
    """
    manifest_path, locks_path = resolve_paths(ctx, manifest, locks_dir)
    reconciler = build_reconciler(ctx, backup=backup, resolve=resolve)

    result = reconciler.check(manifest_path, locks_path, ctx.config.lock_pattern)

    message = failure_message(result, manifest_path)
    if message:
        print_error(message)
        sys.exit(1)

    if result.status is CheckStatus.NO_LOCK_FILES:
        print_warning(f"No valid lock files found in {locks_path}")
        sys.exit(0)

    if not result.has_issues():
        print_success("Manifest already satisfies all lock files")
        sys.exit(0)

    print_issue_table(
        result.issues,
        title="Fix Plan (Dry Run)" if dry_run else "Fix Plan",
    )

    if dry_run:
        _preview(reconciler, manifest_path, result.issues)
        print_warning("\nDry run mode - no changes applied")
        sys.exit(0)

    if not yes and not confirm(
        f"\nUpdate {len(result.issues)} package(s) in {manifest_path}?",
        default=True,
    ):
        logger.info("Fix cancelled by user")
        print_info("No changes made")
        sys.exit(0)

    outcome = reconciler.fix(manifest_path, result.issues)

    if not outcome.patched:
        print_error(f"Failed to update {manifest_path}")
        sys.exit(1)

    print_success(f"Updated {len(result.issues)} package(s) in {manifest_path}")

    if outcome.resolved is None:
        if resolve and not ctx.config.resolve_command:
            print_warning(
                "No resolve_command configured; resolve packages with your "
                "package manager to install the changes"
            )
    elif outcome.resolved:
        print_success("Packages resolved")
    else:
        print_error("Manifest updated but the resolve command failed")
        sys.exit(1)

    sys.exit(0)


def _preview(
    reconciler: Reconciler,
    manifest_path: str,
    issues: Sequence[Issue],
) -> None:
    """Print the manifest as it would be written."""
    patched = reconciler.preview_manifest(manifest_path, issues)
    if patched is None:
        print_error(f"Cannot patch {manifest_path}")
        sys.exit(1)
    click.echo(patched, nl=not patched.endswith("\n"))
