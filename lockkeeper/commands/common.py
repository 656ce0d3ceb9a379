"""Helpers shared by the lockkeeper subcommands."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click

from lockkeeper.context import LockKeeperContext
from lockkeeper.core import CheckResult, CheckStatus, CommandResolver, Reconciler
from lockkeeper.models import Issue
from lockkeeper.utils import (
    backup_and_write_text,
    colorize_update_type,
    get_update_type,
    list_files,
    move_file,
    print_table,
    read_text,
    write_text,
)

#: Shared ``--manifest`` option.
manifest_option = click.option(
    "--manifest",
    "-m",
    "manifest",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Installed manifest (default: Packages/vpm-manifest.json).",
)

#: Shared ``--locks-dir`` option.
locks_dir_option = click.option(
    "--locks-dir",
    "-l",
    "locks_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory containing lock files (default: Locks).",
)

#: Human-readable explanations of failed check runs.
STATUS_MESSAGES: Dict[CheckStatus, str] = {
    CheckStatus.MANIFEST_UNREADABLE: "Manifest file could not be read: {manifest}",
    CheckStatus.MANIFEST_INVALID: "Manifest JSON structure is invalid: {manifest}",
}


def resolve_paths(
    ctx: LockKeeperContext,
    manifest: Optional[Path],
    locks_dir: Optional[Path],
) -> Tuple[str, str]:
    """Apply CLI overrides on top of the configured paths."""
    config = ctx.config
    return (
        str(manifest) if manifest is not None else config.manifest_path,
        str(locks_dir) if locks_dir is not None else config.locks_dir,
    )


def build_reconciler(
    ctx: LockKeeperContext,
    *,
    backup: bool = False,
    resolve: bool = True,
) -> Reconciler:
    """Create a disk-backed :class:`Reconciler` from the CLI context.

    Args:
        ctx: CLI context holding the loaded configuration.
        backup: Back up files before rewriting them (or'ed with config).
        resolve: Wire up the configured resolve command, if any.
    """
    config = ctx.config
    resolver = None
    if resolve and config.resolve_command:
        resolver = CommandResolver(config.resolve_command)

    return Reconciler(
        read_text,
        backup_and_write_text if (backup or config.backup) else write_text,
        list_files,
        move_file=move_file,
        resolver=resolver,
        debug=config.debug,
    )


def failure_message(result: CheckResult, manifest: str) -> Optional[str]:
    """Return an error message for a failed run, ``None`` if it succeeded."""
    template = STATUS_MESSAGES.get(result.status)
    return template.format(manifest=manifest) if template else None


def issue_rows(issues: List[Issue]) -> List[Dict[str, Any]]:
    """Build table rows for a list of issues."""
    rows = []
    for issue in issues:
        change = get_update_type(issue.actual_version, issue.expected_version)
        rows.append(
            {
                "Status": (
                    "[cyan]MISSING[/cyan]"
                    if issue.is_missing
                    else "[yellow]MISMATCH[/yellow]"
                ),
                "Package": issue.package,
                "Installed": issue.actual_version or "[dim]-[/dim]",
                "Required": f"[bold green]{issue.expected_version}[/bold green]",
                "Change": colorize_update_type(change),
            }
        )
    return rows


def print_issue_table(issues: List[Issue], *, title: str) -> None:
    """Render issues as a Rich table."""
    column_styles = {
        "Status": {"justify": "center", "no_wrap": True},
        "Package": {"style": "bold cyan", "no_wrap": True},
        "Installed": {"justify": "center", "style": "dim"},
        "Required": {"justify": "center"},
        "Change": {"justify": "center"},
    }
    print_table(issue_rows(issues), title=title, column_styles=column_styles)
