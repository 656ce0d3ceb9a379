"""Check command implementation for lockkeeper.

Compares the installed manifest against every lock file in the locks
directory and reports packages that are missing or installed at a version
other than the one the lock files require.

When several lock files require the same package, the highest semantic
version wins; see :mod:`lockkeeper.core.merger`.

Typical usage::

    # Report issues as a table
    $ lockkeeper check

    # Machine-readable JSON output
    $ lockkeeper check --format json > report.json

    # Non-default locations
    $ lockkeeper check -m Packages/vpm-manifest.json -l Assets/Locks
"""

from __future__ import annotations

import sys
import json
from pathlib import Path
from typing import List, Optional

import click

from lockkeeper.context import pass_context, LockKeeperContext
from lockkeeper.core import CheckResult, CheckStatus
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
    get_logger,
    get_raw_console,
    print_error,
    print_success,
    print_warning,
)

logger = get_logger("commands.check")


@click.command()
@manifest_option
@locks_dir_option
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "simple", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@pass_context
def check(
    ctx: LockKeeperContext,
    manifest: Optional[Path],
    locks_dir: Optional[Path],
    output_format: str,
) -> None:
    """Check the installed manifest against the lock files.

    Exits with status 0 when every requirement is satisfied (or there are
    no lock files), and 1 when issues were found or the manifest could not
    be checked.
    """
    manifest_path, locks_path = resolve_paths(ctx, manifest, locks_dir)
    logger.info("Checking %s against %s", manifest_path, locks_path)

    reconciler = build_reconciler(ctx, resolve=False)
    result = reconciler.check(manifest_path, locks_path, ctx.config.lock_pattern)

    output_format = output_format.lower()
    if output_format == "json":
        _display_json(result)
    else:
        _report(result, manifest_path, locks_path, output_format)

    sys.exit(0 if result.status in (CheckStatus.OK, CheckStatus.NO_LOCK_FILES) else 1)


def _report(
    result: CheckResult,
    manifest_path: str,
    locks_path: str,
    output_format: str,
) -> None:
    """Print a human-readable report of ``result``."""
    message = failure_message(result, manifest_path)
    if message:
        print_error(message)
        return

    if result.status is CheckStatus.NO_LOCK_FILES:
        print_warning(f"No valid lock files found in {locks_path}")
        return

    if not result.has_issues():
        print_success(
            f"All {len(result.merged)} required package(s) match "
            f"({result.lock_file_count} lock file(s))"
        )
        return

    if output_format == "simple":
        _display_simple(result.issues)
    else:
        print_issue_table(result.issues, title="Package Issues")

    missing = sum(1 for issue in result.issues if issue.is_missing)
    print_warning(
        f"\n{len(result.issues)} issue(s): {missing} missing, "
        f"{len(result.issues) - missing} mismatched. Run 'lockkeeper fix' to repair."
    )


def _display_simple(issues: List[Issue]) -> None:
    """Render issues one per line.

    Example::

        [MISSING]  com.vrchat.avatars    -          → 3.5.0
        [MISMATCH] com.vrcfury.vrcfury   1.1271.0   → 1.1278.0
    """
    console = get_raw_console()
    for issue in issues:
        status = f"[{issue.kind.name}]"
        installed = issue.actual_version or "-"
        console.print(
            f"{status:10} {issue.package:30} {installed:10} → {issue.expected_version}",
            markup=False,
            highlight=False,
        )


def _display_json(result: CheckResult) -> None:
    """Print ``result`` as JSON for machine consumption."""
    data = {
        "status": result.status.value,
        "lock_files": result.lock_file_count,
        "requirements": result.merged,
        "issues": [issue.to_json() for issue in result.issues],
    }
    click.echo(json.dumps(data, indent=2))
