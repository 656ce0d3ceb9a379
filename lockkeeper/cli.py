"""
Command-line interface for lockkeeper.

``lockkeeper`` is a Click group. The group callback sets up logging,
loads the configuration file and stores both on a
:class:`~lockkeeper.context.LockKeeperContext` for the subcommands in
:mod:`lockkeeper.commands`. :func:`main` is the console script entry point
and owns the mapping from outcomes to process exit codes.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from lockkeeper.config import load_config
from lockkeeper.__version__ import __version__
from lockkeeper.context import LockKeeperContext
from lockkeeper.exceptions import ConfigError, LockKeeperError
from lockkeeper.commands.accept import accept
from lockkeeper.commands.check import check
from lockkeeper.commands.fix import fix
from lockkeeper.commands.lock import lock
from lockkeeper.utils.logger import get_logger, level_for_verbosity, setup_logging
from lockkeeper.utils.console import print_error, print_warning, reconfigure_console

logger = get_logger("cli")

#: Exit status for Ctrl+C, as a shell reports SIGINT.
EXIT_INTERRUPTED = 130


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar="LOCKKEEPER_CONFIG",
    help="Configuration file (default: lockkeeper.toml or pyproject.toml).",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Log more detail: -v for INFO, -vv for DEBUG.",
)
@click.option(
    "--color/--no-color",
    default=True,
    envvar="LOCKKEEPER_COLOR",
    help="Enable or disable colored output.",
)
@click.version_option(__version__, prog_name="lockkeeper", message="%(prog)s %(version)s")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """lockkeeper - keep installed packages in line with author lock files.

    \b
    Commands:
      lockkeeper check     Report missing or mismatched packages
      lockkeeper fix       Patch the manifest and resolve packages
      lockkeeper lock      Write a lock file from installed packages
      lockkeeper accept    Accept installed versions, disabling lock files

    \b
    Examples:
      lockkeeper check --format json
      lockkeeper fix --dry-run
      lockkeeper lock --author Me --asset Avatar --all
    """
    level = level_for_verbosity(verbose)
    setup_logging(level=level, verbose=verbose >= 2)
    logger.debug("lockkeeper %s, log level %s", __version__, logging.getLevelName(level))

    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    try:
        settings = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    state = LockKeeperContext()
    state.config_path = config or settings.source_path
    state.verbose = verbose
    state.color = color
    state.config = settings
    ctx.obj = state

    if settings.source_path:
        logger.debug("Configuration from %s: %s", settings.source_path, settings.to_log_dict())


cli.add_command(check)
cli.add_command(fix)
cli.add_command(lock)
cli.add_command(accept)


def main() -> int:
    """Run the CLI and return its exit code.

    ``0`` success, ``1`` issues found or any failure, ``2`` usage error,
    ``130`` interrupted.
    """
    try:
        cli(standalone_mode=False)
    except SystemExit as exc:
        # Commands finish with sys.exit(); keep their status
        if exc.code is None:
            return 0
        return exc.code if isinstance(exc.code, int) else 1
    except (KeyboardInterrupt, click.exceptions.Abort):
        print_warning("\nOperation cancelled by user")
        return EXIT_INTERRUPTED
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except LockKeeperError as exc:
        print_error(str(exc))
        logger.debug("Details: %s", exc.details or "<none>", exc_info=True)
        return 1
    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
