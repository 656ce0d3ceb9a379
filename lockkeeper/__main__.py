"""
Executable module for lockkeeper.

Running:
    python -m lockkeeper

is equivalent to:
    lockkeeper

This module simply forwards execution to the CLI entrypoint defined in
`lockkeeper.cli`.
"""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    """Report a CLI import failure on stderr."""
    sys.stderr.write("lockkeeper CLI could not be loaded.\n")
    sys.stderr.write(f"Python version : {sys.version}\n")
    try:
        from lockkeeper.__version__ import __version__

        sys.stderr.write(f"lockkeeper version: {__version__}\n")
    except ImportError:
        sys.stderr.write("lockkeeper version: <unknown>\n")
    sys.stderr.write("\n")
    sys.stderr.write(f"ImportError: {exc}\n")


def main() -> int:
    """
    Main entrypoint when executing `python -m lockkeeper`.

    Returns:
        Exit code returned by the CLI.
    """
    try:
        # Import lazily so dependencies are only loaded during CLI use
        from lockkeeper.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
