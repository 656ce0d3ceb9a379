"""lockkeeper version information.

Single source of truth for the package version, read by ``--version`` and
by the startup error report of ``python -m lockkeeper``.
"""

__version__ = "0.1.0"
