"""External resolver implementations.

After the manifest is repaired, the packages it now declares still have to
be installed. lockkeeper does not install anything itself; it runs a
command the project configures (``resolve_command``), e.g.::

    [lockkeeper]
    resolve_command = ["vpm", "resolve", "project"]
"""

from __future__ import annotations

import shlex
import subprocess
from typing import List, Optional, Sequence, Union

from lockkeeper.utils.logger import get_logger

logger = get_logger("resolver")


class CommandResolver:
    """Run a command to resolve the repaired manifest.

    Args:
        command: Argument vector, or a string split with :func:`shlex.split`.
        cwd: Working directory for the command (the project root).

    Raises:
        ValueError: If ``command`` is empty.
    """

    def __init__(
        self,
        command: Union[str, Sequence[str]],
        cwd: Optional[str] = None,
    ) -> None:
        argv: List[str] = (
            shlex.split(command) if isinstance(command, str) else list(command)
        )
        if not argv:
            raise ValueError("resolve command must not be empty")

        self.command: List[str] = argv
        self.cwd: Optional[str] = cwd

    def trigger_external_resolve(self) -> bool:
        """Run the command; ``True`` if it exits with status 0."""
        logger.info("Running: %s", " ".join(self.command))

        try:
            result = subprocess.run(self.command, cwd=self.cwd, check=False)  # noqa: S603
        except OSError as exc:
            logger.error("Failed to run resolver %s: %s", self.command[0], exc)
            return False

        if result.returncode != 0:
            logger.error("Resolver exited with status %d", result.returncode)
            return False

        return True

    def __repr__(self) -> str:
        return f"CommandResolver(command={self.command!r}, cwd={self.cwd!r})"
