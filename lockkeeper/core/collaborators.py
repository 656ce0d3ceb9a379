"""I/O seams of the reconciliation engine.

The engine never touches storage itself. A host supplies these callables,
typically the disk-backed ones in :mod:`lockkeeper.utils.filesystem`, or
in-memory fakes in tests. Implementations should report failure through
their return value; the :class:`~lockkeeper.core.reconciler.Reconciler`
also converts any exception they raise into a failed step.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Protocol, runtime_checkable

#: ``read_text(path)`` → document text, or ``None`` if it cannot be read.
ReadText = Callable[[str], Optional[str]]

#: ``write_text(path, text)`` → ``True`` on success.
WriteText = Callable[[str, str], bool]

#: ``list_files(directory, pattern)`` → matching paths, in merge order.
ListFiles = Callable[[str, str], List[str]]

#: ``move_file(source, destination)`` → ``True`` once ``source`` is gone and
#: ``destination`` holds its content. An existing destination is replaced.
MoveFile = Callable[[str, str], bool]


@runtime_checkable
class ExternalResolver(Protocol):
    """Installs whatever the repaired manifest now declares.

    Wired up by the host when such a tool exists (for VPM projects, the
    ``vpm resolve`` command); the engine calls it after a successful fix.
    """

    def trigger_external_resolve(self) -> bool:
        """Run the resolver; return ``True`` if it succeeded."""
        ...
