"""
Exceptions raised by lockkeeper.

The reconciliation engine reports failures as return values. Exceptions
are reserved for the layers around it: the document parser, the
filesystem helpers and the configuration loader. The
:class:`~lockkeeper.core.reconciler.Reconciler` converts them back into
failure values, and the CLI turns whatever reaches it into an exit code.

Every exception carries a ``details`` mapping with the context needed to
diagnose it (file, option, operation).
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

#: Longest document excerpt kept in ``details``.
EXCERPT_LENGTH = 200


def _context(**values: Any) -> Dict[str, Any]:
    """Keep only the keyword arguments that carry a value."""
    return {key: value for key, value in values.items() if value is not None}


def _excerpt(text: Optional[str]) -> Optional[str]:
    """Shorten ``text`` to :data:`EXCERPT_LENGTH` characters."""
    if text is None or len(text) <= EXCERPT_LENGTH:
        return text
    return text[:EXCERPT_LENGTH] + "..."


class LockKeeperError(Exception):
    """Root of the lockkeeper exception hierarchy.

    Args:
        message: What went wrong, for the user.
        details: Context for diagnostics; rendered after the message.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.details: Dict[str, Any] = dict(details or {})

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"details={self.details!r})"
        )


class ParseError(LockKeeperError):
    """A manifest or lock file is not a JSON object.

    Args:
        message: Parser error.
        file_path: Document the text came from, if known.
        content: Document text; only an excerpt goes into ``details``.
    """

    __slots__ = ("file_path", "content")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        content: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            _context(file=file_path, content=_excerpt(content)),
        )
        self.file_path = file_path
        self.content = content


class FileOperationError(LockKeeperError):
    """Reading, writing or backing up a file failed.

    Args:
        message: Error description.
        file_path: File involved.
        operation: ``read``, ``write``, ``backup`` or ``move``.
        original_error: Underlying ``OSError`` or decoding error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(
            message,
            _context(
                path=file_path,
                operation=operation,
                original_error=str(original_error) if original_error else None,
            ),
        )
        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class ConfigError(LockKeeperError):
    """The configuration file is missing, unreadable or holds bad values.

    Args:
        message: Error description.
        config_path: Configuration file involved.
        option: Offending option, if the error concerns one.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        super().__init__(message, _context(config=config_path, option=option))
        self.config_path = config_path
        self.option = option
