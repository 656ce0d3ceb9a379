"""Tests for lockkeeper.exceptions."""

from __future__ import annotations

import pytest

from lockkeeper.exceptions import (
    ConfigError,
    FileOperationError,
    LockKeeperError,
    ParseError,
)


@pytest.mark.unit
class TestLockKeeperError:
    """Tests for the base exception."""

    def test_message_only(self) -> None:
        """Test str() is the message when there are no details."""
        exc = LockKeeperError("something broke")

        assert str(exc) == "something broke"
        assert exc.details == {}

    def test_details_in_str(self) -> None:
        """Test details are appended to the message."""
        exc = LockKeeperError("bad", {"path": "a.json"})
        assert str(exc) == "bad (path=a.json)"

    def test_repr(self) -> None:
        """Test repr names the class and details."""
        assert repr(LockKeeperError("x", {"k": 1})) == (
            "LockKeeperError(message='x', details={'k': 1})"
        )


@pytest.mark.unit
class TestSubclasses:
    """Tests for the specialised exceptions."""

    def test_hierarchy(self) -> None:
        """Test every error is a LockKeeperError."""
        for cls in (ParseError, FileOperationError, ConfigError):
            assert issubclass(cls, LockKeeperError)

    def test_parse_error_truncates_content(self) -> None:
        """Test long documents are cut down in details."""
        exc = ParseError("Invalid JSON", file_path="a.json", content="x" * 500)

        assert exc.file_path == "a.json"
        assert exc.content == "x" * 500
        assert exc.details["file"] == "a.json"
        assert exc.details["content"].endswith("...")
        assert len(exc.details["content"]) == 203

    def test_file_operation_error(self) -> None:
        """Test the original error is recorded."""
        original = PermissionError("denied")
        exc = FileOperationError(
            "write failed", file_path="a.json", operation="write", original_error=original
        )

        assert exc.original_error is original
        assert exc.details["path"] == "a.json"
        assert exc.details["operation"] == "write"

    def test_config_error(self) -> None:
        """Test config path and option are recorded."""
        exc = ConfigError("bad value", config_path="lockkeeper.toml", option="backup")

        assert exc.details == {"config": "lockkeeper.toml", "option": "backup"}
        assert exc.option == "backup"
