"""Unit tests for lockkeeper.models.issue."""

from __future__ import annotations

import dataclasses

import pytest

from lockkeeper.models.issue import Issue, IssueKind


@pytest.mark.unit
class TestIssue:
    """Tests for Issue."""

    def test_missing(self) -> None:
        """Test an issue without an installed version is a missing package."""
        issue = Issue("com.vrchat.avatars", "3.5.0")

        assert issue.is_missing
        assert issue.kind is IssueKind.MISSING
        assert str(issue) == "Missing: com.vrchat.avatars (v3.5.0)"

    def test_mismatch(self) -> None:
        """Test an issue with an installed version is a mismatch."""
        issue = Issue("com.vrcfury.vrcfury", "1.1278.0", "1.1271.0")

        assert not issue.is_missing
        assert issue.kind is IssueKind.MISMATCH
        assert issue.to_display_string() == (
            "Version mismatch com.vrcfury.vrcfury: "
            "required=1.1278.0, installed=1.1271.0"
        )

    def test_empty_installed_version_is_mismatch(self) -> None:
        """Test an empty string is an installed (if odd) version."""
        assert Issue("a", "1.0.0", "").kind is IssueKind.MISMATCH

    def test_to_json(self) -> None:
        """Test the JSON form."""
        assert Issue("a", "1.0.0").to_json() == {
            "package": "a",
            "kind": "missing",
            "expected_version": "1.0.0",
            "actual_version": None,
        }

    def test_equality(self) -> None:
        """Test issues compare by value."""
        assert Issue("a", "1.0.0", "0.9.0") == Issue("a", "1.0.0", "0.9.0")
        assert Issue("a", "1.0.0") != Issue("a", "1.0.0", "0.9.0")

    def test_frozen(self) -> None:
        """Test issues are immutable."""
        issue = Issue("a", "1.0.0")
        with pytest.raises(dataclasses.FrozenInstanceError):
            issue.package = "b"  # type: ignore[misc]
