"""Unit tests for lockkeeper.utils.version_utils."""

from __future__ import annotations

import pytest

from lockkeeper.utils.version_utils import CHANGE_TYPES, get_update_type


@pytest.mark.unit
class TestGetUpdateType:
    """Tests for get_update_type."""

    def test_missing(self) -> None:
        """Test an uninstalled package is labeled missing."""
        assert get_update_type(None, "1.0.0") == "missing"

    def test_no_requirement(self) -> None:
        """Test a missing requirement cannot be classified."""
        assert get_update_type("1.0.0", None) == "unknown"
        assert get_update_type(None, None) == "unknown"

    @pytest.mark.parametrize(
        "installed,required",
        [("1.0", "1.0.0"), ("1.0.0", " 1.0.0 "), ("1.0.0+a", "1.0.0+a")],
    )
    def test_respelled(self, installed: str, required: str) -> None:
        """Test different spellings of one version."""
        assert get_update_type(installed, required) == "respelled"

    @pytest.mark.parametrize(
        "installed,required,expected",
        [
            ("8.1.166", "9.3.63", "major"),
            ("1.2.0", "1.10.0", "minor"),
            ("1.1271.0", "1.1278.0", "minor"),
            ("3.5.0", "3.5.1", "patch"),
            ("1.14.4-beta.1", "1.14.4-beta.2", "prerelease"),
            ("1.0.0-rc.1", "1.0.0", "prerelease"),
            ("1", "2", "major"),
        ],
    )
    def test_upgrades(self, installed: str, required: str, expected: str) -> None:
        """Test the highest growing release segment is reported."""
        assert get_update_type(installed, required) == expected

    def test_downgrade(self) -> None:
        """Test a lower requirement is a downgrade."""
        assert get_update_type("2.0.0", "1.9.9") == "downgrade"

    @pytest.mark.parametrize("installed,required", [("latest", "1.0.0"), ("1.0.0", "next")])
    def test_invalid(self, installed: str, required: str) -> None:
        """Test unparseable versions are unknown."""
        assert get_update_type(installed, required) == "unknown"

    def test_labels_are_known(self) -> None:
        """Test every label is listed in CHANGE_TYPES."""
        for args in [(None, "1"), ("1", "1.0"), ("2", "1"), ("1", "2"), ("x", "1")]:
            assert get_update_type(*args) in CHANGE_TYPES
