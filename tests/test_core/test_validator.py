"""Unit tests for lockkeeper.core.validator."""

from __future__ import annotations

import logging

import pytest

from lockkeeper.core.validator import validate_manifest
from lockkeeper.models.manifest import ManifestDocument, PackageRecord


def _doc(locked):
    return ManifestDocument.from_dict({"locked": locked})


@pytest.mark.unit
class TestValidateManifest:
    """Tests for validate_manifest."""

    def test_valid_document(self) -> None:
        """Test a well-formed document passes."""
        doc = _doc(
            {
                "com.vrchat.base": {"version": "3.5.0", "dependencies": {}},
                "com.vrchat.avatars": {"version": "3.5.0"},
            }
        )
        assert validate_manifest(doc) is True

    def test_none_document(self) -> None:
        """Test a missing document is rejected."""
        assert validate_manifest(None) is False

    def test_missing_locked(self) -> None:
        """Test a document without a package map is rejected."""
        assert validate_manifest(ManifestDocument.from_dict({})) is False

    def test_locked_not_object(self) -> None:
        """Test a non-object package map is rejected."""
        assert validate_manifest(ManifestDocument.from_dict({"locked": []})) is False

    def test_empty_locked(self) -> None:
        """Test an empty package map is rejected."""
        assert validate_manifest(_doc({})) is False

    @pytest.mark.parametrize("key", ["", "   ", "\t"])
    def test_blank_key(self, key: str) -> None:
        """Test blank package names are rejected."""
        assert validate_manifest(_doc({key: {"version": "1.0.0"}})) is False

    def test_null_record(self) -> None:
        """Test a non-object record is rejected."""
        assert validate_manifest(_doc({"a": None})) is False
        assert validate_manifest(_doc({"a": "1.0.0"})) is False

    @pytest.mark.parametrize("version", [None, "", "  ", 1])
    def test_bad_version(self, version) -> None:
        """Test missing, blank or non-string versions are rejected."""
        assert validate_manifest(_doc({"a": {"version": version}})) is False

    def test_missing_version_field(self) -> None:
        """Test a record with no version field is rejected."""
        assert validate_manifest(_doc({"a": {"dependencies": {}}})) is False

    def test_one_bad_record_rejects_all(self) -> None:
        """Test a single invalid record invalidates the document."""
        doc = ManifestDocument(
            locked={
                "a": PackageRecord.from_version("1.0.0"),
                "b": PackageRecord(fields={}),
            }
        )
        assert validate_manifest(doc) is False

    def test_does_not_check_version_syntax(self) -> None:
        """Test non-semver versions are structurally valid."""
        assert validate_manifest(_doc({"a": {"version": "latest"}})) is True

    def test_debug_logs_at_info(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test the rejection reason is logged at INFO when debug is on."""
        with caplog.at_level(logging.INFO, logger="lockkeeper"):
            validate_manifest(_doc({}), debug=True)

        assert "locked field is empty" in caplog.text

    def test_no_info_log_without_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test the rejection reason stays at DEBUG by default."""
        with caplog.at_level(logging.INFO, logger="lockkeeper"):
            validate_manifest(_doc({}))

        assert "locked field is empty" not in caplog.text
