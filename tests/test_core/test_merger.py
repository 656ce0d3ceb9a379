"""Unit tests for lockkeeper.core.merger."""

from __future__ import annotations

from typing import Dict, List

import pytest

from lockkeeper.core.merger import merge_lock_files
from lockkeeper.models.manifest import ManifestDocument


def _lock(versions: Dict[str, str]) -> ManifestDocument:
    return ManifestDocument.from_dict(
        {"locked": {name: {"version": v} for name, v in versions.items()}}
    )


@pytest.mark.unit
class TestMergeLockFiles:
    """Tests for merge_lock_files."""

    def test_empty(self) -> None:
        """Test no lock files merge to nothing."""
        assert merge_lock_files([]) == {}

    def test_single_lock_file(self) -> None:
        """Test one lock file is copied as-is."""
        assert merge_lock_files([_lock({"a": "1.0.0", "b": "2.0.0"})]) == {
            "a": "1.0.0",
            "b": "2.0.0",
        }

    def test_highest_wins(self) -> None:
        """Test the highest version of a shared package wins."""
        merged = merge_lock_files([_lock({"p": "1.0.0"}), _lock({"p": "2.0.0"})])
        assert merged == {"p": "2.0.0"}

    def test_lower_later_version_ignored(self) -> None:
        """Test a later, lower version does not replace an earlier one."""
        merged = merge_lock_files([_lock({"p": "2.0.0"}), _lock({"p": "1.0.0"})])
        assert merged == {"p": "2.0.0"}

    def test_order_follows_first_occurrence(self) -> None:
        """Test packages are ordered by first appearance."""
        merged = merge_lock_files(
            [_lock({"b": "1.0.0", "a": "1.0.0"}), _lock({"c": "1.0.0", "a": "2.0.0"})]
        )
        assert list(merged) == ["b", "a", "c"]
        assert merged["a"] == "2.0.0"

    def test_unparseable_keeps_first_seen(self) -> None:
        """Test a version that cannot be compared never replaces another."""
        merged = merge_lock_files([_lock({"p": "1.0.0"}), _lock({"p": "latest"})])
        assert merged == {"p": "1.0.0"}

        merged = merge_lock_files([_lock({"p": "latest"}), _lock({"p": "9.0.0"})])
        assert merged == {"p": "latest"}

    def test_equal_versions_keep_first_spelling(self) -> None:
        """Test ties keep the earlier string."""
        merged = merge_lock_files(
            [_lock({"p": "1.0.0+a"}), _lock({"p": "1.0.0+b"})]
        )
        assert merged == {"p": "1.0.0+a"}

    def test_custom_comparer(self) -> None:
        """Test the comparer is injectable."""
        calls: List[tuple] = []

        def always(candidate: str, existing: str) -> bool:
            calls.append((candidate, existing))
            return True

        merged = merge_lock_files(
            [_lock({"p": "2.0.0"}), _lock({"p": "1.0.0"})], is_greater=always
        )

        assert merged == {"p": "1.0.0"}
        assert calls == [("1.0.0", "2.0.0")]

    def test_real_world_versions(self) -> None:
        """Test merging with versions seen in VPM projects."""
        merged = merge_lock_files(
            [
                _lock({"com.vrcfury.vrcfury": "1.1271.0", "com.poiyomi.toon": "8.1.166"}),
                _lock({"com.vrcfury.vrcfury": "1.1278.0", "com.poiyomi.toon": "9.3.63"}),
            ]
        )
        assert merged == {
            "com.vrcfury.vrcfury": "1.1278.0",
            "com.poiyomi.toon": "9.3.63",
        }
