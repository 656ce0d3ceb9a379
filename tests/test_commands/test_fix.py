"""Tests for the ``lockkeeper fix`` command."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from lockkeeper.cli import cli
from lockkeeper.core import Reconciler

MANIFEST = {
    "dependencies": {"pkg.a": {"version": "1.0.0"}},
    "locked": {
        "pkg.a": {"version": "1.0.0", "dependencies": {}},
        "pkg.keep": {"version": "0.1.0", "dependencies": {"pkg.a": "1.0.0"}},
    },
}


def _read(path: Path) -> Dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A VPM project that needs one upgrade and one new package."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LOCKKEEPER_CONFIG", raising=False)
    (tmp_path / "Packages").mkdir()
    (tmp_path / "Packages" / "vpm-manifest.json").write_text(
        json.dumps(MANIFEST, indent=2) + "\n", encoding="utf-8"
    )
    (tmp_path / "Locks").mkdir()
    (tmp_path / "Locks" / "a.json").write_text(
        json.dumps(
            {
                "locked": {
                    "pkg.a": {"version": "1.2.0"},
                    "pkg.b": {"version": "2.0.0"},
                }
            }
        ),
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def manifest(project: Path) -> Path:
    return project / "Packages" / "vpm-manifest.json"


@pytest.mark.integration
class TestFixCommand:
    """Tests for ``lockkeeper fix``."""

    def test_fix_with_yes(self, manifest: Path) -> None:
        """Test the manifest is patched without prompting."""
        result = CliRunner().invoke(cli, ["fix", "--yes"])

        assert result.exit_code == 0
        locked = _read(manifest)["locked"]
        assert locked["pkg.a"] == {"version": "1.2.0", "dependencies": {}}
        assert locked["pkg.b"] == {"version": "2.0.0", "dependencies": {}}
        assert locked["pkg.keep"] == MANIFEST["locked"]["pkg.keep"]
        assert "Updated 2 package(s)" in result.output
        assert "No resolve_command configured" in result.output

    def test_fix_keeps_other_fields(self, manifest: Path) -> None:
        """Test fields outside locked are untouched."""
        CliRunner().invoke(cli, ["fix", "-y"])

        assert _read(manifest)["dependencies"] == MANIFEST["dependencies"]
        assert manifest.read_text(encoding="utf-8").endswith("}\n")

    def test_check_passes_after_fix(self, manifest: Path) -> None:
        """Test a fixed manifest satisfies the lock files."""
        runner = CliRunner()
        runner.invoke(cli, ["fix", "-y"])

        assert runner.invoke(cli, ["check"]).exit_code == 0

    def test_dry_run(self, manifest: Path) -> None:
        """Test dry run prints the patched manifest and writes nothing."""
        before = manifest.read_text(encoding="utf-8")

        result = CliRunner().invoke(cli, ["fix", "--dry-run"])

        assert result.exit_code == 0
        assert "Fix Plan (Dry Run)" in result.output
        assert '"version": "1.2.0"' in result.output
        assert "no changes applied" in result.output
        assert manifest.read_text(encoding="utf-8") == before

    def test_dry_run_unpatchable(self, manifest: Path) -> None:
        """Test dry run fails when the preview cannot be produced."""
        with patch.object(Reconciler, "preview_manifest", return_value=None) as preview:
            result = CliRunner().invoke(cli, ["fix", "--dry-run"])

        assert result.exit_code == 1
        assert "Cannot patch" in result.output
        assert preview.call_args.args[0] == "Packages/vpm-manifest.json"

    def test_declined(self, manifest: Path) -> None:
        """Test answering no leaves the manifest alone."""
        before = manifest.read_text(encoding="utf-8")

        result = CliRunner().invoke(cli, ["fix"], input="n\n")

        assert result.exit_code == 0
        assert manifest.read_text(encoding="utf-8") == before

    def test_confirmed(self, manifest: Path) -> None:
        """Test answering yes applies the fix."""
        result = CliRunner().invoke(cli, ["fix"], input="y\n")

        assert result.exit_code == 0
        assert _read(manifest)["locked"]["pkg.a"]["version"] == "1.2.0"

    def test_backup(self, project: Path, manifest: Path) -> None:
        """Test --backup keeps the previous manifest."""
        before = manifest.read_text(encoding="utf-8")

        CliRunner().invoke(cli, ["fix", "-y", "--backup"])

        backups = list((project / "Packages").glob("vpm-manifest.json.*.backup"))
        assert len(backups) == 1
        assert backups[0].read_text(encoding="utf-8") == before

    def test_nothing_to_fix(self, manifest: Path) -> None:
        """Test a satisfied manifest is reported and left alone."""
        CliRunner().invoke(cli, ["fix", "-y"])
        mtime = manifest.stat().st_mtime_ns

        result = CliRunner().invoke(cli, ["fix", "-y"])

        assert result.exit_code == 0
        assert "already satisfies" in result.output
        assert manifest.stat().st_mtime_ns == mtime

    def test_unreadable_manifest(self, project: Path) -> None:
        """Test a missing manifest exits with 1."""
        result = CliRunner().invoke(cli, ["fix", "-y", "-m", "missing.json"])

        assert result.exit_code == 1

    def test_runs_resolve_command(self, project: Path, manifest: Path) -> None:
        """Test the configured resolve command runs after patching."""
        (project / "lockkeeper.toml").write_text(
            '[lockkeeper]\nresolve_command = "vpm resolve project"\n', encoding="utf-8"
        )

        with patch("lockkeeper.core.resolver.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)
            result = CliRunner().invoke(cli, ["fix", "-y"])

        assert result.exit_code == 0
        assert "Packages resolved" in result.output
        assert mock_run.call_args[0][0] == ["vpm", "resolve", "project"]

    def test_resolve_failure(self, project: Path, manifest: Path) -> None:
        """Test a failing resolve command exits with 1 after patching."""
        (project / "lockkeeper.toml").write_text(
            '[lockkeeper]\nresolve_command = ["vpm", "resolve"]\n', encoding="utf-8"
        )

        with patch("lockkeeper.core.resolver.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=2)
            result = CliRunner().invoke(cli, ["fix", "-y"])

        assert result.exit_code == 1
        assert _read(manifest)["locked"]["pkg.a"]["version"] == "1.2.0"

    def test_no_resolve(self, project: Path) -> None:
        """Test --no-resolve skips the configured command."""
        (project / "lockkeeper.toml").write_text(
            '[lockkeeper]\nresolve_command = "vpm resolve"\n', encoding="utf-8"
        )

        with patch("lockkeeper.core.resolver.subprocess.run") as mock_run:
            result = CliRunner().invoke(cli, ["fix", "-y", "--no-resolve"])

        assert result.exit_code == 0
        mock_run.assert_not_called()
