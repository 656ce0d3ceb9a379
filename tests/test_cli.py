"""Tests for lockkeeper.cli."""

from __future__ import annotations

import os
import logging
from pathlib import Path
from unittest.mock import patch

import click
import pytest
from click.testing import CliRunner

from lockkeeper.__version__ import __version__
from lockkeeper.cli import cli, main
from lockkeeper.exceptions import LockKeeperError


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An empty working directory without configuration."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LOCKKEEPER_CONFIG", raising=False)
    return tmp_path


@pytest.mark.unit
class TestCliGroup:
    """Tests for the top-level command group."""

    def test_version(self) -> None:
        """Test --version prints the package version."""
        result = CliRunner().invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert result.output.strip() == f"lockkeeper {__version__}"

    def test_help_lists_commands(self) -> None:
        """Test every subcommand is registered."""
        result = CliRunner().invoke(cli, ["-h"])

        assert result.exit_code == 0
        for name in ("check", "fix", "lock", "accept"):
            assert name in result.output

    @pytest.mark.parametrize(
        "flags,level",
        [([], logging.WARNING), (["-v"], logging.INFO), (["-vv"], logging.DEBUG)],
    )
    def test_verbosity(self, workdir: Path, flags, level: int) -> None:
        """Test -v flags set the lockkeeper log level."""
        CliRunner().invoke(cli, flags + ["check"])

        assert logging.getLogger("lockkeeper").level == level

    def test_no_color_sets_env(self, workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test --no-color exports NO_COLOR for downstream libraries."""
        monkeypatch.delenv("NO_COLOR", raising=False)

        with patch.dict("os.environ", {}):
            CliRunner().invoke(cli, ["--no-color", "check"])
            assert os.environ.get("NO_COLOR") == "1"

    def test_explicit_config_missing(self, workdir: Path) -> None:
        """Test a --config path that does not exist is a usage error."""
        result = CliRunner().invoke(cli, ["--config", "missing.toml", "check"])
        assert result.exit_code == 2


@pytest.mark.unit
class TestMain:
    """Tests for main() exit code mapping."""

    def test_success(self) -> None:
        with patch("lockkeeper.cli.cli", return_value=None):
            assert main() == 0

    def test_system_exit_code(self) -> None:
        """Test a command's sys.exit code is returned."""
        with patch("lockkeeper.cli.cli", side_effect=SystemExit(1)):
            assert main() == 1

    def test_usage_error(self) -> None:
        """Test Click usage errors map to exit code 2."""
        with patch("lockkeeper.cli.cli", side_effect=click.UsageError("bad")):
            assert main() == 2

    def test_application_error(self) -> None:
        """Test lockkeeper errors map to exit code 1."""
        with patch("lockkeeper.cli.cli", side_effect=LockKeeperError("broken")):
            assert main() == 1

    @pytest.mark.parametrize("error", [KeyboardInterrupt, click.exceptions.Abort])
    def test_interrupted(self, error: type) -> None:
        """Test Ctrl+C maps to exit code 130."""
        with patch("lockkeeper.cli.cli", side_effect=error()):
            assert main() == 130

    def test_unexpected_error(self) -> None:
        """Test unexpected exceptions map to exit code 1."""
        with patch("lockkeeper.cli.cli", side_effect=RuntimeError("boom")):
            assert main() == 1
