"""Tests for the click command surface."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from simplebackup import __version__
from simplebackup.cli import cli
from simplebackup.jobs import CreateSnapshotsJob, RotateSnapshotJob
from simplebackup.utils.decorators import get_job_class
from simplebackup.utils.exceptions import CLIError, ConnectError


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def connected(fake_ec2, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Route every CLI connection to the fake manager and record its arguments."""
    seen = {}

    def fake_connect(**kwargs):
        seen.update(kwargs)
        return fake_ec2

    monkeypatch.setattr("simplebackup.utils.decorators.connect", fake_connect)
    monkeypatch.setenv("SIMPLEBACKUP_CONFIG_DIR", str(tmp_path))
    for var in ("AWS_REGION", "AWS_PROFILE", "SIMPLEBACKUP_MARKER", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    fake_ec2.connect_args = seen
    return fake_ec2


class TestCommands:
    def test_create_snapshots(self, runner: CliRunner, connected) -> None:
        connected.add_instance("i-1", "web-01", ["vol-1"])

        result = runner.invoke(cli, ["--region", "us-east-2", "create-snapshots", "i-1"])

        assert result.exit_code == 0, result.output
        assert "snap-0001" in result.output
        assert connected.connect_args["region"] == "us-east-2"
        assert connected.snapshots[0].description == "Created by simplebackup/ec2 from vol-1"

    def test_marker_option_reaches_jobs(self, runner: CliRunner, connected) -> None:
        connected.add_instance("i-1", "web-01", ["vol-1"])

        result = runner.invoke(cli, ["--marker", "cli-run", "create-snapshots", "i-1"])

        assert result.exit_code == 0, result.output
        assert connected.snapshots[0].description == "cli-run vol-1"

    def test_rotate_snapshot_with_keep(self, runner: CliRunner, connected) -> None:
        for ts in (1, 2, 3):
            connected.add_snapshot(f"snap-{ts}", "vol-1", ts)

        result = runner.invoke(cli, ["rotate-snapshot", "vol-1", "--keep", "1"])

        assert result.exit_code == 0, result.output
        assert connected.snapshot_ids("vol-1") == ["snap-3"]
        assert "snap-1" in result.output and "snap-2" in result.output

    def test_rotate_snapshots_uses_configured_keep(
        self, runner: CliRunner, connected, tmp_path: Path
    ) -> None:
        (tmp_path / "settings.yaml").write_text("backup:\n  keep: 2\n", encoding="utf-8")
        connected.add_instance("i-1", "web-01", ["vol-1"])
        for ts in (1, 2, 3):
            connected.add_snapshot(f"snap-{ts}", "vol-1", ts)

        result = runner.invoke(cli, ["rotate-snapshots", "i-1"])

        assert result.exit_code == 0, result.output
        assert connected.snapshot_ids("vol-1") == ["snap-2", "snap-3"]

    def test_register_image_defaults_to_no_reboot(self, runner: CliRunner, connected) -> None:
        connected.add_instance("i-1", "web-01")

        result = runner.invoke(cli, ["register-image", "i-1"])

        assert result.exit_code == 0, result.output
        assert "ami-0001" in result.output
        assert connected.images["ami-0001"]["no_reboot"] is True

    def test_register_image_reboot(self, runner: CliRunner, connected) -> None:
        connected.add_instance("i-1", "web-01")

        result = runner.invoke(cli, ["register-image", "i-1", "--reboot"])

        assert result.exit_code == 0, result.output
        assert connected.images["ami-0001"]["no_reboot"] is False

    def test_register_image_tag_failure_prints_id_and_fails(
        self, runner: CliRunner, connected
    ) -> None:
        connected.add_instance("i-1", "web-01")
        connected.fail_on["create_name_tag"] = {"ami-0001"}

        result = runner.invoke(cli, ["register-image", "i-1"])

        assert result.exit_code == 1
        assert "ami-0001" in result.output
        assert "ami-0001" in connected.images

    def test_deregister_image(self, runner: CliRunner, connected) -> None:
        connected.images["ami-1"] = {}

        result = runner.invoke(cli, ["deregister-image", "ami-1"])

        assert result.exit_code == 0, result.output
        assert connected.images == {}

    def test_backup_error_exits_with_one(self, runner: CliRunner, connected) -> None:
        connected.add_instance("i-1", "web-01", ["vol-1", "vol-2"])
        connected.fail_on["create_snapshot"] = {"vol-2"}

        result = runner.invoke(cli, ["create-snapshots", "i-1"])

        assert result.exit_code == 1
        assert connected.snapshot_ids("vol-1") != []

    def test_invalid_configured_keep_is_reported(
        self, runner: CliRunner, connected, tmp_path: Path
    ) -> None:
        (tmp_path / "settings.yaml").write_text("backup:\n  keep: five\n", encoding="utf-8")
        connected.add_snapshot("snap-1", "vol-1", 1)

        result = runner.invoke(cli, ["rotate-snapshot", "vol-1"])

        assert result.exit_code == 1
        assert not isinstance(result.exception, CLIError)
        assert "backup.keep must be an integer" in result.output
        assert connected.calls == []

    def test_connect_error_exits_with_one(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        def failing_connect(**kwargs):
            raise ConnectError("connect to ec2 in", kwargs["region"], ValueError("bad"))

        monkeypatch.setattr("simplebackup.utils.decorators.connect", failing_connect)
        monkeypatch.setenv("SIMPLEBACKUP_CONFIG_DIR", str(tmp_path))

        result = runner.invoke(cli, ["--region", "us-east-1", "deregister-image", "ami-1"])

        assert result.exit_code == 1

    def test_missing_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["--config", str(tmp_path / "nope.yaml"), "version"])

        assert result.exit_code == 1

    def test_version(self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SIMPLEBACKUP_CONFIG_DIR", str(tmp_path))

        result = runner.invoke(cli, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestJobRegistry:
    def test_resolves_exact_command_names(self) -> None:
        assert get_job_class("snapshot", "create_snapshots") is CreateSnapshotsJob
        assert get_job_class("snapshot", "rotate_snapshot") is RotateSnapshotJob

    def test_unknown_operation(self) -> None:
        with pytest.raises(ValueError, match="Unknown image operation"):
            get_job_class("image", "copy_image")


class TestLoggingSettings:
    """logging.path, logging.level and --verbose reach the job loggers."""

    def test_job_log_written_under_logging_path(
        self, runner: CliRunner, connected, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("LOG_PATH", raising=False)
        log_dir = tmp_path / "joblogs"
        (tmp_path / "settings.yaml").write_text(
            f"logging:\n  path: {log_dir}\n  level: WARNING\n", encoding="utf-8"
        )
        connected.add_instance("i-1", "web-01", ["vol-1"])

        result = runner.invoke(cli, ["create-snapshots", "i-1"])

        assert result.exit_code == 0, result.output
        assert (log_dir / "create_snapshots.log").exists()
        assert (log_dir / "cli.log").exists()
        assert logging.getLogger("simplebackup.jobs.create_snapshots").level == logging.WARNING

    def test_verbose_sets_debug_on_job_logger(
        self, runner: CliRunner, connected, tmp_path: Path
    ) -> None:
        connected.add_instance("i-1", "web-01", ["vol-1"])

        result = runner.invoke(cli, ["--verbose", "create-snapshots", "i-1"])

        assert result.exit_code == 0, result.output
        assert logging.getLogger("simplebackup.jobs.create_snapshots").level == logging.DEBUG

    def test_connect_receives_logging_settings(
        self, runner: CliRunner, connected, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LOG_PATH", str(tmp_path / "envlogs"))
        connected.images["ami-1"] = {}

        result = runner.invoke(cli, ["--verbose", "deregister-image", "ami-1"])

        assert result.exit_code == 0, result.output
        assert connected.connect_args["log_dir"] == str(tmp_path / "envlogs")
        assert connected.connect_args["level"] == "DEBUG"

    def test_invalid_logging_level(
        self, runner: CliRunner, connected, tmp_path: Path
    ) -> None:
        (tmp_path / "settings.yaml").write_text("logging:\n  level: LOUD\n", encoding="utf-8")

        result = runner.invoke(cli, ["deregister-image", "ami-1"])

        assert result.exit_code == 1
        assert "logging.level" in result.output
