"""Tests for the command-line interface."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import yaml
from click.testing import CliRunner

from sfdev import __version__
from sfdev.cli import main


def fake_cli(responses: dict[str, MagicMock], installed: tuple[str, ...] = ("sf",)):
    """Build a subprocess.run stand-in keyed on the first CLI subcommand."""
    calls: list[list[str]] = []

    def run(cmd, **kwargs):
        if cmd[1:] == ["--version"]:
            if cmd[0] not in installed:
                raise FileNotFoundError(cmd[0])
            return MagicMock(returncode=0)
        calls.append(cmd)
        return responses[cmd[1]]

    run.calls = calls
    return run


@pytest.fixture
def runner():
    return CliRunner()


class TestCli:
    """Tests for the sfdev command group."""

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_init_writes_config(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["init"])

            assert result.exit_code == 0
            data = yaml.safe_load(Path("sfdev.yaml").read_text())
            assert data["cli_candidates"] == ["sf", "sfdx"]
            assert data["log_list_limit"] == 25

            again = runner.invoke(main, ["init"])
            assert "already exists" in again.output

    @patch("subprocess.run")
    def test_orgs_json(self, mock_run, runner, sf_output):
        mock_run.side_effect = fake_cli(
            {
                "org": sf_output(
                    {"status": 0, "result": {"nonScratchOrgs": [{"username": "dev@example.com"}]}}
                )
            }
        )

        with runner.isolated_filesystem():
            result = runner.invoke(main, ["orgs", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output)["result"]["nonScratchOrgs"][0]["username"] == "dev@example.com"

    @patch("subprocess.run")
    def test_uses_legacy_cli_from_config(self, mock_run, runner, sf_output):
        fake = fake_cli(
            {"force:org:list": sf_output({"status": 0, "result": {}})},
            installed=("sfdx",),
        )
        mock_run.side_effect = fake

        with runner.isolated_filesystem():
            Path("sfdev.yaml").write_text("cli_candidates: [sfdx]\n")
            result = runner.invoke(main, ["orgs"])

        assert result.exit_code == 0
        assert fake.calls[0][:2] == ["sfdx", "force:org:list"]
        assert "No authenticated orgs found" in result.output

    @patch("subprocess.run")
    def test_deploy_failure_exits_non_zero(self, mock_run, runner, sf_output):
        fake = fake_cli(
            {
                "project": sf_output(
                    {
                        "status": 1,
                        "result": {
                            "status": "Failed",
                            "files": [{"state": "Failed", "fullName": "Foo", "error": "Bad"}],
                        },
                    },
                    returncode=1,
                )
            }
        )
        mock_run.side_effect = fake

        with runner.isolated_filesystem():
            Path("Foo.cls").write_text("public class Foo {}")
            result = runner.invoke(main, ["-o", "dev", "deploy", "Foo.cls"])

        assert result.exit_code == 1
        assert "Deploy failed: Failed" in result.output
        assert fake.calls[0][-2:] == ["-o", "dev"]

    @patch("subprocess.run")
    def test_logs_list_table(self, mock_run, runner, sf_output):
        mock_run.side_effect = fake_cli(
            {
                "data": sf_output(
                    {
                        "status": 0,
                        "result": {
                            "records": [
                                {"Id": "07L1", "LogUser": {"Name": "Ada"}, "LogLength": 10}
                            ]
                        },
                    }
                )
            }
        )

        with runner.isolated_filesystem():
            result = runner.invoke(main, ["logs", "list", "-n", "5"])

        assert result.exit_code == 0
        assert "07L1" in result.output
        assert "Ada" in result.output

    @patch("subprocess.run")
    def test_logs_clear_confirmed(self, mock_run, runner, sf_output):
        mock_run.side_effect = fake_cli(
            {"data": sf_output({"status": 0, "result": {"records": []}})}
        )

        with runner.isolated_filesystem():
            result = runner.invoke(main, ["logs", "clear", "--yes"])

        assert result.exit_code == 0
        assert "No logs to delete" in result.output

    @patch("subprocess.run")
    def test_missing_cli(self, mock_run, runner):
        mock_run.side_effect = fake_cli({}, installed=())

        with runner.isolated_filesystem():
            result = runner.invoke(main, ["test"])

        assert result.exit_code == 1
        assert "Salesforce CLI not found" in result.output

    @pytest.mark.parametrize(
        "args, message",
        [
            (["deploy"], "No file to deploy"),
            (["retrieve"], "Please specify metadata to retrieve"),
            (["apex"], "No Apex code provided"),
        ],
    )
    @patch("subprocess.run")
    def test_missing_input_exits_non_zero(self, mock_run, runner, args, message):
        with runner.isolated_filesystem():
            result = runner.invoke(main, args)

        assert result.exit_code == 1
        assert message in result.output
        assert not mock_run.called

    def test_invalid_cli_candidate_in_config(self, runner):
        with runner.isolated_filesystem():
            Path("sfdev.yaml").write_text("cli_candidates: [/usr/local/bin/sf]\n")
            result = runner.invoke(main, ["orgs"])

        assert result.exit_code != 0
        assert "Invalid configuration" in result.output
