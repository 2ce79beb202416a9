"""Tests for configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from sfdev.config import SfdevConfig, load_config


class TestSfdevConfig:
    """Tests for SfdevConfig."""

    def test_default_config(self):
        """Test default configuration values."""
        config = SfdevConfig.default()

        assert config.default_org is None
        assert config.cli_candidates == ["sf", "sfdx"]
        assert config.command_timeout_seconds is None
        assert config.log_list_limit == 25
        assert config.clear_logs_cap == 1000
        assert config.logs_dir is None
        assert config.verbose is False

    def test_yaml_round_trip(self, tmp_path):
        """Test saving and loading configuration."""
        config = SfdevConfig(default_org="dev", log_list_limit=10, logs_dir=tmp_path / "logs")
        path = tmp_path / "sfdev.yaml"

        config.to_yaml(path)
        loaded = SfdevConfig.from_yaml(path)

        assert loaded.default_org == "dev"
        assert loaded.log_list_limit == 10
        assert loaded.logs_dir == tmp_path / "logs"

    def test_empty_yaml_uses_defaults(self, tmp_path):
        path = tmp_path / "sfdev.yaml"
        path.write_text("")

        assert SfdevConfig.from_yaml(path) == SfdevConfig()

    def test_log_limit_validated(self):
        with pytest.raises(ValidationError):
            SfdevConfig(log_list_limit=0)


class TestLoadConfig:
    """Tests for load_config."""

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("default_org: prod\ncli_candidates: [sfdx]\n")

        config = load_config(path)

        assert config.default_org == "prod"
        assert config.cli_candidates == ["sfdx"]

    def test_discovers_default_location(self, tmp_path, monkeypatch):
        """A .sfdev.yml in the working directory is picked up."""
        monkeypatch.chdir(tmp_path)
        Path(".sfdev.yml").write_text("default_org: hidden\n")

        assert load_config().default_org == "hidden"

    def test_sfdev_yaml_wins_over_hidden(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        Path("sfdev.yaml").write_text("default_org: visible\n")
        Path(".sfdev.yaml").write_text("default_org: hidden\n")

        assert load_config().default_org == "visible"

    def test_no_file_gives_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert load_config() == SfdevConfig.default()

    def test_missing_explicit_path_falls_back(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert load_config(tmp_path / "absent.yaml") == SfdevConfig.default()

    def test_unknown_cli_candidate_rejected(self, tmp_path):
        """Only the two known binaries can be probed."""
        path = tmp_path / "sfdev.yaml"
        path.write_text("cli_candidates: [/usr/local/bin/sf]\n")

        with pytest.raises(ValidationError):
            load_config(path)
