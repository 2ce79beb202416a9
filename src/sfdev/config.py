"""Configuration management for sfdev."""

from pathlib import Path

from pydantic import BaseModel, Field
import yaml

from sfdev.sfcli.resolver import CliKind


class SfdevConfig(BaseModel):
    """Main configuration for sfdev."""

    # Target org used when neither the call nor the editor names one
    default_org: str | None = Field(default=None)

    # Salesforce CLI
    cli_candidates: list[CliKind] = Field(
        default_factory=lambda: [CliKind.MODERN, CliKind.LEGACY],
        description='CLI binaries to probe, in priority order; each is "sf" or "sfdx"',
    )
    command_timeout_seconds: float | None = Field(
        default=None, description="Kill CLI commands after this many seconds (None waits forever)"
    )

    # Apex logs
    log_list_limit: int = Field(default=25, ge=1, le=1000)
    clear_logs_cap: int = Field(default=1000, ge=1)

    # Logging
    logs_dir: Path | None = Field(default=None, description="Write session logs here")
    verbose: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    @classmethod
    def from_yaml(cls, path: Path) -> "SfdevConfig":
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls(**(data or {}))

    def to_yaml(self, path: Path) -> None:
        """Save configuration to a YAML file."""
        with open(path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)

    @classmethod
    def default(cls) -> "SfdevConfig":
        """Create a default configuration."""
        return cls()


def load_config(config_path: Path | None = None) -> SfdevConfig:
    """Load configuration from file or use defaults."""
    if config_path and config_path.exists():
        return SfdevConfig.from_yaml(config_path)

    # Check for default config locations
    default_paths = [
        Path("sfdev.yaml"),
        Path("sfdev.yml"),
        Path(".sfdev.yaml"),
        Path(".sfdev.yml"),
    ]

    for path in default_paths:
        if path.exists():
            return SfdevConfig.from_yaml(path)

    return SfdevConfig.default()
