"""Pytest configuration and fixtures for sfdev tests."""

import json
from typing import Any
from unittest.mock import MagicMock

import pytest

from sfdev.config import SfdevConfig
from sfdev.sfcli import CliKind, CliResolver, SFCommandRunner


def _completed(payload: Any = None, returncode: int = 0, stderr: str = "", stdout: str | None = None):
    if stdout is None:
        stdout = json.dumps(payload) if payload is not None else ""
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def sf_output():
    """Factory for fake ``subprocess.run`` results.

    ``sf_output({"status": 0})`` serializes the payload to stdout;
    ``sf_output(stdout="not json")`` sets stdout verbatim.
    """
    return _completed


@pytest.fixture
def modern_runner():
    """Runner whose resolver is already settled on ``sf``."""
    return SFCommandRunner(resolver=CliResolver(kind=CliKind.MODERN))


@pytest.fixture
def legacy_runner():
    """Runner whose resolver is already settled on ``sfdx``."""
    return SFCommandRunner(resolver=CliResolver(kind=CliKind.LEGACY))


class FakeHost:
    """Records everything the dispatcher asks the editor to do."""

    def __init__(self, variables: dict[str, Any] | None = None, current_file: str = ""):
        self.variables = variables or {}
        self._current_file = current_file
        self.messages: list[tuple[str, str]] = []
        self.buffers: list[dict[str, Any]] = []

    def echo_info(self, message: str) -> None:
        self.messages.append(("info", message))

    def echo_success(self, message: str) -> None:
        self.messages.append(("success", message))

    def echo_error(self, message: str) -> None:
        self.messages.append(("error", message))

    def get_var(self, name: str, default: Any = None) -> Any:
        return self.variables.get(name, default)

    def current_file(self) -> str:
        return self._current_file

    def open_buffer(self, name: str, lines: list[str], filetype: str, split: str = "new") -> None:
        self.buffers.append({"name": name, "lines": lines, "filetype": filetype, "split": split})

    def last(self, level: str) -> str | None:
        for msg_level, message in reversed(self.messages):
            if msg_level == level:
                return message
        return None


@pytest.fixture
def fake_host():
    return FakeHost()


@pytest.fixture
def default_config(tmp_path):
    """Create a default configuration for testing."""
    return SfdevConfig(logs_dir=tmp_path / "logs")
