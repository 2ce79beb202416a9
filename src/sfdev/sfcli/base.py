"""Base classes for Salesforce CLI tools."""

import json
import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sfdev.sfcli.dialect import Operation, build_args, get_shape
from sfdev.sfcli.errors import SFCommandError
from sfdev.sfcli.resolver import CliKind, CliResolver, default_resolver

logger = logging.getLogger(__name__)


@dataclass
class CommandOutput:
    """Captured result of one CLI process."""

    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    def json(self) -> Any:
        """Parse stdout as a single JSON document."""
        return json.loads(self.stdout)


class SFCommandRunner:
    """Runs the resolved Salesforce CLI binary."""

    def __init__(
        self,
        resolver: CliResolver | None = None,
        cwd: Path | None = None,
        timeout: float | None = None,
    ):
        self.resolver = resolver or default_resolver()
        self.cwd = cwd
        self.timeout = timeout

    @property
    def kind(self) -> CliKind:
        return self.resolver.resolve()

    def run(self, args: list[str]) -> CommandOutput:
        """Run the CLI with ``args`` and capture its output.

        Raises:
            ToolNotFoundError: if no CLI binary is installed
            SFCommandError: if the process could not be spawned or timed out
        """
        binary = self.kind.value
        cmd = [binary] + list(args)
        command_line = " ".join(cmd)

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                cwd=self.cwd,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            logger.debug("SF CLI [TIMEOUT]: %s", command_line)
            raise SFCommandError(f"Command timed out after {self.timeout} seconds") from e
        except OSError as e:
            logger.debug("SF CLI [SPAWN FAILED]: %s", command_line)
            raise SFCommandError(f"Failed to run {binary}: {e}") from e

        output = CommandOutput(
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            exit_code=result.returncode,
        )

        status = "SUCCESS" if output.success else "FAILED"
        logger.debug("SF CLI [%s]: %s", status, command_line)
        if not output.success and output.stderr:
            logger.debug("  Output: %s", output.stderr[:500])

        return output


class SFTool(ABC):
    """Base class for all Salesforce CLI tools."""

    name: str = "base_tool"
    description: str = "Base Salesforce CLI tool"
    operation: Operation
    # Tools judged by exit status take stdout as JSON only when it parses;
    # otherwise normalize() receives an empty payload.
    lenient_json: bool = False

    def __init__(
        self,
        runner: SFCommandRunner | None = None,
        target_org: str | None = None,
    ):
        self.runner = runner or SFCommandRunner()
        self.target_org = target_org or None

    @abstractmethod
    def execute(self, **kwargs: Any) -> Any:
        """Execute the tool with given parameters."""
        pass

    @property
    def kind(self) -> CliKind:
        return self.runner.kind

    def field(self, name: str) -> str:
        """JSON key for logical field ``name`` in the active dialect."""
        return get_shape(self.kind, self.operation).fields[name]

    def _build_args(self, **params: Any) -> list[str]:
        return build_args(self.kind, self.operation, target_org=self.target_org, **params)

    def run(self, **params: Any) -> Any:
        """Invoke the operation and normalize its JSON response.

        Spawn failures and unparseable output go through ``failure``, which
        turns them into a normalized failure result unless a tool overrides it.
        """
        args = self._build_args(**params)
        try:
            output = self.runner.run(args)
            return self.normalize(self._parse_json(output), output)
        except (SFCommandError, ValueError) as e:
            logger.debug("%s failed: %s", self.name, e)
            return self.failure(e)

    def _parse_json(self, output: CommandOutput) -> dict[str, Any]:
        if self.lenient_json:
            try:
                payload = output.json()
            except ValueError:
                return {}
            return payload if isinstance(payload, dict) else {}

        if not output.stdout.strip():
            raise SFCommandError(
                output.stderr.strip() or f"No output from {self.kind.value}",
                stderr=output.stderr,
                exit_code=output.exit_code,
            )
        payload = output.json()
        if not isinstance(payload, dict):
            raise ValueError(f"Expected a JSON object, got {type(payload).__name__}")
        return payload

    @abstractmethod
    def normalize(self, payload: dict[str, Any], output: CommandOutput) -> Any:
        """Map the CLI's JSON payload onto this tool's result model."""
        pass

    def failure(self, error: Exception) -> Any:
        raise error


def result_section(payload: dict[str, Any]) -> dict[str, Any]:
    """The ``result`` object of a CLI JSON payload, or an empty dict."""
    result = payload.get("result")
    return result if isinstance(result, dict) else {}


def dig(data: dict[str, Any], dotted: str) -> Any:
    """Look up ``a.b.c`` in nested dicts, returning None when any step is missing."""
    value: Any = data
    for key in dotted.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value
