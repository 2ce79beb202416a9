"""Deployment-related tools."""

from typing import Any

from sfdev.models import ComponentFailure, DeployResult, RetrieveResult
from sfdev.sfcli.base import CommandOutput, SFTool, dig, result_section
from sfdev.sfcli.dialect import Operation
from sfdev.sfcli.resolver import CliKind


def component_failures(
    payload: dict[str, Any], kind: CliKind, source_field: str
) -> list[ComponentFailure] | None:
    """Extract per-component failures from a deploy or retrieve payload.

    Legacy payloads carry ready-made ``componentFailures``; modern payloads
    list every file with its ``state``, so failures are the ``Failed`` ones.
    Returns None when the payload has no failure section at all.
    """
    entries = dig(result_section(payload), source_field)
    if entries is None:
        return None
    if isinstance(entries, dict):
        # A single failure is reported as an object rather than a list
        entries = [entries]
    if not isinstance(entries, list):
        return None

    if kind is CliKind.LEGACY:
        return [
            ComponentFailure(
                component_type=f.get("componentType") or "Unknown",
                full_name=f.get("fullName") or "Unknown",
                problem_type=f.get("problemType") or "Error",
                problem=f.get("problem") or "Unknown error",
                line_number=f.get("lineNumber"),
                column_number=f.get("columnNumber"),
            )
            for f in entries
            if isinstance(f, dict)
        ]

    return [
        ComponentFailure(
            component_type=f.get("type") or "Unknown",
            full_name=f.get("fullName") or f.get("filePath") or "Unknown",
            problem_type="Error",
            problem=f.get("error") or "Unknown error",
            line_number=f.get("lineNumber"),
            column_number=f.get("columnNumber"),
        )
        for f in entries
        if isinstance(f, dict) and f.get("state") == "Failed"
    ]


class SFDeploy(SFTool):
    """Deploy source from the local project to an org."""

    name = "sf_deploy"
    description = (
        "Deploys a source file or directory to the target org. "
        "Returns the deploy status with any component failures."
    )
    operation = Operation.DEPLOY

    def execute(self, source_path: str, **kwargs: Any) -> DeployResult:
        """
        Deploy source to Salesforce.

        Args:
            source_path: File or directory to deploy

        Returns:
            DeployResult; ``success`` reflects the CLI's JSON status, not its exit code
        """
        return self.run(source_path=source_path)

    def normalize(self, payload: dict[str, Any], output: CommandOutput) -> DeployResult:
        result = result_section(payload)
        return DeployResult(
            success=payload.get("status") == 0,
            status=str(result.get("status") or "Unknown"),
            id=result.get("id"),
            message=payload.get("message"),
            component_failures=component_failures(payload, self.kind, self.field("failures")),
        )

    def failure(self, error: Exception) -> DeployResult:
        return DeployResult(
            success=False,
            status="Error",
            message=f"Failed to parse deploy result: {error}",
        )


class SFRetrieve(SFTool):
    """Retrieve metadata from an org into the local project."""

    name = "sf_retrieve"
    description = (
        "Retrieves the named metadata components from the target org "
        "into the local project."
    )
    operation = Operation.RETRIEVE

    def execute(self, metadata: list[str], **kwargs: Any) -> RetrieveResult:
        """
        Retrieve metadata from Salesforce.

        Args:
            metadata: Metadata names, e.g. ["ApexClass:MyClass", "CustomObject"]

        Returns:
            RetrieveResult
        """
        return self.run(metadata=[m for m in metadata if m])

    def normalize(self, payload: dict[str, Any], output: CommandOutput) -> RetrieveResult:
        result = result_section(payload)
        return RetrieveResult(
            success=payload.get("status") == 0,
            status=str(result.get("status") or "Unknown"),
            id=result.get("id"),
            message=payload.get("message"),
            component_failures=component_failures(payload, self.kind, self.field("failures")),
        )

    def failure(self, error: Exception) -> RetrieveResult:
        return RetrieveResult(
            success=False,
            status="Error",
            message=f"Failed to parse retrieve result: {error}",
        )
