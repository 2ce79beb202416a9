"""Org management tools."""

from typing import Any

from sfdev.models import CommandResult, Org
from sfdev.sfcli.base import CommandOutput, SFTool, result_section
from sfdev.sfcli.dialect import Operation
from sfdev.sfcli.errors import SFCommandError
from sfdev.sfcli.resolver import CliKind


class SFOrgList(SFTool):
    """List all authenticated orgs.

    Unlike most tools, a failure here is raised as ``SFCommandError``; there
    is no meaningful empty org list to fall back to.
    """

    name = "sf_org_list"
    description = "Lists all orgs the Salesforce CLI is authenticated against."
    operation = Operation.LIST_ORGS

    def execute(self, **kwargs: Any) -> list[Org]:
        return self.run()

    def normalize(self, payload: dict[str, Any], output: CommandOutput) -> list[Org]:
        if not output.success:
            message = output.stderr.strip() or str(payload.get("message", ""))
            raise SFCommandError(message, output.stderr, output.exit_code)

        legacy = self.kind is CliKind.LEGACY
        devhub_key = self.field("is_dev_hub")

        orgs = []
        for o in self._select_orgs(payload):
            instance_url = o.get("instanceUrl") or ""
            if legacy and not instance_url:
                instance_url = o.get("loginUrl") or ""
            orgs.append(
                Org(
                    alias=o.get("alias") or None,
                    username=o.get("username") or "",
                    org_id=o.get("orgId") or "",
                    instance_url=instance_url,
                    is_default_username=bool(o.get("isDefaultUsername")),
                    is_default_dev_hub=bool(o.get(devhub_key)),
                )
            )
        return orgs

    def _select_orgs(self, payload: dict[str, Any]) -> list[dict[str, Any]]:
        result = result_section(payload)
        non_scratch = result.get("nonScratchOrgs") or []
        scratch = result.get("scratchOrgs") or []

        if self.kind is CliKind.LEGACY:
            return non_scratch + scratch
        return non_scratch or scratch

    def failure(self, error: Exception) -> Any:
        raise SFCommandError(f"Failed to list orgs: {error}") from error


class SFOrgListRaw(SFOrgList):
    """Org list as the CLI reports it, split into non-scratch and scratch orgs."""

    name = "sf_org_list_raw"
    description = "Lists authenticated orgs without normalizing their fields."

    def execute(self, **kwargs: Any) -> dict[str, list[dict[str, Any]]]:
        return self.run()

    def normalize(
        self, payload: dict[str, Any], output: CommandOutput
    ) -> dict[str, list[dict[str, Any]]]:
        if not output.success:
            message = output.stderr.strip() or str(payload.get("message", ""))
            raise SFCommandError(message, output.stderr, output.exit_code)

        result = result_section(payload)
        return {
            "nonScratchOrgs": result.get("nonScratchOrgs") or [],
            "scratchOrgs": result.get("scratchOrgs") or [],
        }


class SFPlainCommand(SFTool):
    """A tool whose command prints no JSON; only the exit status matters."""

    def run(self, **params: Any) -> Any:
        args = self._build_args(**params)
        try:
            output = self.runner.run(args)
        except SFCommandError as e:
            return self.failure(e)
        return self.normalize({}, output)


class SFOrgOpen(SFPlainCommand):
    """Open an org in the browser."""

    name = "sf_org_open"
    description = "Opens the target org in the default web browser."
    operation = Operation.OPEN_ORG

    def execute(self, **kwargs: Any) -> None:
        self.run()

    def normalize(self, payload: dict[str, Any], output: CommandOutput) -> None:
        if not output.success:
            raise SFCommandError(
                f"Failed to open org: {output.stderr.strip()}",
                output.stderr,
                output.exit_code,
            )

    def failure(self, error: Exception) -> Any:
        raise SFCommandError(f"Failed to open org: {error}") from error


class SFSetDefaultOrg(SFPlainCommand):
    """Set the CLI's default target org."""

    name = "sf_set_default_org"
    description = "Sets the default target org in the Salesforce CLI config."
    operation = Operation.SET_DEFAULT_ORG

    def execute(self, **kwargs: Any) -> CommandResult:
        if not self.target_org:
            return CommandResult(success=False, message="No org specified")
        return self.run(org=self.target_org)

    def normalize(self, payload: dict[str, Any], output: CommandOutput) -> CommandResult:
        if output.success:
            return CommandResult(success=True, message=f"Set default org to: {self.target_org}")
        return CommandResult(
            success=False,
            message=output.stderr.strip() or f"Failed to set default org to: {self.target_org}",
        )

    def failure(self, error: Exception) -> CommandResult:
        return CommandResult(success=False, message=str(error))


class SFOrgLogout(SFPlainCommand):
    """Log out of an org."""

    name = "sf_org_logout"
    description = "Logs the Salesforce CLI out of the target org."
    operation = Operation.LOGOUT

    def execute(self, **kwargs: Any) -> CommandResult:
        if not self.target_org:
            return CommandResult(success=False, message="No target org specified for logout")
        return self.run()

    def normalize(self, payload: dict[str, Any], output: CommandOutput) -> CommandResult:
        if output.success:
            return CommandResult(success=True, message=f"Logged out from: {self.target_org}")
        return CommandResult(
            success=False,
            message=output.stderr.strip() or f"Failed to logout from: {self.target_org}",
        )

    def failure(self, error: Exception) -> CommandResult:
        return CommandResult(success=False, message=str(error))
