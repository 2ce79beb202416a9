"""Named operations exposed to the editor host."""

import json
import logging
from typing import Any, Callable

from sfdev.config import SfdevConfig
from sfdev.editor.host import EditorHost
from sfdev.editor.render import (
    apex_test_result_lines,
    deploy_message,
    execute_result_lines,
    org_list_lines,
    retrieve_message,
)
from sfdev.logging import get_logger
from sfdev.sfcli import (
    SFClearLogs,
    SFCommandRunner,
    SFDeleteLog,
    SFDeploy,
    SFGetLog,
    SFListLogs,
    SFListTestClasses,
    SFOrgList,
    SFOrgListRaw,
    SFOrgLogout,
    SFOrgOpen,
    SFRetrieve,
    SFRunAnonymous,
    SFRunApexTests,
    SFSetDefaultOrg,
    SfdevError,
)

logger = logging.getLogger(__name__)

DEFAULT_ORG_VAR = "sfdev_default_org"


def parse_host_args(args: Any) -> list[str]:
    """Normalize whatever the host's command layer passed into a list of strings.

    Hosts hand over a bare string, a list (possibly nested one level, e.g.
    ``[["a", "b"]]``), or nothing at all depending on how the command was
    invoked. Empty strings are kept so callers can tell "given but blank"
    apart from "not given".
    """
    if args is None:
        return []
    if isinstance(args, str):
        return [args]
    if isinstance(args, (int, float)) and not isinstance(args, bool):
        return [str(args)]
    if isinstance(args, (list, tuple)):
        values: list[str] = []
        for arg in args:
            values.extend(parse_host_args(arg))
        return values
    raise TypeError(f"Unsupported argument type: {type(args).__name__}")


def split_csv(args: list[str]) -> list[str]:
    """Split comma-separated arguments into trimmed, non-empty items."""
    return [item.strip() for arg in args for item in arg.split(",") if item.strip()]


class Dispatcher:
    """Dispatch table of host operations.

    Every operation reports outcomes through the host's ``echo_*`` calls and
    returns a plain dict (or None) the host can use programmatically. Errors
    from the CLI layer are shown to the user, never raised to the host.
    """

    def __init__(
        self,
        host: EditorHost,
        config: SfdevConfig | None = None,
        runner: SFCommandRunner | None = None,
    ):
        self.host = host
        self.config = config or SfdevConfig.default()
        self.runner = runner or SFCommandRunner(timeout=self.config.command_timeout_seconds)

        self._table: dict[str, Callable[[list[str]], Any]] = {
            "listOrgs": self.list_orgs,
            "openOrg": self.open_org,
            "deploy": self.deploy,
            "retrieve": self.retrieve,
            "executeApex": self.execute_apex,
            "runTest": self.run_test,
            "listOrgsJson": self.list_orgs_json,
            "setDefaultOrg": self.set_default_org,
            "logoutOrg": self.logout_org,
            "listLogs": self.list_logs,
            "getLog": self.get_log,
            "deleteLog": self.delete_log,
            "clearLogs": self.clear_logs,
            "listTestClasses": self.list_test_classes,
        }

    @property
    def operations(self) -> list[str]:
        return list(self._table)

    def dispatch(self, name: str, *args: Any) -> Any:
        """Run operation ``name`` with host-supplied arguments.

        Raises:
            KeyError: if ``name`` is not a known operation
        """
        handler = self._table[name]
        try:
            parsed = parse_host_args(list(args))
        except TypeError as e:
            self.host.echo_error(f"Invalid arguments for {name}: {e}")
            return {"success": False, "error": str(e)}
        logger.debug("Dispatching %s with %d argument(s)", name, len(parsed))
        result = handler(parsed)

        session = get_logger()
        if session and isinstance(result, dict):
            session.operation(name, bool(result.get("success")), result.get("message") or "")
        return result

    def _target_org(self, explicit: str | None = None) -> str | None:
        """Explicit org, else the editor's default-org variable, else config."""
        if explicit:
            return explicit
        return self.host.get_var(DEFAULT_ORG_VAR, "") or self.config.default_org or None

    def _fail(self, prefix: str, error: Exception) -> dict[str, Any]:
        logger.error("%s: %s", prefix, error)
        self.host.echo_error(f"{prefix}: {error}")
        return {"success": False, "error": str(error)}

    # -- orgs -----------------------------------------------------------------

    def list_orgs(self, args: list[str] | None = None) -> None:
        try:
            orgs = SFOrgList(runner=self.runner).execute()
        except SfdevError as e:
            self.host.echo_error(str(e))
            return

        if not orgs:
            self.host.echo_info("No authenticated orgs found")
            return

        self.host.open_buffer("[SF Orgs]", org_list_lines(orgs), "sfdev-orgs")
        self.host.echo_success("Org list displayed")

    def open_org(self, args: list[str] | None = None) -> None:
        explicit = args[0] if args else None
        try:
            SFOrgOpen(runner=self.runner, target_org=self._target_org(explicit)).execute()
        except SfdevError as e:
            self.host.echo_error(str(e))
            return
        self.host.echo_success("Org opened in browser")

    def list_orgs_json(self, args: list[str] | None = None) -> dict[str, Any]:
        try:
            orgs = SFOrgListRaw(runner=self.runner).execute()
        except SfdevError as e:
            return {"success": False, "stdout": "", "stderr": str(e)}
        return {"success": True, "stdout": json.dumps({"result": orgs}), "stderr": ""}

    def set_default_org(self, args: list[str] | None = None) -> dict[str, Any]:
        org = args[0] if args else ""
        if not org:
            self.host.echo_error("Failed to set default org: no org given")
            return {"success": False, "message": "No org given"}

        try:
            result = SFSetDefaultOrg(runner=self.runner, target_org=org).execute()
        except SfdevError as e:
            return self._fail("Failed to set default org", e)

        if result.success:
            self.host.echo_success(result.message or f"Set default org to: {org}")
        else:
            self.host.echo_error(f"Failed to set default org: {result.message}")
        return result.to_host()

    def logout_org(self, args: list[str] | None = None) -> dict[str, Any]:
        org = args[0] if args else ""
        if not org:
            self.host.echo_error("Failed to logout: no org given")
            return {"success": False, "message": "No org given"}

        try:
            result = SFOrgLogout(runner=self.runner, target_org=org).execute()
        except SfdevError as e:
            return self._fail("Failed to logout", e)

        if result.success:
            self.host.echo_success(result.message or f"Logged out from: {org}")
        else:
            self.host.echo_error(f"Failed to logout: {result.message}")
        return result.to_host()

    # -- source ---------------------------------------------------------------

    def deploy(self, args: list[str] | None = None) -> dict[str, Any]:
        path = args[0] if args else self.host.current_file()
        if not path:
            self.host.echo_error("No file to deploy")
            return {"success": False, "message": "No file to deploy"}

        self.host.echo_info("Deploying...")
        try:
            result = SFDeploy(runner=self.runner, target_org=self._target_org()).execute(
                source_path=path
            )
        except SfdevError as e:
            return self._fail("Deploy error", e)

        if result.success:
            self.host.echo_success(deploy_message(result))
        else:
            self.host.echo_error(deploy_message(result))
        return result.to_host()

    def retrieve(self, args: list[str] | None = None) -> dict[str, Any]:
        metadata = split_csv(args or [])
        if not metadata:
            self.host.echo_error("Please specify metadata to retrieve")
            return {"success": False, "message": "Please specify metadata to retrieve"}

        self.host.echo_info("Retrieving metadata...")
        try:
            result = SFRetrieve(runner=self.runner, target_org=self._target_org()).execute(
                metadata=metadata
            )
        except SfdevError as e:
            return self._fail("Retrieve error", e)

        if result.success:
            self.host.echo_success(retrieve_message(result))
        else:
            self.host.echo_error(retrieve_message(result))
        return result.to_host()

    # -- apex -----------------------------------------------------------------

    def execute_apex(self, args: list[str] | None = None) -> dict[str, Any]:
        apex_code = "\n".join(args or [])
        if not apex_code.strip():
            self.host.echo_error("No Apex code provided")
            return {"success": False, "message": "No Apex code provided"}

        line_count = len(apex_code.split("\n"))
        self.host.echo_info(f"Executing {line_count} line(s) of Apex code...")
        try:
            result = SFRunAnonymous(runner=self.runner, target_org=self._target_org()).execute(
                apex_code=apex_code
            )
        except SfdevError as e:
            return self._fail("Execute error", e)

        self.host.open_buffer(
            "[Apex Result]", execute_result_lines(apex_code, result), "apexlog", split="vnew"
        )
        if result.success:
            self.host.echo_success("Apex executed successfully")
        else:
            self.host.echo_error("Apex execution failed")
        return result.to_host()

    def run_test(self, args: list[str] | None = None) -> dict[str, Any] | None:
        test_names = split_csv(args or []) or None

        self.host.echo_info("Running tests...")
        try:
            result = SFRunApexTests(runner=self.runner, target_org=self._target_org()).execute(
                test_names=test_names
            )
        except SfdevError as e:
            return self._fail("Test error", e)

        self.host.open_buffer(
            "[SF Test Results]", apex_test_result_lines(result), "sfdev-test-results"
        )
        summary = result.summary
        if result.success:
            self.host.echo_success(f"All tests passed ({summary.passing}/{summary.tests_ran})")
        else:
            self.host.echo_error(f"Tests failed ({summary.failing} failures)")
        return result.to_host()

    def list_test_classes(self, args: list[str] | None = None) -> dict[str, Any]:
        try:
            result = SFListTestClasses(runner=self.runner, target_org=self._target_org()).execute()
        except SfdevError as e:
            return self._fail("Failed to list test classes", e)

        if not result.success:
            self.host.echo_error(f"Failed to list test classes: {result.message}")
        return result.to_host()

    # -- logs -----------------------------------------------------------------

    def list_logs(self, args: list[str] | None = None) -> dict[str, Any]:
        try:
            limit = int(args[0]) if args else self.config.log_list_limit
        except ValueError:
            self.host.echo_error(f"Invalid log limit: {args[0]}")
            return {"success": False, "logs": []}

        try:
            result = SFListLogs(runner=self.runner, target_org=self._target_org()).execute(
                limit=limit
            )
        except SfdevError as e:
            self._fail("Failed to list logs", e)
            return {"success": False, "error": str(e), "logs": []}

        if not result.success:
            self.host.echo_error(f"Failed to list logs: {result.message}")
        return result.to_host()

    def get_log(self, args: list[str] | None = None) -> dict[str, Any]:
        log_id = args[0] if args else ""
        if not log_id:
            return self._fail("Get log error", ValueError("No log ID provided"))

        self.host.echo_info("Fetching log...")
        try:
            result = SFGetLog(runner=self.runner, target_org=self._target_org()).execute(
                log_id=log_id
            )
        except SfdevError as e:
            return self._fail("Get log error", e)

        if result.success:
            self.host.open_buffer(f"[ApexLog] {log_id}", result.content.split("\n"), "apexlog")
            self.host.echo_success("Log loaded successfully")
        else:
            self.host.echo_error(f"Failed to fetch log: {result.content}")
        return result.to_host()

    def delete_log(self, args: list[str] | None = None) -> dict[str, Any]:
        log_id = args[0] if args else ""
        if not log_id:
            return self._fail("Delete log error", ValueError("No log ID provided"))

        self.host.echo_info("Deleting log...")
        try:
            result = SFDeleteLog(runner=self.runner, target_org=self._target_org()).execute(
                log_id=log_id
            )
        except SfdevError as e:
            return self._fail("Delete log error", e)

        if result.success:
            self.host.echo_success(result.message or "Log deleted")
        else:
            self.host.echo_error(result.message or "Failed to delete log")
        return result.to_host()

    def clear_logs(self, args: list[str] | None = None) -> dict[str, Any]:
        self.host.echo_info("Clearing all logs...")
        try:
            result = SFClearLogs(
                runner=self.runner,
                target_org=self._target_org(),
                cap=self.config.clear_logs_cap,
            ).execute()
        except SfdevError as e:
            return self._fail("Clear logs error", e)

        self.host.echo_success(result.message or f"Deleted {result.deleted_count} logs")
        return result.to_host()
