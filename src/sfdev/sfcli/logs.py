"""Apex debug log tools."""

import json
import logging
from typing import Any

from sfdev.models import ApexLog, ClearLogsResult, CommandResult, LogContentResult, LogListResult
from sfdev.sfcli.base import CommandOutput, SFCommandRunner, SFTool, result_section
from sfdev.sfcli.dialect import Operation

logger = logging.getLogger(__name__)

DEFAULT_LOG_LIMIT = 25
CLEAR_LOGS_CAP = 1000

LOG_QUERY = (
    "SELECT Id, LogUserId, LogUser.Name, Application, DurationMilliseconds, "
    "Location, LogLength, Operation, Request, StartTime, Status "
    "FROM ApexLog ORDER BY StartTime DESC LIMIT {limit}"
)


def extract_log_content(result: Any) -> str:
    """Pull the log body out of an ``apex get log`` result.

    The CLI has returned the body as a plain string, a list of strings, a
    list of ``{"log": ...}`` objects and a single ``{"log": ...}`` object
    depending on its version. Anything else is shown as pretty-printed JSON.
    """
    if isinstance(result, str):
        return result
    if isinstance(result, list) and result:
        first = result[0]
        if isinstance(first, str):
            return first
        if isinstance(first, dict) and isinstance(first.get("log"), str):
            return first["log"]
        return json.dumps(result, indent=2)
    if isinstance(result, dict) and isinstance(result.get("log"), str):
        return result["log"]
    if result:
        return json.dumps(result, indent=2)
    return ""


class SFListLogs(SFTool):
    """List recent Apex debug logs."""

    name = "sf_list_logs"
    description = "Lists the most recent Apex debug logs in the target org."
    operation = Operation.QUERY
    lenient_json = True

    def execute(self, limit: int = DEFAULT_LOG_LIMIT, **kwargs: Any) -> LogListResult:
        """
        List Apex logs, newest first.

        Args:
            limit: Maximum number of logs to return

        Returns:
            LogListResult
        """
        return self.run(query=LOG_QUERY.format(limit=int(limit)))

    def normalize(self, payload: dict[str, Any], output: CommandOutput) -> LogListResult:
        if not output.success:
            return LogListResult(
                success=False,
                message=output.stderr.strip() or payload.get("message"),
            )
        if "result" not in payload:
            return LogListResult(
                success=False,
                message=f"No log list in output from {self.kind.value}",
            )

        records = result_section(payload).get("records") or []
        return LogListResult(
            success=True,
            logs=[ApexLog.model_validate(r) for r in records],
        )

    def failure(self, error: Exception) -> LogListResult:
        logger.error("Failed to list logs: %s", error)
        return LogListResult(success=False, message=str(error))


class SFGetLog(SFTool):
    """Fetch the body of one Apex debug log."""

    name = "sf_get_log"
    description = "Fetches the content of an Apex debug log by ID."
    operation = Operation.GET_LOG
    lenient_json = True

    _log_id: str | None = None

    def execute(self, log_id: str, **kwargs: Any) -> LogContentResult:
        self._log_id = log_id
        return self.run(log_id=log_id)

    def normalize(self, payload: dict[str, Any], output: CommandOutput) -> LogContentResult:
        if not output.success:
            return LogContentResult(
                success=False,
                content=output.stderr.strip() or "Failed to retrieve log",
                log_id=self._log_id,
            )
        if "result" not in payload:
            # Not JSON; show whatever the CLI printed
            return LogContentResult(success=True, content=output.stdout.strip(), log_id=self._log_id)
        return LogContentResult(
            success=True,
            content=extract_log_content(payload.get("result")),
            log_id=self._log_id,
        )

    def failure(self, error: Exception) -> LogContentResult:
        return LogContentResult(success=False, content=str(error), log_id=self._log_id)


class SFDeleteLog(SFTool):
    """Delete one Apex debug log."""

    name = "sf_delete_log"
    description = "Deletes an Apex debug log record by ID."
    operation = Operation.DELETE_RECORD
    lenient_json = True

    _log_id: str | None = None

    def execute(self, log_id: str, **kwargs: Any) -> CommandResult:
        self._log_id = log_id
        return self.run(sobject="ApexLog", record_id=log_id)

    def normalize(self, payload: dict[str, Any], output: CommandOutput) -> CommandResult:
        if output.success:
            return CommandResult(success=True, message=f"Log {self._log_id} deleted successfully")
        return CommandResult(
            success=False,
            message=output.stderr.strip() or payload.get("message") or "Failed to delete log",
        )

    def failure(self, error: Exception) -> CommandResult:
        return CommandResult(success=False, message=str(error))


class SFClearLogs:
    """Delete every Apex debug log in the org, one record at a time.

    Deletions run sequentially; a failed deletion is counted out and the loop
    moves on. When the listing itself fails the result is still a success
    with nothing deleted, but the message says so.
    """

    name = "sf_clear_logs"
    description = "Deletes all Apex debug logs in the target org."

    def __init__(
        self,
        runner: SFCommandRunner | None = None,
        target_org: str | None = None,
        cap: int = CLEAR_LOGS_CAP,
    ):
        self.runner = runner or SFCommandRunner()
        self.target_org = target_org or None
        self.cap = cap

    def execute(self, **kwargs: Any) -> ClearLogsResult:
        listing = SFListLogs(runner=self.runner, target_org=self.target_org).execute(limit=self.cap)

        if not listing.success:
            logger.warning("Could not list logs before clearing: %s", listing.message)
            return ClearLogsResult(
                success=True,
                message="Could not list logs; nothing deleted",
                deleted_count=0,
            )

        if not listing.logs:
            return ClearLogsResult(success=True, message="No logs to delete", deleted_count=0)

        deleted_count = 0
        for log in listing.logs:
            result = SFDeleteLog(runner=self.runner, target_org=self.target_org).execute(log_id=log.id)
            if result.success:
                deleted_count += 1
            else:
                logger.debug("Failed to delete log %s: %s", log.id, result.message)

        logger.info("Deleted %d of %d logs", deleted_count, len(listing.logs))
        return ClearLogsResult(
            success=True,
            message=f"Deleted {deleted_count} logs",
            deleted_count=deleted_count,
        )
