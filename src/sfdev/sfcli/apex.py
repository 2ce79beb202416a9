"""Apex execution tools."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from sfdev.models import (
    ApexTestClass,
    ApexTestClassListResult,
    ApexTestMethodResult,
    ApexTestRunResult,
    ApexTestSummary,
    ExecuteResult,
)
from sfdev.sfcli.base import CommandOutput, SFTool, result_section
from sfdev.sfcli.dialect import Operation

logger = logging.getLogger(__name__)

TEST_CLASS_QUERY = (
    "SELECT Id, Name, NamespacePrefix, ApiVersion, Status, IsValid, "
    "LengthWithoutComments, CreatedDate, LastModifiedDate FROM ApexClass "
    "WHERE (Name LIKE '%Test%' OR Name LIKE '%test%') ORDER BY Name ASC"
)


def split_log_lines(logs: Any) -> list[str] | None:
    """Split a multi-line debug log into its non-blank lines.

    Returns None when there is nothing to show.
    """
    if not isinstance(logs, str):
        return None
    lines = [line for line in logs.split("\n") if line.strip()]
    return lines or None


def pick(record: dict[str, Any], *keys: str) -> Any:
    """First truthy value among ``keys`` (field casing differs by query path)."""
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return None


class SFRunAnonymous(SFTool):
    """Execute anonymous Apex code."""

    name = "sf_run_anonymous"
    description = (
        "Executes anonymous Apex code in the target org and returns "
        "compile/run status with the debug log."
    )
    operation = Operation.EXECUTE_APEX

    def execute(self, apex_code: str, **kwargs: Any) -> ExecuteResult:
        """
        Execute anonymous Apex.

        The CLI only accepts a file, so the code is written to a temporary
        ``.apex`` file that is removed before this method returns.

        Args:
            apex_code: Apex source to execute

        Returns:
            ExecuteResult
        """
        try:
            fd, name = tempfile.mkstemp(suffix=".apex")
        except OSError as e:
            return self._write_failure(e)
        os.close(fd)
        temp_path = Path(name)

        try:
            try:
                temp_path.write_text(apex_code, encoding="utf-8")
            except (OSError, UnicodeError) as e:
                return self._write_failure(e)
            return self.run(file=str(temp_path))
        finally:
            try:
                temp_path.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning("Could not remove temporary Apex file %s: %s", temp_path, e)

    def normalize(self, payload: dict[str, Any], output: CommandOutput) -> ExecuteResult:
        result = result_section(payload)
        return ExecuteResult(
            success=bool(result.get("success")),
            compiled=bool(result.get("compiled")),
            compile_problem=result.get("compileProblem") or None,
            exception_message=result.get("exceptionMessage") or None,
            exception_stack_trace=result.get("exceptionStackTrace") or None,
            line=result.get("line"),
            column=result.get("column"),
            logs=split_log_lines(result.get("logs")),
        )

    def failure(self, error: Exception) -> ExecuteResult:
        return ExecuteResult(
            success=False,
            compiled=False,
            compile_problem=f"Failed to parse execute result: {error}",
        )

    def _write_failure(self, error: Exception) -> ExecuteResult:
        logger.error("Could not write temporary Apex file: %s", error)
        return ExecuteResult(
            success=False,
            compiled=False,
            compile_problem=f"Failed to write Apex to a temporary file: {error}",
        )


class SFRunApexTests(SFTool):
    """Run Apex test classes."""

    name = "sf_run_apex_tests"
    description = (
        "Executes Apex tests in the target org and returns the run summary "
        "with per-method outcomes."
    )
    operation = Operation.RUN_TESTS

    def execute(self, test_names: list[str] | None = None, **kwargs: Any) -> ApexTestRunResult:
        """
        Run Apex tests.

        Args:
            test_names: Test classes or ``Class.method`` names; None runs the org default

        Returns:
            ApexTestRunResult; ``success`` is true only when the summary outcome is Passed
        """
        return self.run(tests=[t for t in test_names or [] if t])

    def normalize(self, payload: dict[str, Any], output: CommandOutput) -> ApexTestRunResult:
        result = result_section(payload)
        summary = result.get("summary") or {}

        tests = result.get("tests")
        methods = None
        if isinstance(tests, list):
            methods = [
                ApexTestMethodResult(
                    full_name=pick(t, "fullName", "FullName") or "Unknown",
                    outcome=pick(t, "outcome", "Outcome") or "Unknown",
                    message=pick(t, "message", "Message"),
                    stack_trace=pick(t, "stackTrace", "StackTrace"),
                    run_time=pick(t, "runTime", "RunTime"),
                )
                for t in tests
                if isinstance(t, dict)
            ]

        return ApexTestRunResult(
            success=summary.get("outcome") == "Passed",
            summary=ApexTestSummary(
                outcome=summary.get("outcome") or "Unknown",
                tests_ran=summary.get("testsRan") or 0,
                passing=summary.get("passing") or 0,
                failing=summary.get("failing") or 0,
                skipped=summary.get("skipped") or 0,
            ),
            tests=methods,
            message=payload.get("message"),
        )

    def failure(self, error: Exception) -> ApexTestRunResult:
        return ApexTestRunResult(
            success=False,
            summary=ApexTestSummary(outcome="Error"),
            message=f"Failed to parse test result: {error}",
        )


class SFListTestClasses(SFTool):
    """List Apex classes whose names look like tests."""

    name = "sf_list_test_classes"
    description = "Queries the target org for Apex classes named like test classes."
    operation = Operation.QUERY

    def execute(self, **kwargs: Any) -> ApexTestClassListResult:
        return self.run(query=TEST_CLASS_QUERY)

    def normalize(
        self, payload: dict[str, Any], output: CommandOutput
    ) -> ApexTestClassListResult:
        if not output.success:
            return ApexTestClassListResult(
                success=False,
                message=output.stderr.strip() or payload.get("message"),
            )

        records = result_section(payload).get("records") or []
        return ApexTestClassListResult(
            success=True,
            classes=[ApexTestClass.model_validate(r) for r in records],
        )

    def failure(self, error: Exception) -> ApexTestClassListResult:
        logger.error("Failed to list test classes: %s", error)
        return ApexTestClassListResult(success=False, message=str(error))
