"""Formatting of results into buffer lines."""

from sfdev.models import (
    ApexTestRunResult,
    DeployResult,
    ExecuteResult,
    Org,
    RetrieveResult,
)

RULE = "─" * 29


def org_list_lines(orgs: list[Org]) -> list[str]:
    lines = ["# Authenticated Orgs", ""]
    for org in orgs:
        default_marker = " (default)" if org.is_default_username else ""
        devhub_marker = " [DevHub]" if org.is_default_dev_hub else ""
        lines.append(f"{org.display_name}{default_marker}{devhub_marker}")
        lines.append(f"  Org ID: {org.org_id}")
        lines.append(f"  Instance: {org.instance_url}")
        lines.append("")
    return lines


def execute_result_lines(apex_code: str, result: ExecuteResult) -> list[str]:
    """Input code followed by the outcome, errors and debug log."""
    lines = [
        "=== Apex Execution Result ===",
        "",
        "Input Code:",
        RULE,
        *apex_code.split("\n"),
        "",
        "Output:",
        RULE,
    ]

    if result.success:
        lines.append("✓ Compiled successfully")
        lines.append("✓ Executed successfully")
    else:
        lines.append("✗ Execution failed")
        if result.compile_problem:
            lines.extend(["", "Compile Error:", result.compile_problem])
            if result.line:
                lines.append(f"Line: {result.line}, Column: {result.column or 0}")
        if result.exception_message:
            lines.extend(["", "Exception:", result.exception_message])
            if result.exception_stack_trace:
                lines.extend(["", "Stack Trace:", *result.exception_stack_trace.split("\n")])

    if result.logs:
        lines.extend(["", "Debug Logs:", RULE, *result.logs])

    return lines


def apex_test_result_lines(result: ApexTestRunResult) -> list[str]:
    summary = result.summary
    lines = [
        "# Apex Test Results",
        "",
        f"Outcome: {summary.outcome}",
        f"Tests Ran: {summary.tests_ran}",
        f"Passing: {summary.passing}",
        f"Failing: {summary.failing}",
        f"Skipped: {summary.skipped}",
        "",
    ]

    if result.message and summary.outcome == "Error":
        lines.extend([f"Error: {result.message}", ""])

    if result.tests:
        lines.extend(["## Test Details", ""])
        for test in result.tests:
            lines.append(f"{test.outcome}: {test.full_name}")
            if test.message:
                lines.append(f"  Message: {test.message}")
            if test.stack_trace:
                lines.append(f"  Stack: {test.stack_trace}")
            if test.run_time:
                lines.append(f"  Time: {test.run_time}ms")
            lines.append("")

    return lines


def deploy_message(result: DeployResult) -> str:
    if result.success:
        return f"Deploy succeeded: {result.status}"

    message = f"Deploy failed: {result.status}"
    if result.component_failures:
        message += "\n" + "\n".join(
            f"  {f.full_name}: {f.problem}" for f in result.component_failures
        )
    elif result.message:
        message += f"\n  {result.message}"
    return message


def retrieve_message(result: RetrieveResult) -> str:
    if result.success:
        return f"Retrieve succeeded: {result.status}"
    return f"Retrieve failed: {result.message or result.status}"
