"""Command shapes for the modern (``sf``) and legacy (``sfdx``) CLI dialects."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sfdev.sfcli.resolver import CliKind


class Operation(str, Enum):
    """Logical operations the translator knows how to build."""

    LIST_ORGS = "list_orgs"
    DEPLOY = "deploy"
    RETRIEVE = "retrieve"
    OPEN_ORG = "open_org"
    EXECUTE_APEX = "execute_apex"
    RUN_TESTS = "run_tests"
    QUERY = "query"
    GET_LOG = "get_log"
    DELETE_RECORD = "delete_record"
    SET_DEFAULT_ORG = "set_default_org"
    LOGOUT = "logout"


@dataclass(frozen=True)
class CommandShape:
    """How one operation is spelled in one dialect."""

    subcommand: tuple[str, ...]
    # Logical parameter name -> flag. A None flag means a positional value.
    flags: dict[str, str | None] = field(default_factory=dict)
    fixed: tuple[str, ...] = ()
    org_flag: str | None = None
    # Logical field name -> JSON key in the CLI response
    fields: dict[str, str] = field(default_factory=dict)


MODERN_SHAPES: dict[Operation, CommandShape] = {
    Operation.LIST_ORGS: CommandShape(
        ("org", "list"),
        fixed=("--json",),
        fields={"is_dev_hub": "isDevHubUsername"},
    ),
    Operation.DEPLOY: CommandShape(
        ("project", "deploy", "start"),
        flags={"source_path": "-d"},
        fixed=("--json",),
        org_flag="-o",
        fields={"failures": "files"},
    ),
    Operation.RETRIEVE: CommandShape(
        ("project", "retrieve", "start"),
        flags={"metadata": "-m"},
        fixed=("--json",),
        org_flag="-o",
        fields={"failures": "files"},
    ),
    Operation.OPEN_ORG: CommandShape(("org", "open"), org_flag="-o"),
    Operation.EXECUTE_APEX: CommandShape(
        ("apex", "run"),
        flags={"file": "-f"},
        fixed=("--json",),
        org_flag="-o",
    ),
    Operation.RUN_TESTS: CommandShape(
        ("apex", "run", "test"),
        flags={"tests": "-t"},
        fixed=("--json", "--result-format", "json"),
        org_flag="-o",
    ),
}

LEGACY_SHAPES: dict[Operation, CommandShape] = {
    Operation.LIST_ORGS: CommandShape(
        ("force:org:list",),
        fixed=("--json",),
        fields={"is_dev_hub": "isDevHub"},
    ),
    Operation.DEPLOY: CommandShape(
        ("force:source:deploy",),
        flags={"source_path": "-p"},
        fixed=("--json",),
        org_flag="-u",
        fields={"failures": "details.componentFailures"},
    ),
    Operation.RETRIEVE: CommandShape(
        ("force:source:retrieve",),
        flags={"metadata": "-m"},
        fixed=("--json",),
        org_flag="-u",
        fields={"failures": "details.componentFailures"},
    ),
    Operation.OPEN_ORG: CommandShape(("force:org:open",), org_flag="-u"),
    Operation.EXECUTE_APEX: CommandShape(
        ("force:apex:execute",),
        flags={"file": "-f"},
        fixed=("--json",),
        org_flag="-u",
    ),
    Operation.RUN_TESTS: CommandShape(
        ("force:apex:test:run",),
        flags={"tests": "-n"},
        fixed=("--json", "--result-format", "json"),
        org_flag="-u",
    ),
}

# Both binaries accept these in the same form.
SHARED_SHAPES: dict[Operation, CommandShape] = {
    Operation.QUERY: CommandShape(
        ("data", "query"),
        flags={"query": "--query"},
        fixed=("--json",),
        org_flag="--target-org",
    ),
    Operation.GET_LOG: CommandShape(
        ("apex", "get", "log"),
        flags={"log_id": "--log-id"},
        fixed=("--json",),
        org_flag="--target-org",
    ),
    Operation.DELETE_RECORD: CommandShape(
        ("data", "delete", "record"),
        flags={"sobject": "--sobject", "record_id": "--record-id"},
        fixed=("--json",),
        org_flag="--target-org",
    ),
    Operation.SET_DEFAULT_ORG: CommandShape(
        ("config", "set", "target-org"),
        flags={"org": None},
    ),
    Operation.LOGOUT: CommandShape(
        ("org", "logout"),
        fixed=("--no-prompt",),
        org_flag="--target-org",
    ),
}

DIALECTS: dict[CliKind, dict[Operation, CommandShape]] = {
    CliKind.MODERN: {**SHARED_SHAPES, **MODERN_SHAPES},
    CliKind.LEGACY: {**SHARED_SHAPES, **LEGACY_SHAPES},
}


def get_shape(kind: CliKind, operation: Operation) -> CommandShape:
    return DIALECTS[CliKind(kind)][Operation(operation)]


def build_args(
    kind: CliKind,
    operation: Operation,
    target_org: str | None = None,
    **params: Any,
) -> list[str]:
    """Build the argument vector for ``operation`` in ``kind``'s dialect.

    Args:
        kind: Resolved CLI dialect
        operation: Logical operation to run
        target_org: Username or alias; appended with the dialect's org flag
        **params: Operation parameters; lists are joined with commas and
            empty values are skipped

    Returns:
        Arguments to pass after the binary name
    """
    shape = get_shape(kind, operation)

    unknown = set(params) - set(shape.flags)
    if unknown:
        raise ValueError(
            f"Unknown parameters for {Operation(operation).value}: {', '.join(sorted(unknown))}"
        )

    args = list(shape.subcommand) + list(shape.fixed)

    for name, flag in shape.flags.items():
        value = params.get(name)
        if value is None or value == "" or value == [] or value == ():
            continue
        if isinstance(value, (list, tuple)):
            value = ",".join(str(v) for v in value)
        if flag:
            args.append(flag)
        args.append(str(value))

    if target_org and shape.org_flag:
        args.extend([shape.org_flag, target_org])

    return args
