"""Data models for sfdev results."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SfdevModel(BaseModel):
    """Base for results handed to the editor host with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_host(self) -> dict[str, Any]:
        """Dump for the host; optional fields that are None are omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Org(SfdevModel):
    """An authenticated org known to the CLI."""

    alias: str | None = None
    username: str
    org_id: str = ""
    instance_url: str = ""
    is_default_username: bool = False
    is_default_dev_hub: bool = False

    @property
    def display_name(self) -> str:
        return f"{self.alias} - {self.username}" if self.alias else self.username


class ComponentFailure(SfdevModel):
    """A single metadata component that failed to deploy or retrieve."""

    component_type: str = "Unknown"
    full_name: str = "Unknown"
    problem_type: str = "Error"
    problem: str = "Unknown error"
    line_number: int | None = None
    column_number: int | None = None


class DeployResult(SfdevModel):
    success: bool
    status: str = "Unknown"
    id: str | None = None
    message: str | None = None
    component_failures: list[ComponentFailure] | None = None


class RetrieveResult(SfdevModel):
    success: bool
    status: str = "Unknown"
    id: str | None = None
    message: str | None = None
    component_failures: list[ComponentFailure] | None = None


class ExecuteResult(SfdevModel):
    """Outcome of an anonymous Apex execution.

    ``logs`` is None when the CLI returned no debug output, which the host
    treats differently from an empty list.
    """

    success: bool
    compiled: bool
    compile_problem: str | None = None
    exception_message: str | None = None
    exception_stack_trace: str | None = None
    line: int | None = None
    column: int | None = None
    logs: list[str] | None = None


class ApexTestSummary(SfdevModel):
    outcome: str = "Unknown"
    tests_ran: int = 0
    passing: int = 0
    failing: int = 0
    skipped: int = 0


class ApexTestMethodResult(SfdevModel):
    full_name: str = "Unknown"
    outcome: str = "Unknown"
    message: str | None = None
    stack_trace: str | None = None
    run_time: int | None = None


class ApexTestRunResult(SfdevModel):
    success: bool
    summary: ApexTestSummary = Field(default_factory=ApexTestSummary)
    tests: list[ApexTestMethodResult] | None = None
    message: str | None = None


class LogUser(BaseModel):
    name: str | None = Field(default=None, alias="Name")


class ApexLog(BaseModel):
    """An ApexLog record as returned by a SOQL query."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="Id")
    log_user_id: str | None = Field(default=None, alias="LogUserId")
    log_user: LogUser | None = Field(default=None, alias="LogUser")
    application: str | None = Field(default=None, alias="Application")
    duration_milliseconds: int | None = Field(default=None, alias="DurationMilliseconds")
    location: str | None = Field(default=None, alias="Location")
    log_length: int | None = Field(default=None, alias="LogLength")
    operation: str | None = Field(default=None, alias="Operation")
    request: str | None = Field(default=None, alias="Request")
    start_time: str | None = Field(default=None, alias="StartTime")
    status: str | None = Field(default=None, alias="Status")

    @property
    def user_name(self) -> str:
        if self.log_user and self.log_user.name:
            return self.log_user.name
        return self.log_user_id or ""


class ApexTestClass(BaseModel):
    """An ApexClass record that looks like a test class."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="Id")
    name: str = Field(..., alias="Name")
    namespace_prefix: str | None = Field(default=None, alias="NamespacePrefix")
    api_version: float | None = Field(default=None, alias="ApiVersion")
    status: str | None = Field(default=None, alias="Status")
    is_valid: bool | None = Field(default=None, alias="IsValid")
    length_without_comments: int | None = Field(default=None, alias="LengthWithoutComments")
    created_date: str | None = Field(default=None, alias="CreatedDate")
    last_modified_date: str | None = Field(default=None, alias="LastModifiedDate")


class LogListResult(SfdevModel):
    success: bool
    logs: list[ApexLog] = Field(default_factory=list)
    message: str | None = None


class LogContentResult(SfdevModel):
    success: bool
    content: str = ""
    log_id: str | None = None


class CommandResult(SfdevModel):
    """Plain success/message outcome (delete log, set default org, logout)."""

    success: bool
    message: str | None = None


class ClearLogsResult(SfdevModel):
    success: bool
    message: str | None = None
    deleted_count: int = 0


class ApexTestClassListResult(SfdevModel):
    success: bool
    classes: list[ApexTestClass] = Field(default_factory=list)
    message: str | None = None
