"""Salesforce CLI layer: dialect resolution, command building and result normalization."""

from sfdev.sfcli.base import CommandOutput, SFCommandRunner, SFTool
from sfdev.sfcli.errors import SFCommandError, SfdevError, ToolNotFoundError
from sfdev.sfcli.resolver import CliKind, CliResolver, default_resolver
from sfdev.sfcli.deploy import SFDeploy, SFRetrieve
from sfdev.sfcli.apex import SFRunAnonymous, SFRunApexTests, SFListTestClasses
from sfdev.sfcli.logs import SFListLogs, SFGetLog, SFDeleteLog, SFClearLogs
from sfdev.sfcli.org import SFOrgList, SFOrgListRaw, SFOrgOpen, SFSetDefaultOrg, SFOrgLogout

__all__ = [
    "CommandOutput",
    "SFCommandRunner",
    "SFTool",
    "SFCommandError",
    "SfdevError",
    "ToolNotFoundError",
    "CliKind",
    "CliResolver",
    "default_resolver",
    "SFDeploy",
    "SFRetrieve",
    "SFRunAnonymous",
    "SFRunApexTests",
    "SFListTestClasses",
    "SFListLogs",
    "SFGetLog",
    "SFDeleteLog",
    "SFClearLogs",
    "SFOrgList",
    "SFOrgListRaw",
    "SFOrgOpen",
    "SFSetDefaultOrg",
    "SFOrgLogout",
]
