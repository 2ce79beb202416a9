"""sfdev: Salesforce CLI integration for editors."""

__version__ = "0.1.0"

from sfdev.config import SfdevConfig, load_config
from sfdev.editor import ConsoleHost, Dispatcher, EditorHost
from sfdev.sfcli import CliKind, CliResolver, SFCommandRunner, SFCommandError, ToolNotFoundError

__all__ = [
    "__version__",
    "SfdevConfig",
    "load_config",
    "ConsoleHost",
    "Dispatcher",
    "EditorHost",
    "CliKind",
    "CliResolver",
    "SFCommandRunner",
    "SFCommandError",
    "ToolNotFoundError",
]
