"""Editor integration: host interface, dispatch table and buffer rendering."""

from sfdev.editor.dispatcher import Dispatcher, parse_host_args
from sfdev.editor.host import ConsoleHost, EditorHost

__all__ = [
    "ConsoleHost",
    "Dispatcher",
    "EditorHost",
    "parse_host_args",
]
