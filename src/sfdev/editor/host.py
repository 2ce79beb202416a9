"""Editor host interface and a terminal implementation."""

from pathlib import Path
from typing import Any, Protocol

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text


class EditorHost(Protocol):
    """What the dispatcher needs from the editor it runs inside."""

    def echo_info(self, message: str) -> None: ...

    def echo_success(self, message: str) -> None: ...

    def echo_error(self, message: str) -> None: ...

    def get_var(self, name: str, default: Any = None) -> Any: ...

    def current_file(self) -> str: ...

    def open_buffer(
        self,
        name: str,
        lines: list[str],
        filetype: str,
        split: str = "new",
    ) -> None: ...


# Buffer filetypes mapped to rich styles for the terminal host
FILETYPE_STYLES = {
    "sfdev-orgs": "cyan",
    "sfdev-test-results": "magenta",
    "apexlog": "white",
}


class ConsoleHost:
    """Renders dispatcher output on a terminal.

    Buffers are printed as titled panels, notifications as coloured lines.
    Editor variables come from a plain dict.
    """

    def __init__(
        self,
        console: Console | None = None,
        variables: dict[str, Any] | None = None,
        current_file: str | Path | None = None,
    ):
        self.console = console or Console()
        self.variables = dict(variables or {})
        self._current_file = str(current_file) if current_file else ""

    def echo_info(self, message: str) -> None:
        self.console.print(f"[blue]{escape(message)}[/blue]", highlight=False)

    def echo_success(self, message: str) -> None:
        self.console.print(f"[green]✓ {escape(message)}[/green]", highlight=False)

    def echo_error(self, message: str) -> None:
        self.console.print(f"[red]✗ {escape(message)}[/red]", highlight=False)

    def get_var(self, name: str, default: Any = None) -> Any:
        return self.variables.get(name, default)

    def current_file(self) -> str:
        return self._current_file

    def open_buffer(
        self,
        name: str,
        lines: list[str],
        filetype: str,
        split: str = "new",
    ) -> None:
        # Text() keeps log content from being parsed as console markup
        body = Text("\n".join(lines), style=FILETYPE_STYLES.get(filetype, ""))
        self.console.print(Panel(body, title=escape(name), title_align="left"))
