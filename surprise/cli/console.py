"""Terminal output for the CLI, built on rich."""

from typing import Any

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.prompt import Prompt


class Console:
    """Prints status lines to stdout and errors to stderr."""

    def __init__(self, *, force_terminal: bool | None = None, quiet: bool = False) -> None:
        self._out = RichConsole(force_terminal=force_terminal)
        self._err = RichConsole(force_terminal=force_terminal, stderr=True)
        self._quiet = quiet

    def success(self, message: str) -> None:
        self._out.print(f"[green]✓[/green] {message}")

    def error(self, message: str, *, hint: str | None = None) -> None:
        self._err.print(f"[red]✗[/red] {message}")
        if hint:
            self._err.print(f"  [dim]{hint}[/dim]")

    def info(self, message: str) -> None:
        """Dimmed note, dropped when quiet."""
        if not self._quiet:
            self._out.print(f"[dim]{message}[/dim]")

    def print(self, *args: Any, **kwargs: Any) -> None:
        self._out.print(*args, **kwargs)

    def surprise(self, detail: dict[str, Any], media_url: str) -> None:
        """Show an unlocked surprise: the message in a frame, then the media link."""
        self._out.print(
            Panel(
                detail.get("message", ""),
                title=f"[bold]{detail.get('originalName', 'Surprise')}[/bold]",
                subtitle=f"[dim]{detail.get('mimeType', '')}[/dim]",
                border_style="magenta",
                padding=(1, 2),
            )
        )
        self._out.print(f"  [dim]Media:[/dim] {media_url}")

    def ask_password(self) -> str:
        return Prompt.ask("Password", password=True, console=self._out)

    def status(self, message: str):
        """Spinner for the duration of a with-block."""
        return self._out.status(message)


_default: Console | None = None


def get_console() -> Console:
    global _default
    if _default is None:
        _default = Console()
    return _default
