# ConfigHelper Console Output
# Rich-based display of settings, directories and drive mappings

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.table import Table

from confighelper.document.models import DirectoryEntry, DriveMapping


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for the host CLI.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
        """
        self.verbose = verbose
        self._console = RichConsole(force_terminal=colored, no_color=not colored)

    @property
    def rich(self) -> RichConsole:
        """Underlying rich console."""
        return self._console

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{escape(message)}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{escape(message)}[/blue]")

    def print_directories(self, directories: list[DirectoryEntry]) -> None:
        """Print directory entries as a table."""
        if not directories:
            self._console.print("[dim]No directories configured[/dim]")
            return

        table = Table(title="Directories", show_header=True, header_style="bold")
        table.add_column("Path", style="cyan")
        table.add_column("Exclusions")

        for entry in directories:
            exclusions = ", ".join(entry.exclusions) if entry.exclusions else "[dim]-[/dim]"
            table.add_row(escape(entry.path), escape(exclusions) if entry.exclusions else exclusions)

        self._console.print(table)

    def print_drive_mappings(self, mappings: list[DriveMapping]) -> None:
        """Print drive mappings as a table."""
        if not mappings:
            self._console.print("[dim]No drive mappings configured[/dim]")
            return

        table = Table(title="Drive Mappings", show_header=True, header_style="bold")
        table.add_column("Drive", style="magenta", justify="center")
        table.add_column("UNC Path", style="cyan")

        for mapping in mappings:
            table.add_row(escape(mapping.drive_letter), escape(mapping.unc_path))

        self._console.print(table)

    def print_settings(self, settings: dict[str, str]) -> None:
        """Print flat key/value settings as a table."""
        if not settings:
            self._console.print("[dim]No settings configured[/dim]")
            return

        table = Table(title="Settings", show_header=True, header_style="bold")
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="green")

        for key in sorted(settings):
            table.add_row(escape(key), escape(settings[key]))

        self._console.print(table)


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored)
