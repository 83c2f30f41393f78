# AgentConfig Console Output
# Rich-based console output and interactive conflict prompt

from pathlib import Path
from typing import Optional

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from agentconfig.config.schema import AgentConfigFile
from agentconfig.sync.conflict import ConflictChoice, ConflictPolicy
from agentconfig.sync.engine import SyncResult
from agentconfig.sync.mapping import ResolvedMapping
from agentconfig.sync.status import DriftStatus, StatusEntry

_CONFLICT_CHOICES = {
    "1": ConflictPolicy.OVERWRITE,
    "2": ConflictPolicy.BACKUP,
    "3": ConflictPolicy.SKIP,
    "4": ConflictPolicy.CANCEL,
}


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for sync operations.
    """

    def __init__(self, *, verbose: bool = False, colored: Optional[bool] = None):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Force colored output on or off. None detects the terminal.
        """
        self.verbose = verbose
        self._console = RichConsole(force_terminal=colored, no_color=colored is False)

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {escape(message)}", soft_wrap=True)

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{escape(message)}[/green]", soft_wrap=True)

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{escape(message)}[/blue]", soft_wrap=True)

    def print_mappings(self, mappings: list[ResolvedMapping], *, title: str = "Mappings") -> None:
        """Print a table of resolved mappings."""
        if not mappings:
            return

        table = Table(title=title, show_header=True, header_style="bold")
        table.add_column("Agent", style="cyan")
        table.add_column("Mode", style="magenta")
        table.add_column("Source", style="dim")
        table.add_column("Target")

        for mapping in mappings:
            table.add_row(mapping.agent, mapping.mode.value, str(mapping.source), str(mapping.target))

        self._console.print(table)

    def print_sync_result(self, result: SyncResult, *, dry_run: bool = False) -> None:
        """
        Print sync result summary.

        Args:
            result: Sync result to display.
            dry_run: Whether this was a dry run (changes wording).
        """
        for warning in result.warnings:
            self.print_warning(warning)

        if self.verbose:
            self.print_mappings(result.planned, title="Planned")
            self.print_mappings(result.skipped, title="Skipped")

        status_text = "Dry run completed" if dry_run else "Sync completed"
        lines = [
            f"[green]{status_text}[/green]",
            f"Planned: {len(result.planned)}",
            f"Updated: {len(result.updated)}",
            f"Skipped: {len(result.skipped)}",
        ]
        if result.unchanged:
            lines.append(f"[dim]Already linked: {len(result.unchanged)}[/dim]")

        self._console.print()
        self._console.print(
            Panel(
                "\n".join(lines),
                title="Summary",
                border_style="yellow" if result.has_warnings else "green",
            )
        )

    def print_status(self, entries: list[StatusEntry]) -> None:
        """
        Print drift status, one line per target.

        Args:
            entries: Status entries in snapshot order.
        """
        if not entries:
            self._console.print("No sync state found.")
            return

        colors = {
            DriftStatus.OK: "green",
            DriftStatus.DRIFTED: "yellow",
            DriftStatus.MISSING: "red",
        }
        for entry in entries:
            color = colors.get(entry.status, "white")
            suffix = f" ({entry.reason})" if entry.reason else ""
            self._console.print(
                f"[{color}]{entry.status.value}[/{color}]: {escape(entry.path)}{escape(suffix)}",
                soft_wrap=True,
            )

    def print_agents(self, config: AgentConfigFile) -> None:
        """Print configured agents in declaration order."""
        for agent_id, agent in config.agents.items():
            scopes = ", ".join(agent.scopes) or "no scopes"
            self._console.print(
                f"[cyan]{escape(agent_id)}[/cyan]: {escape(agent.display_name)} [dim]({scopes})[/dim]",
                soft_wrap=True,
            )

    def confirm(self, message: str, default: bool = False) -> bool:
        """
        Ask for confirmation.

        Args:
            message: Confirmation message.
            default: Default value if user just presses enter.

        Returns:
            True if confirmed.
        """
        suffix = " (Y/n)" if default else " (y/N)"
        response = self._console.input(f"{message}{suffix} ").strip().lower()

        if not response:
            return default

        return response in ("y", "yes")

    def resolve_conflict(self, target: Path) -> ConflictChoice:
        """
        Ask the operator what to do with an existing, unmanaged target.

        Args:
            target: The conflicting target path.

        Returns:
            ConflictChoice with the action and whether it applies to all
            remaining conflicts. Unrecognized input means skip.
        """
        self._console.print(f"\n[bold yellow]Config already exists at[/bold yellow] {escape(str(target))}")
        self._console.print("[bold]Choose action:[/bold]")
        self._console.print("  [cyan]1[/cyan] - [bold]Overwrite[/bold]")
        self._console.print("  [cyan]2[/cyan] - [bold]Backup[/bold] then overwrite")
        self._console.print("  [cyan]3[/cyan] - [bold]Skip[/bold]")
        self._console.print("  [cyan]4[/cyan] - [bold]Cancel[/bold] sync")

        choice = self._console.input("> ").strip()
        apply_to_all = self.confirm("Apply to all conflicts?", default=False)

        return ConflictChoice(
            action=_CONFLICT_CHOICES.get(choice, ConflictPolicy.SKIP),
            apply_to_all=apply_to_all,
        )


def create_console(*, verbose: bool = False, colored: Optional[bool] = None) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Force colored output on or off. None detects the terminal.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored)
