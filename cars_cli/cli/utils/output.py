# cars_cli/cli/utils/output.py
"""Output formatting utilities"""

from typing import List, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ...core import ResolvedTarget
from ...models import Artifact, BuildResult
from ...utils.file_utils import format_size

console = Console()


def format_build_result(result: BuildResult) -> None:
    """Format and display build result"""
    artifact = result.artifact
    lines = [
        f"[green]✓[/green] Artifact built successfully!",
        f"",
        f"[bold]Configuration:[/bold] {escape(result.target.name)}",
        f"[bold]Deploy:[/bold] {', '.join(result.target.deploy.to_list()) or 'nothing'}",
        f"[bold]Artifact:[/bold] {artifact.name}",
        f"[bold]Size:[/bold] {format_size(artifact.size)}",
    ]

    if result.outputs.frontend_language:
        lines.append(f"[bold]Frontend:[/bold] {result.outputs.frontend_language}")

    if result.outputs.steps:
        lines.append(f"[bold]Steps:[/bold] {', '.join(result.outputs.steps)}")

    if result.duration is not None:
        lines.append(f"[bold]Duration:[/bold] {result.duration:.1f}s")

    panel = Panel(
        "\n".join(lines),
        title="Build Result",
        border_style="green"
    )
    console.print(panel)


def format_target_list(targets: Sequence[ResolvedTarget]) -> None:
    """Format and display all deployment targets with their ordinals"""
    if not targets:
        console.print("[yellow]No configurations found[/yellow]")
        return

    table = Table(title="Configurations", box=box.ROUNDED)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Provider")
    table.add_column("Cloud URL", style="green")
    table.add_column("Project ID")
    table.add_column("Network", style="dim")
    table.add_column("Deploy", style="yellow")

    for resolved in targets:
        target = resolved.target
        if target.is_cars:
            provider = "[bold]CARS[/bold]"
        else:
            provider = f"[dim]{escape(target.provider or '?')} (non-CARS)[/dim]"
        table.add_row(
            str(resolved.index),
            escape(target.name),
            provider,
            target.cloud_url or "",
            target.project_id or "[dim]none[/dim]",
            target.network or "",
            ", ".join(target.deploy.to_list())
        )

    console.print(table)


def format_artifact_list(artifacts: List[Artifact]) -> None:
    """Format and display local artifacts"""
    if not artifacts:
        console.print("[yellow]No artifacts found[/yellow]")
        return

    table = Table(title="Artifacts", box=box.SIMPLE)
    table.add_column("Name", style="cyan")
    table.add_column("Created", style="dim")
    table.add_column("Size", justify="right", style="yellow")

    for artifact in artifacts:
        table.add_row(
            artifact.name,
            artifact.created_at.strftime("%Y-%m-%d %H:%M:%S"),
            format_size(artifact.size)
        )

    console.print(table)


def format_string_list(items: List[str], title: str) -> None:
    """Format and display a list of identifiers returned by the server"""
    if not items:
        console.print(f"[yellow]No {title.lower()} found[/yellow]")
        return

    table = Table(title=title, box=box.SIMPLE)
    table.add_column("#", justify="right", style="dim")
    table.add_column(title[:-1] if title.endswith('s') else title, style="cyan")

    for index, item in enumerate(items):
        table.add_row(str(index), item)

    console.print(table)


def format_log(log: str, title: str) -> None:
    """Display a log text returned by the server"""
    panel = Panel(
        Text(log.rstrip()) if log.strip() else "[dim](empty)[/dim]",
        title=title,
        border_style="blue"
    )
    console.print(panel)


def print_info(message: str) -> None:
    """Print info message"""
    console.print(f"[blue]Info:[/blue] {escape(message)}")


def print_success(message: str) -> None:
    """Print success message"""
    console.print(f"[green]Success:[/green] {escape(message)}")
