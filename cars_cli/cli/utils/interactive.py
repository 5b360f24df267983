"""Interactive utilities for CLI commands"""

import sys
from typing import Any, Dict, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from ...api.exceptions import UserCancelledError
from ...constants import DEFAULT_NETWORK, FRONTEND_HOSTING_METHODS, Subsystem
from ...core import ResolvedTarget
from ...models import DeploymentTarget
from . import output

CUSTOM_CHOICE = "custom"


def is_interactive() -> bool:
    """Whether prompts can be shown"""
    return sys.stdin.isatty()


def choose_from(items: Sequence[str], title: str, default: Optional[int] = None) -> int:
    """
    Show a numbered list and ask for one entry

    Args:
        items: Labels to choose from
        title: Heading printed above the list
        default: Index preselected when the user just presses enter

    Returns:
        Index of the chosen entry
    """
    output.console.print(f"\n[bold cyan]{title}[/bold cyan]")
    for index, item in enumerate(items):
        output.console.print(f"  [dim]{index}[/dim]  {escape(item)}")

    choice = Prompt.ask(
        "Choice",
        choices=[str(i) for i in range(len(items))],
        default=str(default) if default is not None else ...,
        console=output.console
    )
    return int(choice)


def choose_target(candidates: Sequence[ResolvedTarget]) -> ResolvedTarget:
    """Ask which of several eligible targets to use"""
    labels = [resolved.target.describe() for resolved in candidates]
    return candidates[choose_from(labels, "Select a CARS configuration")]


def choose_release(releases: Sequence[str]) -> str:
    """Ask which release to show, most recent preselected"""
    return releases[choose_from(releases, "Select a release", default=len(releases) - 1)]


def choose_cloud_url(urls: Sequence[str]) -> str:
    return urls[choose_from(urls, "Select a CARS Cloud URL")]


class TargetWizard:
    """Interactive wizard for CARS configuration entries"""

    def __init__(self, cloud_urls: List[str], console: Console = None):
        self.cloud_urls = cloud_urls
        self.console = console or output.console

    def run(self, current: Optional[DeploymentTarget] = None,
            preset: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Ask for every field not already given

        Args:
            current: Target being edited, whose values become defaults
            preset: Values given on the command line; these are not asked for

        Returns:
            Keyword arguments for ``TargetService.add`` or ``TargetService.edit``
        """
        preset = {k: v for k, v in (preset or {}).items() if v is not None}
        values = dict(preset)

        heading = "Edit CARS configuration" if current else "New CARS configuration"
        self.console.print(f"\n[bold cyan]{heading}[/bold cyan]\n")

        if 'name' not in values:
            values['name'] = self._ask_required(
                "Configuration name", current.name if current else None
            )

        if 'cloud_url' not in values:
            values['cloud_url'] = self._ask_cloud_url(current.cloud_url if current else None)

        if 'network' not in values:
            values['network'] = Prompt.ask(
                "Network (e.g. testnet/mainnet)",
                default=(current.network if current and current.network else DEFAULT_NETWORK),
                console=self.console
            ).strip()

        if 'deploy' not in values:
            values['deploy'] = self._ask_deploy(current)

        if 'frontend_hosting_method' not in values and Subsystem.FRONTEND.value in values['deploy']:
            values['frontend_hosting_method'] = Prompt.ask(
                "Frontend hosting method",
                choices=FRONTEND_HOSTING_METHODS,
                default=(current.frontend_hosting_method if current and current.frontend_hosting_method
                         else ('none' if current else 'HTTPS')),
                console=self.console
            )

        if 'project_id' not in values and not values.get('new_project'):
            current_id = current.project_id if current else None
            use_existing = Confirm.ask(
                "Use an existing project ID? (No creates a new project)",
                default=bool(current_id),
                console=self.console
            )
            if use_existing:
                values['project_id'] = self._ask_required("Existing project ID", current_id)
            elif current is not None:
                values['new_project'] = True

        return values

    def _ask_required(self, prompt: str, default: Optional[str] = None) -> str:
        if default is None:
            default = ...
        while True:
            value = Prompt.ask(prompt, default=default, console=self.console)
            if value and value.strip():
                return value.strip()
            self.console.print("[red]A value is required.[/red]")

    def _ask_cloud_url(self, current: Optional[str]) -> str:
        choices = list(self.cloud_urls) + [CUSTOM_CHOICE]
        default = None
        if current:
            default = choices.index(current) if current in self.cloud_urls else len(choices) - 1

        index = choose_from(choices, "Select a CARS Cloud URL", default=default)
        if choices[index] != CUSTOM_CHOICE:
            return choices[index]
        return self._ask_required("Custom CARS Cloud URL", current or self.cloud_urls[0])

    def _ask_deploy(self, current: Optional[DeploymentTarget]) -> List[str]:
        deploy = []
        for subsystem in (Subsystem.FRONTEND, Subsystem.BACKEND):
            checked = subsystem in current.deploy if current else True
            if Confirm.ask(f"Release {subsystem.value}?", default=checked, console=self.console):
                deploy.append(subsystem.value)
        return deploy


def confirm_or_cancel(message: str, default: bool = False) -> None:
    """
    Ask for confirmation

    Raises:
        UserCancelledError: If the user declines
    """
    if not Confirm.ask(message, default=default, console=output.console):
        raise UserCancelledError()
