# cars_cli/cli/main.py
"""Main CLI entry point for cars-cli"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from ..__version__ import __version__
from ..api.exceptions import CarsError
from ..constants import APP_NAME, ENV_LOG_LEVEL, ENV_PROJECT_ROOT, LOG_FORMAT, MANIFEST_FILE
from ..core import (
    ManifestStore,
    NpmStepRunner,
    PathResolver,
    ResolvedTarget,
    StepRunner,
    TargetRegistry,
    load_client_config,
)
from ..models import ClientConfig
from ..services import RemoteService

# Import all commands
from .commands import (
    artifact,
    build,
    config,
    init,
    project,
    release,
)
from .utils.interactive import choose_target, is_interactive
from .utils.output import console


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = getattr(logging, os.environ.get(ENV_LOG_LEVEL, '').upper(), logging.WARNING)
        if not isinstance(level, int):
            level = logging.WARNING

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ],
        force=True
    )

    # Adjust third-party loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)


class Context:
    """CLI context object with lazy initialization

    The user configuration, the control-plane service and the manifest are
    only loaded when a command asks for them, so commands such as
    ``cars init`` work without any of them.
    """

    def __init__(self,
                 config: Optional[ClientConfig] = None,
                 remote: Optional[RemoteService] = None,
                 step_runner: Optional[StepRunner] = None,
                 interactive: Optional[bool] = None):
        """Initialize CLI context

        Args:
            config: User configuration (default: loaded on first use)
            remote: Control-plane service (default: built from config)
            step_runner: Build step runner (default: npm-compatible runner)
            interactive: Force prompts on or off (default: stdin is a TTY)
        """
        self.project_root: Optional[Path] = None
        self.verbose: bool = False
        self.debug: bool = False
        self._config = config
        self._remote = remote
        self._step_runner = step_runner
        self._interactive = interactive
        self._path_resolver: Optional[PathResolver] = None

    @property
    def path_resolver(self) -> PathResolver:
        if self._path_resolver is None:
            self._path_resolver = PathResolver(self.project_root)
            if self.debug:
                console.print(f"[dim]Project root: {self._path_resolver.project_root}[/dim]")
        return self._path_resolver

    @property
    def manifest_store(self) -> ManifestStore:
        return ManifestStore(self.path_resolver)

    @property
    def config(self) -> ClientConfig:
        if self._config is None:
            self._config = load_client_config()
        return self._config

    @property
    def remote(self) -> RemoteService:
        if self._remote is None:
            self._remote = RemoteService(self.config)
        return self._remote

    @property
    def step_runner(self) -> StepRunner:
        if self._step_runner is None:
            self._step_runner = NpmStepRunner(self.config.package_manager)
        return self._step_runner

    @property
    def interactive(self) -> bool:
        if self._interactive is None:
            return is_interactive()
        return self._interactive

    @property
    def chooser(self):
        """Target chooser, or None when no prompt can be shown"""
        return choose_target if self.interactive else None

    def registry(self) -> TargetRegistry:
        """Load the manifest fresh and wrap it in a registry"""
        return TargetRegistry(self.manifest_store.load())

    def select_target(self, identifier: Optional[str] = None) -> ResolvedTarget:
        """Select the CARS target a remote command operates on"""
        return self.registry().select(identifier, chooser=self.chooser)


@click.group(name=APP_NAME, invoke_without_command=True)
@click.option('--project-root', type=click.Path(file_okay=False, path_type=Path),
              envvar=ENV_PROJECT_ROOT,
              help=f'Directory holding {MANIFEST_FILE} (default: current directory)')
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.version_option(__version__, prog_name=APP_NAME)
@click.pass_context
def cli(ctx, project_root, verbose, debug, quiet):
    """CARS CLI - Build and release CARS applications

    Reads deployment-info.json in the project root, builds the backend and
    frontend a deployment configuration asks for, and packages them into a
    timestamped artifact. Artifacts are released to a CARS Cloud project.
    """
    # Setup logging
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug)

    # Tests may provide a prepared context
    ctx.ensure_object(Context)
    ctx.obj.project_root = project_root
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug

    if ctx.invoked_subcommand is None:
        store = ctx.obj.manifest_store
        if not store.exists():
            store.create_default()
            console.print(f"[green]✓[/green] Created {store.path}", highlight=False)
        click.echo(ctx.get_help())


# Register commands
cli.add_command(init.init)
cli.add_command(build.build)
cli.add_command(config.config)
cli.add_command(project.project)
cli.add_command(release.release)
cli.add_command(artifact.artifact)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts
    - Errors escaping a command
    - Unexpected exceptions with proper error display
    """
    try:
        # click turns KeyboardInterrupt into Abort outside standalone mode
        exit_code = cli.main(prog_name=APP_NAME, standalone_mode=False)

    except (KeyboardInterrupt, click.exceptions.Abort):
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)

    except CarsError as e:
        console.print(f"[red]Error: {e.message}[/red]", highlight=False)
        sys.exit(1)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)

    sys.exit(exit_code if isinstance(exit_code, int) else 0)


if __name__ == "__main__":
    main()
