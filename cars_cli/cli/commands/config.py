"""Configuration management commands"""

import click

from ..decorators import handle_errors, require_manifest
from ..utils.interactive import TargetWizard, confirm_or_cancel
from ..utils.output import format_target_list, print_success
from ...api.exceptions import ConfigError
from ...constants import FRONTEND_HOSTING_METHODS, MANIFEST_FILE, Subsystem
from ...services import TargetService

DEPLOY_CHOICES = [s.value for s in Subsystem]


def target_options(func):
    """Options shared by ``config add`` and ``config edit``"""
    options = [
        click.option('--name', '-n', help='Configuration name'),
        click.option('--cloud-url', '-u', help='CARS Cloud URL'),
        click.option('--network', help='Network, e.g. mainnet or testnet'),
        click.option('--deploy', 'deploy', multiple=True, type=click.Choice(DEPLOY_CHOICES),
                     help='Subsystem to release (repeatable)'),
        click.option('--hosting', 'frontend_hosting_method',
                     type=click.Choice(FRONTEND_HOSTING_METHODS),
                     help='Frontend hosting method'),
        click.option('--project-id', help='Existing project ID on the CARS Cloud'),
        click.option('--new-project', is_flag=True,
                     help='Create a new project on the CARS Cloud'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _collect(ctx, current=None, **given):
    """Merge command-line values with wizard answers"""
    given['deploy'] = list(given['deploy']) or None
    if given.get('project_id') and given.get('new_project'):
        raise ConfigError("Use either --project-id or --new-project, not both.")

    if ctx.obj.interactive:
        wizard = TargetWizard(ctx.obj.config.cloud_urls)
        return wizard.run(current=current, preset=given)

    return {k: v for k, v in given.items() if v is not None}


@click.group()
def config():
    """Manage CARS configurations in deployment-info.json

    A configuration names a CARS Cloud, a project on it, and the
    subsystems (backend, frontend) to build and release.
    """
    pass


@config.command(name='ls')
@click.pass_context
@require_manifest
@handle_errors()
def list_configs(ctx):
    """List all configurations, CARS and non-CARS"""
    service = TargetService(ctx.obj.path_resolver)
    format_target_list(service.list())


@config.command()
@target_options
@click.pass_context
@require_manifest
@handle_errors()
def add(ctx, **options):
    """Add a new CARS configuration

    Values not given as options are asked for interactively. Without a
    terminal, --name and --cloud-url are required and a new project is
    created unless --project-id is given.

    Examples:

        cars config add
        cars config add --name production --cloud-url https://cars-cloud1.com
    """
    values = _collect(ctx, **options)
    values.pop('new_project', None)

    if not values.get('name') or not values.get('cloud_url'):
        raise ConfigError("--name and --cloud-url are required when not running interactively.")

    service = TargetService(ctx.obj.path_resolver, remote=ctx.obj.remote)
    resolved = service.add(**values)

    print_success(
        f'CARS configuration "{resolved.name}" created '
        f'(index {resolved.index}, project {resolved.target.project_id}).'
    )


@config.command()
@click.argument('target')
@target_options
@click.pass_context
@require_manifest
@handle_errors()
def edit(ctx, target, **options):
    """Edit a CARS configuration

    TARGET is the configuration's name or index. Options left out keep
    their current value.
    """
    current = ctx.obj.registry().resolve_eligible(target).target
    values = _collect(ctx, current=current, **options)

    service = TargetService(ctx.obj.path_resolver, remote=ctx.obj.remote)
    resolved = service.edit(target, **values)

    print_success(f'CARS configuration "{resolved.name}" updated.')


@config.command()
@click.argument('target')
@click.option('--yes', '-y', is_flag=True, help='Do not ask for confirmation')
@click.pass_context
@require_manifest
@handle_errors()
def delete(ctx, target, yes):
    """Delete a CARS configuration

    TARGET is the configuration's name or index.
    """
    resolved = ctx.obj.registry().resolve_eligible(target)

    if not yes and ctx.obj.interactive:
        confirm_or_cancel(f'Delete configuration "{resolved.name}" from {MANIFEST_FILE}?')

    service = TargetService(ctx.obj.path_resolver)
    removed = service.delete(target)

    print_success(f'CARS configuration "{removed.name}" deleted.')
