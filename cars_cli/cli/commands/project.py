"""Project management commands"""

import click

from ..decorators import handle_errors, require_manifest
from ..utils.interactive import choose_cloud_url
from ..utils.output import format_log, format_string_list, print_success
from ...api.exceptions import AmbiguousTargetError, NoEligibleTargetError


def _choose_cloud_url(ctx, target):
    """Control-plane URL of the named target, or of the only one in use"""
    registry = ctx.obj.registry()
    if target:
        return registry.resolve_eligible(target).cloud_url

    urls = registry.cloud_urls()
    if not urls:
        raise NoEligibleTargetError("No CARS configurations with a CARS Cloud URL found.")
    if len(urls) == 1:
        return urls[0]
    if not ctx.obj.interactive:
        raise AmbiguousTargetError([r.name for r in registry.list_eligible()])
    return choose_cloud_url(urls)


@click.group()
def project():
    """Manage projects on a CARS Cloud

    TARGET is the name or index of a CARS configuration; its CARS Cloud
    URL and project ID are used. It may be omitted when only one CARS
    configuration exists.
    """
    pass


@project.command(name='ls')
@click.argument('target', required=False)
@click.pass_context
@require_manifest
@handle_errors()
def list_projects(ctx, target):
    """List all projects on a CARS Cloud"""
    cloud_url = _choose_cloud_url(ctx, target)
    projects = ctx.obj.remote.list_projects(cloud_url)
    format_string_list(projects, "Projects")


@project.command(name='add-admin')
@click.argument('identity_key')
@click.argument('target', required=False)
@click.pass_context
@require_manifest
@handle_errors()
def add_admin(ctx, identity_key, target):
    """Add an admin to the configuration's project"""
    resolved = ctx.obj.select_target(target)
    ctx.obj.remote.add_admin(resolved, identity_key)
    print_success("Admin added.")


@project.command(name='remove-admin')
@click.argument('identity_key')
@click.argument('target', required=False)
@click.pass_context
@require_manifest
@handle_errors()
def remove_admin(ctx, identity_key, target):
    """Remove an admin from the configuration's project"""
    resolved = ctx.obj.select_target(target)
    ctx.obj.remote.remove_admin(resolved, identity_key)
    print_success("Admin removed.")


@project.command(name='list-admins')
@click.argument('target', required=False)
@click.pass_context
@require_manifest
@handle_errors()
def list_admins(ctx, target):
    """List the admins of the configuration's project"""
    resolved = ctx.obj.select_target(target)
    admins = ctx.obj.remote.list_admins(resolved)
    format_string_list(admins, "Admins")


@project.command()
@click.argument('target', required=False)
@click.pass_context
@require_manifest
@handle_errors()
def logs(ctx, target):
    """Show the logs of the configuration's project"""
    resolved = ctx.obj.select_target(target)
    log = ctx.obj.remote.project_logs(resolved)
    format_log(log, f"Project {resolved.project_id}")


@project.command()
@click.argument('target', required=False)
@click.pass_context
@require_manifest
@handle_errors()
def releases(ctx, target):
    """List all releases of the configuration's project"""
    resolved = ctx.obj.select_target(target)
    release_ids = ctx.obj.remote.list_releases(resolved)
    format_string_list(release_ids, "Releases")
