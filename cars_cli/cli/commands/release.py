"""Release management commands"""

from pathlib import Path

import click

from ..decorators import handle_errors, require_manifest
from ..utils.interactive import choose_release
from ..utils.output import console, format_log, print_info, print_success
from ...api.exceptions import ConfigError
from ...constants import EMOJI_ROCKET
from ...services import ArtifactService


@click.group()
def release():
    """Manage releases on a CARS Cloud

    A release is created on the configuration's project and receives one
    artifact built with 'cars build'.
    """
    pass


@release.command(name='get-upload-url')
@click.argument('target', required=False)
@click.pass_context
@require_manifest
@handle_errors()
def get_upload_url(ctx, target):
    """Create a new release and print its upload URL"""
    resolved = ctx.obj.select_target(target)
    info = ctx.obj.remote.create_release(resolved)

    print_success(f"Release created. Release ID: {info['deploymentId']}")
    console.print(f"Upload URL: {info['url']}", highlight=False, soft_wrap=True)


@release.command(name='upload-files')
@click.argument('upload_url')
@click.argument('artifact_path', type=click.Path(path_type=Path))
@click.pass_context
@handle_errors()
def upload_files(ctx, upload_url, artifact_path):
    """Upload a built artifact to an upload URL

    Examples:
        cars release upload-files https://... cars_artifact_1700000000000.tgz
    """
    with console.status("Uploading artifact..."):
        ctx.obj.remote.upload(upload_url, artifact_path)
    print_success("Artifact uploaded.")


@release.command()
@click.argument('release_id', required=False)
@click.argument('target', required=False)
@click.pass_context
@require_manifest
@handle_errors()
def logs(ctx, release_id, target):
    """Show the logs of a release

    Without RELEASE_ID, the project's releases are listed to choose from.
    """
    resolved = ctx.obj.select_target(target)

    if not release_id:
        release_ids = ctx.obj.remote.list_releases(resolved)
        if not release_ids:
            print_info("No releases found for this project.")
            return
        if not ctx.obj.interactive:
            raise ConfigError("RELEASE_ID is required when not running interactively.")
        release_id = choose_release(release_ids)

    log = ctx.obj.remote.release_logs(resolved, release_id)
    format_log(log, f"Release {release_id}")


@release.command()
@click.argument('target', required=False)
@click.pass_context
@require_manifest
@handle_errors()
def now(ctx, target):
    """Release the latest artifact to the chosen configuration

    Examples:
        cars build production && cars release now production
    """
    resolved = ctx.obj.select_target(target)
    artifact = ArtifactService(ctx.obj.path_resolver).latest()

    console.print(f"\n{EMOJI_ROCKET} Releasing {artifact.name} to \"{resolved.name}\"...\n",
                  highlight=False)
    with console.status("Uploading artifact..."):
        info = ctx.obj.remote.release_now(resolved, artifact)

    print_success(f"Artifact uploaded. Release ID: {info['deploymentId']}")
