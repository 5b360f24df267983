"""Artifact management commands"""

import click

from ..decorators import handle_errors
from ..utils.output import format_artifact_list, print_success
from ...services import ArtifactService


@click.group()
def artifact():
    """Manage local artifacts

    Artifacts are the cars_artifact_<timestamp>.tgz files 'cars build'
    writes to the project root.
    """
    pass


@artifact.command(name='ls')
@click.pass_context
@handle_errors()
def list_artifacts(ctx):
    """List all local artifacts, oldest first"""
    format_artifact_list(ArtifactService(ctx.obj.path_resolver).list())


@artifact.command()
@click.argument('name')
@click.pass_context
@handle_errors()
def delete(ctx, name):
    """Delete a local artifact

    NAME must be the filename of a listed artifact.
    """
    ArtifactService(ctx.obj.path_resolver).delete(name)
    print_success(f'Artifact "{name}" deleted.')
