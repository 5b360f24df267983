"""Build command for producing release artifacts"""

import click

from ..decorators import handle_errors
from ..utils.output import console, format_build_result
from ...constants import EMOJI_BUILD
from ...services import BuildService


@click.command()
@click.argument('target', required=False)
@click.pass_context
@handle_errors(failure="Build failed during {stage}")
def build(ctx, target):
    """Build a local artifact for release

    TARGET is the name or index of a CARS configuration. It may be omitted
    when only one CARS configuration exists; with several, you are asked to
    pick one (or must name one when not running in a terminal).

    Examples:

        # Build the only CARS configuration
        cars build

        # Build by name or by index
        cars build production
        cars build 0
    """
    console.print(f"\n{EMOJI_BUILD}  Building artifact...\n")

    service = BuildService(
        ctx.obj.path_resolver,
        step_runner=ctx.obj.step_runner,
        chooser=ctx.obj.chooser
    )
    result = service.build(target)

    format_build_result(result)
