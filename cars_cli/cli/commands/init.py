"""Initialize command for creating a deployment-info.json"""

import click

from ..decorators import handle_errors
from ..utils.output import console
from ...constants import APP_NAME, EMOJI_SUCCESS, EMOJI_WARNING, MANIFEST_FILE


@click.command()
@click.option(
    '--force', '-f',
    is_flag=True,
    help=f'Overwrite an existing {MANIFEST_FILE}'
)
@click.pass_context
@handle_errors()
def init(ctx, force):
    """Create a minimal deployment-info.json in the project root

    Examples:
        cars init
        cars --project-root ./my-app init
    """
    store = ctx.obj.manifest_store

    if store.exists() and not force:
        console.print(
            f"{EMOJI_WARNING} {MANIFEST_FILE} already exists in {store.path.parent}",
            highlight=False
        )
        console.print("Use --force to overwrite it")
        ctx.exit(0)

    store.create_default()

    console.print(f"\n{EMOJI_SUCCESS} Created {store.path}", highlight=False)
    console.print(f"\n{EMOJI_SUCCESS} Next steps:")
    console.print(f"1. {APP_NAME} config add      # add a CARS configuration")
    console.print(f"2. {APP_NAME} build           # build an artifact")
    console.print(f"3. {APP_NAME} release now     # release it")
