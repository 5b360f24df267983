"""Project context decorator for CLI commands"""

from functools import wraps
from typing import Callable

import click

from ..utils.output import console
from ...constants import APP_NAME, EMOJI_ERROR, MANIFEST_FILE


def require_manifest(func: Callable) -> Callable:
    """Decorator that ensures the project root holds a manifest

    The project root is the invocation directory or ``--project-root``;
    parent directories are not searched.

    Args:
        func: Command function to decorate

    Returns:
        Decorated function
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context()
        store = ctx.obj.manifest_store

        if not store.exists():
            console.print(
                f"{EMOJI_ERROR} No {MANIFEST_FILE} in {store.path.parent}.\n"
                f"Run '{APP_NAME} init' to create one, or use --project-root.",
                highlight=False
            )
            ctx.exit(1)

        return func(*args, **kwargs)

    return wrapper
