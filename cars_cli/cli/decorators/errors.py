"""Error reporting decorator for CLI commands"""

from functools import wraps
from typing import Callable, Optional

import click
from rich.markup import escape

from ..utils.output import console
from ...api.exceptions import CarsError, UserCancelledError
from ...constants import EMOJI_ERROR


def handle_errors(failure: Optional[str] = None) -> Callable:
    """Decorator that turns CarsError into a red message and exit code 1

    Args:
        failure: Message prefix; ``{stage}`` is replaced by the stage the
            error was raised in, e.g. ``"Build failed during {stage}"``

    Returns:
        Decorator function
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            ctx = click.get_current_context()
            try:
                return func(*args, **kwargs)

            except UserCancelledError as e:
                console.print(f"[yellow]{e.message}[/yellow]")
                ctx.exit(1)

            except CarsError as e:
                if failure:
                    stage = e.stage.value if e.stage else "unknown stage"
                    message = f"{failure.format(stage=stage)}: {e.message}"
                else:
                    message = e.message
                console.print(f"[red]{EMOJI_ERROR} {escape(message)}[/red]", highlight=False)

                debug = getattr(ctx.obj, 'debug', False)
                if debug:
                    if e.error_code:
                        console.print(f"[dim]Error code: {e.error_code}[/dim]")
                    console.print_exception()
                ctx.exit(1)

        return wrapper

    return decorator
