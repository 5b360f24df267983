# cars_cli/cli/commands/__init__.py
"""CLI commands"""

from . import init
from . import build
from . import config
from . import project
from . import release
from . import artifact

__all__ = [
    "init",
    "build",
    "config",
    "project",
    "release",
    "artifact",
]
