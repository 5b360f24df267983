# cars_cli/cli/decorators/__init__.py
"""CLI decorators"""

from .errors import handle_errors
from .project import require_manifest

__all__ = [
    'handle_errors',
    'require_manifest',
]
