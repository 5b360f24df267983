"""Utility functions for cars-cli"""

from .file_utils import (
    copy_directory,
    copy_if_exists,
    format_size,
    safe_remove,
)

__all__ = [
    "copy_directory",
    "copy_if_exists",
    "format_size",
    "safe_remove",
]
