# cars_cli/utils/file_utils.py
"""File operation utilities"""

import shutil
from pathlib import Path
from typing import Iterable, Optional


def format_size(size: int) -> str:
    """
    Format file size in human-readable format

    Args:
        size: Size in bytes

    Returns:
        Formatted size string
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0
    return f"{size:.2f} PB"


def copy_if_exists(src: Path, dest_dir: Path) -> Optional[Path]:
    """
    Copy a file into a directory if it exists

    Args:
        src: Source file
        dest_dir: Destination directory

    Returns:
        Destination path, or None if the source does not exist
    """
    if not src.is_file():
        return None
    dest = dest_dir / src.name
    shutil.copy2(src, dest)
    return dest


def copy_directory(src: Path, dest: Path, exclude: Iterable[str] = ()) -> None:
    """
    Recursively copy a directory tree, merging into ``dest`` if it exists

    Symlinks are copied as links.

    Args:
        src: Source directory
        dest: Destination directory
        exclude: Glob patterns of entry names to skip at any depth
    """
    ignore = shutil.ignore_patterns(*exclude) if exclude else None
    shutil.copytree(src, dest, symlinks=True, dirs_exist_ok=True, ignore=ignore)


def safe_remove(path: Path) -> bool:
    """
    Remove a file or directory tree if present

    Args:
        path: Path to remove

    Returns:
        True if nothing is left at the path
    """
    try:
        if path.is_symlink() or path.is_file():
            path.unlink()
        elif path.is_dir():
            shutil.rmtree(path)
        return True
    except OSError:
        return not path.exists()
