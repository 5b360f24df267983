"""Command line interface for cars-cli"""

from .main import cli, main

__all__ = ["cli", "main"]
