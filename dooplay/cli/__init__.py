"""
CLI Layer - Typer command line interface for DooPlay sites.
"""

from dooplay.cli.main import app, cli_main

__all__ = ["app", "cli_main"]
