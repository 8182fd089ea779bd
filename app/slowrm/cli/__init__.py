"""CLI package for slowrm.

This package contains the Typer application.
"""

from slowrm.cli.main import app

__all__ = ["app"]
