"""
Weld CSV importer package.

Exposes the CSV contract, adapter and pipelines, and registers the
``flask welds`` CLI group on the application.
"""

from __future__ import annotations

from flask import Flask

from .cli import welds_cli

__all__ = ["init_importer", "welds_cli"]


def init_importer(app: Flask) -> None:
    """Register importer CLI commands on ``app``."""
    # Avoid duplicate registrations when running tests
    if welds_cli.name in app.cli.commands:
        app.cli.commands.pop(welds_cli.name)
    app.cli.add_command(welds_cli)
