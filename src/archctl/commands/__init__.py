"""Subcommand modules for archctl.

Provides register_commands() which uses deferred imports to keep
``archctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the check group and the standalone commands on the root CLI group."""
    from archctl.commands.check import check
    from archctl.commands.graph import graph
    from archctl.commands.serve import serve

    cli.add_command(check)
    cli.add_command(graph)
    cli.add_command(serve)
