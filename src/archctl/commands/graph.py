"""Command: export the package dependency graph."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from archctl.commands._base import ArchCommand

if TYPE_CHECKING:
    from archctl.commands._context import AppContext


@click.command(
    cls=ArchCommand,
    examples="""\
  archctl graph
  archctl graph --domain user
  dot -Tsvg architecture-graph.dot > architecture.svg""",
)
@click.option("--domain", default=None, help="Only this bounded context and its direct imports.")
@click.pass_obj
def graph(app: AppContext, domain: str | None) -> None:
    """Write the package import graph as Graphviz DOT."""
    app.emit(app.dispatch("generate_dependency_graph", domain=domain))
