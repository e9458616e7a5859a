"""Command group: run architecture constraint checks from the shell."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from archctl.commands._base import ArchGroup

if TYPE_CHECKING:
    from archctl.commands._context import AppContext


@click.group(
    cls=ArchGroup,
    examples="""\
  archctl check layer domain user
  archctl check isolation order user
  archctl check naming repository
  archctl check all
  archctl --json check layer application billing""",
)
def check() -> None:
    """Verify architecture constraints with go test."""


@check.command("layer")
@click.argument("layer")
@click.argument("domain")
@click.pass_obj
def layer_cmd(app: AppContext, layer: str, domain: str) -> None:
    """Check LAYER (domain, application, infrastructure) of DOMAIN for illegal imports."""
    app.emit(app.dispatch("check_layer_dependencies", layer=layer, domain=domain))


@check.command("isolation")
@click.argument("source")
@click.argument("target")
@click.pass_obj
def isolation_cmd(app: AppContext, source: str, target: str) -> None:
    """Check that domain SOURCE never imports domain TARGET."""
    app.emit(app.dispatch("check_domain_isolation", sourceDomain=source, targetDomain=target))


@check.command("naming")
@click.argument("pattern")
@click.pass_obj
def naming_cmd(app: AppContext, pattern: str) -> None:
    """Check type-name suffixes for PATTERN (repository, usecase, handler)."""
    app.emit(app.dispatch("check_naming_conventions", pattern=pattern))


@check.command("all")
@click.pass_obj
def all_cmd(app: AppContext) -> None:
    """Run the project's checked-in architecture test suite."""
    app.emit(app.dispatch("run_all_architecture_tests"))
