"""serve — start the MCP server on stdio."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from archctl.commands._base import ArchCommand

if TYPE_CHECKING:
    from archctl.commands._context import AppContext


@click.command(
    cls=ArchCommand,
    examples="""\
  # Serve the Go project in the current directory
  archctl serve

  # Serve another project
  archctl serve ~/src/shop-api

  # Debug logging as JSON on stderr
  archctl -v --log-json serve""",
)
@click.argument(
    "project_root",
    required=False,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.pass_obj
def serve(app: AppContext, project_root: Path | None) -> None:
    """Start the MCP server for PROJECT_ROOT (default: current project)."""
    from archctl.config.settings import ArchSettings
    from archctl.mcp.server import run_stdio

    settings = app.settings
    if project_root is not None:
        settings = ArchSettings.from_cli(
            config_path=app.config_override,
            project_root=project_root,
            verbose=settings.verbose,
            log_json=settings.log_json,
        )
    run_stdio(settings)
