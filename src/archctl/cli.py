"""Root CLI group for archctl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from archctl import __version__
from archctl.commands import register_commands
from archctl.commands._context import AppContext
from archctl.config.settings import ArchSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="archctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-C",
    "--project-root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Go project to analyze (default: discovered from archctl.toml, else CWD).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    project_root: Path | None,
) -> None:
    """archctl — architecture conformance checks for layered Go projects."""
    settings = ArchSettings.from_cli(
        config_path=config_path,
        project_root=project_root,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
    )
    app = AppContext(settings, config_override=config_path)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
