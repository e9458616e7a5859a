"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Workspace initialization, dispatch
through the same tool registry the MCP server uses, and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from archctl.output.formatters import format_result

if TYPE_CHECKING:
    from archctl.config.settings import ArchSettings
    from archctl.infrastructure.workspace import Workspace
    from archctl.services.result import ToolResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The workspace is lazily initialized on first use so ``--help`` and
    ``--version`` never start a worker pool.
    """

    def __init__(self, settings: ArchSettings, *, config_override: str | None = None) -> None:
        self.settings = settings
        self.config_override = config_override
        self._workspace: Workspace | None = None

        from archctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def workspace(self) -> Workspace:
        """The workspace instance (created lazily on first access)."""
        if self._workspace is None:
            from archctl.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings)
        return self._workspace

    def dispatch(self, tool: str, **arguments: Any) -> ToolResult:
        """Run *tool* through the registry, exactly as an MCP call would."""
        from archctl.mcp.registry import ToolRequest
        from archctl.mcp.tools import build_registry

        registry = build_registry(self.workspace)
        return registry.dispatch(ToolRequest(name=tool, arguments=arguments))

    def emit(self, result: ToolResult) -> None:
        """Format and output a ToolResult with correct exit semantics.

        * Pass: stdout, exit 0.
        * Violation: stdout (it is the report), exit 1.
        * Error: stderr, exit 1.
        """
        output = format_result(
            result,
            json_output=self.settings.json_output,
            verbose=self.settings.verbose,
        )
        click.echo(output, err=result.is_error)
        if not result.passed:
            raise SystemExit(1)

    def close(self) -> None:
        if self._workspace is not None:
            self._workspace.close()
            self._workspace = None
