"""Human/JSON rendering of ToolResult.

Human mode prints the verdict text exactly as an MCP client would see
it (first line styled), followed by timing details with ``--verbose``.
JSON mode dumps the whole ToolResult.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from archctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from archctl.services.result import ToolResult


def format_result(
    result: ToolResult,
    *,
    json_output: bool = False,
    verbose: bool = False,
) -> str:
    """Format a ToolResult for display."""
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    head, _, rest = result.content.partition("\n")
    if result.is_error:
        style = "arch.error"
        head = f"ERROR: {result.op} — {head}" if result.op else f"ERROR: {head}"
    else:
        style = "arch.pass" if result.passed else "arch.fail"
    console.print(f"[{style}]{escape(head)}[/{style}]", soft_wrap=True)
    if rest:
        # Toolchain output is printed verbatim, never interpreted as markup.
        console.print(rest, markup=False, emoji=False, soft_wrap=True)
    if verbose and result.data:
        for key, value in result.data.items():
            console.print(f"[arch.key]  {escape(key)}: {escape(str(value))}[/arch.key]")
    return get_output(console).rstrip("\n")
