"""Click base classes that carry worked shell examples.

A command declared with ``examples=`` shows them twice: as an
``Examples`` section closing its ``--help`` page, and alone through an
eager ``--examples`` flag. Subcommands of an :class:`ArchGroup` default
to :class:`ArchCommand`.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


def _show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    examples = getattr(ctx.command, "examples", None) or ""
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(textwrap.indent(examples, "  "))
    ctx.exit(0)


class _ExamplesMixin(click.Command):
    """Stores dedented ``examples`` and renders them after the options."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = textwrap.dedent(examples).strip("\n") if examples else None
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=_show_examples,
                    help="Show usage examples and exit.",
                )
            )

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        super().format_epilog(ctx, formatter)
        if not self.examples:
            return
        # write_text would rewrap the lines into one paragraph.
        with formatter.section("Examples"):
            for line in self.examples.splitlines():
                indent = " " * formatter.current_indent if line else ""
                formatter.write(f"{indent}{line}\n")


class ArchCommand(_ExamplesMixin):
    """Command accepting ``examples=``."""


class ArchGroup(_ExamplesMixin, click.Group):
    """Group accepting ``examples=``; its subcommands do too."""

    command_class = ArchCommand
