"""ToolResult — the universal tool contract.

INVARIANT: every tool call produces exactly one ToolResult.
The MCP transport sends only ``content`` and ``is_error``; the CLI
additionally renders ``op`` and ``data``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from archctl.domain.errors import ArchctlError


class ToolResult(BaseModel):
    """Outcome of one tool call.

    Attributes:
        content: Human-readable text returned to the caller.
        is_error: True when the tool itself failed (bad input, tooling
            fault). A detected violation is NOT an error.
        op: Name of the tool that produced the result.
        data: Structured extras (verdict, exit code, timing, counts).
    """

    model_config = {"frozen": True}

    content: str
    is_error: bool = False
    op: str = ""
    data: dict[str, Any] = Field(default_factory=dict)

    @property
    def passed(self) -> bool:
        """True unless the call errored or the verdict reported violations."""
        return not self.is_error and self.data.get("passed", True) is not False

    @classmethod
    def error(cls, message: str, *, op: str = "", data: dict[str, Any] | None = None) -> ToolResult:
        """Build an error result."""
        return cls(content=message, is_error=True, op=op, data=data or {})

    @classmethod
    def from_exception(cls, exc: ArchctlError, *, op: str = "") -> ToolResult:
        """Build an error result from a taxonomy exception."""
        return cls(content=exc.message, is_error=True, op=op, data={"error": exc.to_dict()})
