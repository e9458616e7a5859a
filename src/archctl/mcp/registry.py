"""ToolRegistry — parameter validation and routing for tool calls.

Transport-agnostic: the MCP server and the CLI both build a
:class:`ToolRequest` and call :meth:`ToolRegistry.dispatch`, so every
entry point applies the same validation and yields the same messages.

INVARIANT: ``dispatch`` returns exactly one ToolResult per request and
never raises.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field

from archctl.domain.errors import ArchctlError, ParameterError
from archctl.services.result import ToolResult

logger = logging.getLogger(__name__)

ToolHandler = Callable[..., ToolResult]


class ToolRequest(BaseModel):
    """One inbound tool call."""

    model_config = {"frozen": True}

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


@dataclass(frozen=True)
class ParameterSchema:
    """Declared string parameter of a tool.

    Attributes:
        name: Argument name as sent by the client.
        required: Reject the call when the argument is absent or empty.
        allowed: Closed set of accepted values, if any.
        description: Shown to clients in the tool listing.
        target: Keyword the handler receives (defaults to ``name``).
    """

    name: str
    required: bool = True
    allowed: tuple[str, ...] | None = None
    description: str = ""
    target: str | None = None

    @property
    def keyword(self) -> str:
        return self.target or self.name

    def validate(self, arguments: Mapping[str, Any]) -> str | None:
        """Return the validated value (None if optional and absent)."""
        value = arguments.get(self.name)
        if value is None or value == "":
            if self.required:
                msg = f"{self.name} parameter is required"
                raise ParameterError(msg, detail={"parameter": self.name})
            return None
        if not isinstance(value, str):
            msg = f"{self.name} must be a string"
            raise ParameterError(msg, detail={"parameter": self.name})
        if self.allowed is not None and value not in self.allowed:
            msg = f"{self.name} must be one of {{{', '.join(self.allowed)}}}"
            raise ParameterError(
                msg, detail={"parameter": self.name, "allowed": list(self.allowed)}
            )
        return value

    def json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": "string"}
        if self.description:
            schema["description"] = self.description
        if self.allowed is not None:
            schema["enum"] = list(self.allowed)
        return schema


@dataclass(frozen=True)
class ToolSchema:
    """Description and parameters of one tool."""

    description: str
    parameters: tuple[ParameterSchema, ...] = ()

    def input_schema(self) -> dict[str, Any]:
        """JSON Schema advertised to MCP clients."""
        return {
            "type": "object",
            "properties": {p.name: p.json_schema() for p in self.parameters},
            "required": [p.name for p in self.parameters if p.required],
        }


@dataclass(frozen=True)
class _Entry:
    schema: ToolSchema
    handler: ToolHandler


class ToolRegistry:
    """Name → (schema, handler) table with validating dispatch."""

    def __init__(self) -> None:
        self._tools: dict[str, _Entry] = {}

    def register(self, name: str, schema: ToolSchema, handler: ToolHandler) -> None:
        if name in self._tools:
            msg = f"Tool already registered: {name}"
            raise ValueError(msg)
        self._tools[name] = _Entry(schema, handler)

    def tools(self) -> list[tuple[str, ToolSchema]]:
        """Registered tools in registration order."""
        return [(name, entry.schema) for name, entry in self._tools.items()]

    def dispatch(self, request: ToolRequest) -> ToolResult:
        """Validate *request* and run its handler.

        Validation stops at the first failing parameter. Handler failures
        become error results; nothing propagates to the transport.
        """
        entry = self._tools.get(request.name)
        if entry is None:
            return ToolResult.error(f"unknown tool: {request.name}", op=request.name)

        try:
            kwargs = {
                p.keyword: p.validate(request.arguments) for p in entry.schema.parameters
            }
        except ParameterError as exc:
            logger.debug("Rejected %s: %s", request.name, exc.message)
            return ToolResult.from_exception(exc, op=request.name)

        try:
            return entry.handler(**kwargs)
        except ArchctlError as exc:
            logger.info("Tool %s failed: %s", request.name, exc.message)
            return ToolResult.from_exception(exc, op=request.name)
        except Exception as exc:
            logger.exception("Unexpected failure in tool %s", request.name)
            return ToolResult.error(f"internal error: {exc}", op=request.name)
