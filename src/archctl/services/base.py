"""BaseService — abstract foundation for archctl services.

Every service receives a :class:`Workspace` at construction time. The
workspace carries the project root and configuration fixed at startup,
plus the execution harness. Services never read ambient global state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from archctl.infrastructure.workspace import Workspace


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class GraphService(BaseService):
            def generate(self, domain: str | None = None) -> ToolResult:
                engine = self._workspace.new_graph_engine()
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace
