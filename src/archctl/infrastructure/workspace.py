"""Workspace — the immutable project context shared by all services.

Built once at startup from :class:`ArchSettings`. Holds the execution
harness (and its worker pool) for the lifetime of the process; graph
engines are created per request because the source tree changes
between calls.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from archctl.infrastructure.graph.engine import PackageGraphEngine
from archctl.infrastructure.harness import ExecutionHarness

if TYPE_CHECKING:
    from archctl.config.settings import ArchSettings
    from archctl.infrastructure.runner import Runner


class Workspace:
    """Project root, configuration, and long-lived infrastructure."""

    def __init__(self, settings: ArchSettings, *, runner: Runner | None = None) -> None:
        self.settings = settings
        self.harness = ExecutionHarness(settings.project_root, settings.runner, runner)

    @property
    def project_root(self) -> Path:
        return self.settings.project_root

    def new_graph_engine(self) -> PackageGraphEngine:
        """A fresh import graph engine over the current source tree."""
        return PackageGraphEngine(
            self.project_root,
            namespace_root=self.settings.encoder.namespace_root,
            exclude=(self.settings.runner.scratch_dir,),
            include_external=self.settings.graph.include_external,
        )

    def close(self) -> None:
        self.harness.close()

    def __enter__(self) -> Workspace:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
