"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, archctl.toml only contains overrides.
A standard Go project needs no config file at all.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field


class RunnerConfig(BaseModel):
    """[runner] section — how the target toolchain is invoked."""

    model_config = {"frozen": True}

    command: list[str] = Field(default_factory=lambda: ["go", "test", "-count=1", "-v"])
    timeout_seconds: float = Field(default=300.0, gt=0)
    max_workers: int = Field(default=0, ge=0)
    scratch_dir: str = "archctl_scratch"
    suite_path: str = "./test/architecture/..."

    @property
    def worker_count(self) -> int:
        """Effective pool size (``0`` means one worker per CPU)."""
        return self.max_workers or os.cpu_count() or 1


class EncoderConfig(BaseModel):
    """[encoder] section — shape of the generated Go test."""

    model_config = {"frozen": True}

    namespace_root: str = "internal"
    package_name: str = "archtest"
    archtest_module: str = "github.com/solrac97gr/goarchtest"
    assert_module: str = "github.com/stretchr/testify/assert"


class GraphConfig(BaseModel):
    """[graph] section."""

    model_config = {"frozen": True}

    output: str = "architecture-graph.dot"
    include_external: bool = False


class McpConfig(BaseModel):
    """[mcp] section."""

    model_config = {"frozen": True}

    server_name: str = "goarchtest-analyzer"
