"""Tests for config section models."""

from __future__ import annotations

import os

import pytest
from pydantic import ValidationError

from archctl.config.models import RunnerConfig


class TestRunnerConfig:
    def test_worker_count_defaults_to_cpus(self) -> None:
        assert RunnerConfig().worker_count == (os.cpu_count() or 1)

    def test_explicit_worker_count(self) -> None:
        assert RunnerConfig(max_workers=2).worker_count == 2

    @pytest.mark.parametrize("timeout", [0, -1])
    def test_timeout_must_be_positive(self, timeout: float) -> None:
        with pytest.raises(ValidationError):
            RunnerConfig(timeout_seconds=timeout)

    def test_negative_workers_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RunnerConfig(max_workers=-1)
