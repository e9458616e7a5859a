"""ExecutionHarness — run generated verification code through ``go test``.

Each call gets its own scratch directory ``<scratch_dir>/run_<uuid>/``
inside the project (Go only compiles tests that belong to a package
of the module). The directory is removed on every exit path.

Invocations run on a bounded thread pool: each one triggers a build of
the target project, so concurrency is capped at ``RunnerConfig.worker_count``.
"""

from __future__ import annotations

import os
import shutil
import threading
import time
from collections.abc import Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

import structlog

from archctl.config.models import RunnerConfig
from archctl.domain.errors import ArtifactIOError, ExecutionError
from archctl.infrastructure.codegen import PROJECT_PATH_ENV
from archctl.infrastructure.runner import Runner, SubprocessRunner

log = structlog.get_logger(__name__)

ARTIFACT_FILENAME = "archctl_test.go"
NO_TEST_NEEDED = "No test needed"


@dataclass(frozen=True)
class VerificationArtifact:
    """Generated test source and where it was written for this invocation."""

    source_text: str
    target_path: Path


@dataclass(frozen=True)
class ExecutionResult:
    """Raw outcome of one toolchain invocation."""

    exit_code: int
    output: str
    duration_ms: int
    skipped: bool = False

    @property
    def passed(self) -> bool:
        return self.exit_code == 0


class ExecutionHarness:
    """Writes, runs, and cleans up verification artifacts.

    Parameters:
        project_root: Go module root; the toolchain runs here.
        config: Command, timeout, scratch location, and pool size.
        runner: Process runner (defaults to :class:`SubprocessRunner`).
    """

    def __init__(
        self,
        project_root: Path,
        config: RunnerConfig,
        runner: Runner | None = None,
    ) -> None:
        self._root = project_root
        self._config = config
        self._runner = runner or SubprocessRunner()
        self._pool = ThreadPoolExecutor(
            max_workers=config.worker_count, thread_name_prefix="archctl-run"
        )
        self._lock = threading.Lock()
        self._active = 0

    @property
    def scratch_root(self) -> Path:
        return self._root / self._config.scratch_dir

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, source_text: str) -> ExecutionResult:
        """Run one generated test file.

        Empty source short-circuits to a synthetic pass without touching
        the filesystem or spawning a process.
        """
        if not source_text:
            log.debug("harness.skipped", reason="empty source")
            return ExecutionResult(exit_code=0, output=NO_TEST_NEEDED, duration_ms=0, skipped=True)
        return self._pool.submit(self._run_artifact, source_text).result()

    def run_all(self) -> ExecutionResult:
        """Run the project's checked-in architecture suite (no artifact)."""
        argv = [*self._config.command, self._config.suite_path]
        return self._pool.submit(self._invoke, argv).result()

    def close(self) -> None:
        """Wait for in-flight runs and release the worker pool."""
        self._pool.shutdown(wait=True)

    # ------------------------------------------------------------------
    # Artifact lifecycle
    # ------------------------------------------------------------------

    def _run_artifact(self, source_text: str) -> ExecutionResult:
        with self._artifact(source_text) as artifact:
            log.debug(
                "harness.artifact",
                path=str(artifact.target_path),
                size=len(artifact.source_text),
            )
            package_dir = artifact.target_path.parent.relative_to(self._root).as_posix()
            return self._invoke([*self._config.command, f"./{package_dir}"])

    @contextmanager
    def _artifact(self, source_text: str) -> Iterator[VerificationArtifact]:
        run_dir = self.scratch_root / f"run_{uuid4().hex}"
        target = run_dir / ARTIFACT_FILENAME
        with self._lock:
            self._active += 1
        try:
            try:
                run_dir.mkdir(parents=True)
                target.write_text(source_text, encoding="utf-8")
            except OSError as exc:
                msg = f"Could not write verification artifact {target}: {exc}"
                raise ArtifactIOError(msg, detail={"path": str(target)}) from exc
            yield VerificationArtifact(source_text=source_text, target_path=target)
        finally:
            self._cleanup(run_dir)

    def _cleanup(self, run_dir: Path) -> None:
        """Remove *run_dir*; failures are logged, never raised."""
        try:
            shutil.rmtree(run_dir)
        except FileNotFoundError:
            pass
        except OSError as exc:
            log.warning("harness.cleanup_failed", path=str(run_dir), error=str(exc))

        with self._lock:
            self._active -= 1
            if self._active == 0:
                # Only succeeds when empty; leftovers from other tools stay.
                try:
                    self.scratch_root.rmdir()
                except OSError:
                    pass

    # ------------------------------------------------------------------
    # Process invocation
    # ------------------------------------------------------------------

    def _invoke(self, argv: Sequence[str]) -> ExecutionResult:
        env = {**os.environ, PROJECT_PATH_ENV: str(self._root)}
        log.info("harness.run", argv=list(argv), cwd=str(self._root))
        start = time.perf_counter()
        try:
            outcome = self._runner.run(
                argv,
                cwd=self._root,
                env=env,
                timeout=self._config.timeout_seconds,
            )
        except ExecutionError as exc:
            log.warning("harness.failed", argv=list(argv), code=exc.code, error=exc.message)
            raise
        duration_ms = int((time.perf_counter() - start) * 1000)
        log.info("harness.complete", exit_code=outcome.returncode, duration_ms=duration_ms)
        return ExecutionResult(
            exit_code=outcome.returncode,
            output=outcome.output,
            duration_ms=duration_ms,
        )
