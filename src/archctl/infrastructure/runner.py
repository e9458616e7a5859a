"""Process runner capability.

The harness never calls :mod:`subprocess` directly; it goes through a
:class:`Runner`. Tests inject a double that returns canned outcomes.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from archctl.domain.errors import ExecutionError, ExecutionTimeout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessOutcome:
    """Exit status and merged stdout+stderr of a finished process."""

    returncode: int
    output: str


class Runner(Protocol):
    """Anything that can run a command to completion."""

    def run(
        self,
        argv: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> ProcessOutcome:
        """Run *argv* in *cwd*.

        Raises:
            ExecutionTimeout: the process outlived *timeout* and was killed.
            ExecutionError: the process could not be started.
        """
        ...


def _kill_process_group(proc: subprocess.Popen[str]) -> None:
    """SIGKILL *proc* and everything it spawned.

    ``go test`` compiles and then execs the test binary as a child, so
    killing only ``proc`` would leave the binary running.
    """
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass
    except OSError as exc:
        logger.warning("Could not kill process group %d: %s", proc.pid, exc)
        proc.kill()
    proc.wait()


class SubprocessRunner:
    """Runner backed by :class:`subprocess.Popen` with stderr folded into stdout.

    Each command runs in its own session, so a timeout terminates the
    whole process tree rather than just the direct child.
    """

    def run(
        self,
        argv: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> ProcessOutcome:
        try:
            proc = subprocess.Popen(
                list(argv),
                cwd=cwd,
                env=dict(env) if env is not None else None,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                start_new_session=True,
            )
        except OSError as exc:
            logger.debug("Failed to start %s: %s", argv[0] if argv else "<empty>", exc)
            msg = f"Error running test: {exc}"
            raise ExecutionError(msg, detail={"argv": list(argv)}) from exc

        with proc:
            try:
                output, _ = proc.communicate(timeout=timeout)
            except subprocess.TimeoutExpired as exc:
                _kill_process_group(proc)
                raise ExecutionTimeout(timeout or 0) from exc
            except BaseException:
                _kill_process_group(proc)
                raise
        return ProcessOutcome(returncode=proc.returncode, output=output or "")
