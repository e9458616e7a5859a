"""Tests for SubprocessRunner (real child processes)."""

from __future__ import annotations

import os
import sys
import time
from pathlib import Path

import pytest

from archctl.domain.errors import ExecutionError, ExecutionTimeout
from archctl.infrastructure.runner import SubprocessRunner

SPAWN_AND_WAIT = """\
import subprocess, sys, time
child = subprocess.Popen([sys.executable, "-c", "import time; time.sleep(60)"])
with open(sys.argv[1], "w") as f:
    f.write(str(child.pid))
time.sleep(60)
"""


def _alive(pid: int) -> bool:
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    stat = Path(f"/proc/{pid}/stat")
    try:
        # Killed but not yet reaped by init.
        return stat.read_text().split(")")[-1].split()[0] != "Z"
    except OSError:
        return True


def _wait_dead(pid: int, deadline: float = 5.0) -> bool:
    end = time.monotonic() + deadline
    while time.monotonic() < end:
        if not _alive(pid):
            return True
        time.sleep(0.05)
    return False


class TestSubprocessRunner:
    def test_captures_exit_code_and_output(self, tmp_path: Path) -> None:
        outcome = SubprocessRunner().run(
            [sys.executable, "-c", "print('hello'); raise SystemExit(3)"], cwd=tmp_path
        )
        assert outcome.returncode == 3
        assert "hello" in outcome.output

    def test_merges_stderr_into_output(self, tmp_path: Path) -> None:
        outcome = SubprocessRunner().run(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom\\n')"], cwd=tmp_path
        )
        assert outcome.returncode == 0
        assert "boom" in outcome.output

    def test_runs_in_cwd_with_env(self, tmp_path: Path) -> None:
        outcome = SubprocessRunner().run(
            [sys.executable, "-c", "import os; print(os.getcwd()); print(os.environ['ARCH_X'])"],
            cwd=tmp_path,
            env={"ARCH_X": "42", "PATH": ""},
        )
        lines = outcome.output.splitlines()
        assert Path(lines[0]).resolve() == tmp_path.resolve()
        assert lines[1] == "42"

    def test_timeout_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ExecutionTimeout) as exc_info:
            SubprocessRunner().run(
                [sys.executable, "-c", "import time; time.sleep(30)"],
                cwd=tmp_path,
                timeout=0.5,
            )
        assert exc_info.value.code == "EXECUTION_TIMEOUT"
        assert exc_info.value.message == "Test run timed out after 0.5s"

    def test_missing_executable_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ExecutionError, match="Error running test"):
            SubprocessRunner().run(["archctl-no-such-binary-xyz"], cwd=tmp_path)

    @pytest.mark.skipif(sys.platform == "win32", reason="process groups are POSIX-only")
    def test_timeout_kills_grandchildren(self, tmp_path: Path) -> None:
        pid_file = tmp_path / "child.pid"
        with pytest.raises(ExecutionTimeout):
            SubprocessRunner().run(
                [sys.executable, "-c", SPAWN_AND_WAIT, str(pid_file)],
                cwd=tmp_path,
                timeout=2.0,
            )
        child_pid = int(pid_file.read_text())
        assert _wait_dead(child_pid)

    def test_output_of_short_lived_grandchild_kept(self, tmp_path: Path) -> None:
        script = (
            "import subprocess, sys; "
            "subprocess.run([sys.executable, '-c', 'print(\"from child\")'], check=True)"
        )
        outcome = SubprocessRunner().run([sys.executable, "-c", script], cwd=tmp_path, timeout=30)
        assert outcome.returncode == 0
        assert "from child" in outcome.output
