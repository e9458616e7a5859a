"""Shared pytest fixtures for archctl tests."""

from __future__ import annotations

from collections.abc import Generator, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from click.testing import CliRunner

from archctl.config.settings import ArchSettings
from archctl.infrastructure.runner import ProcessOutcome
from archctl.infrastructure.workspace import Workspace

# A small two-context Go module. ``order/domain`` breaks both rules:
# it imports its own infrastructure layer and the ``user`` context.
GO_PROJECT: dict[str, str] = {
    "go.mod": "module example.com/shop\n\ngo 1.22\n",
    "cmd/api/main.go": """\
package main

import (
	"fmt"

	userhttp "example.com/shop/internal/user/infrastructure/http"
)

func main() {
	fmt.Println(userhttp.UserHandler{})
}
""",
    "internal/user/domain/user.go": """\
// Package domain holds the user aggregate.
package domain

type User struct {
	ID string
}
""",
    "internal/user/domain/repository.go": """\
package domain

type UserRepository interface {
	Find(id string) (*User, error)
}
""",
    "internal/user/domain/user_test.go": """\
package domain

import "testing"

func TestUser(t *testing.T) {}
""",
    "internal/user/application/usecase/create.go": """\
package usecase

import (
	"context"

	"example.com/shop/internal/user/domain"
)

type CreateUserUseCase struct {
	repo domain.UserRepository
}

func (u CreateUserUseCase) Run(ctx context.Context) error { return nil }
""",
    "internal/user/infrastructure/http/handler.go": """\
package http

import (
	"net/http"

	"example.com/shop/internal/user/application/usecase"
)

type UserHandler struct {
	create usecase.CreateUserUseCase
}

func (h UserHandler) ServeHTTP(w http.ResponseWriter, r *http.Request) {}
""",
    "internal/order/domain/order.go": """\
package domain

import (
	"example.com/shop/internal/order/infrastructure/db"
	user "example.com/shop/internal/user/domain"
)

type Order struct {
	Buyer user.User
	store db.Store
}
""",
    "internal/order/infrastructure/db/store.go": """\
package db

type Store struct{}
""",
}


@dataclass
class RunnerCall:
    """One recorded :meth:`FakeRunner.run` invocation."""

    argv: list[str]
    cwd: Path
    env: dict[str, str]
    timeout: float | None
    artifact: str | None


@dataclass
class FakeRunner:
    """Runner double returning a canned outcome.

    When the last argument names a scratch package directory, the Go
    source found there at call time is recorded on the call so tests can
    check what the harness wrote before it was cleaned up.
    """

    returncode: int = 0
    output: str = "PASS\nok  \texample.com/shop/archctl_scratch\t0.01s\n"
    error: Exception | None = None
    calls: list[RunnerCall] = field(default_factory=list)

    def run(
        self,
        argv: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> ProcessOutcome:
        artifact: str | None = None
        target = argv[-1] if argv else ""
        if target.startswith("./") and not target.endswith("..."):
            files = sorted((cwd / target[2:]).glob("*.go"))
            if files:
                artifact = files[0].read_text(encoding="utf-8")
        self.calls.append(
            RunnerCall(
                argv=list(argv),
                cwd=cwd,
                env=dict(env or {}),
                timeout=timeout,
                artifact=artifact,
            )
        )
        if self.error is not None:
            raise self.error
        return ProcessOutcome(returncode=self.returncode, output=self.output)


def write_tree(root: Path, files: Mapping[str, str]) -> Path:
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's ARCHCTL_* environment out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("ARCHCTL_"):
            monkeypatch.delenv(key)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def go_project(tmp_path: Path) -> Path:
    """Temporary Go module laid out as ``internal/<domain>/<layer>``."""
    return write_tree(tmp_path / "shop", GO_PROJECT)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def settings(go_project: Path) -> ArchSettings:
    return ArchSettings.from_cli(project_root=go_project)


@pytest.fixture
def workspace(settings: ArchSettings, fake_runner: FakeRunner) -> Generator[Workspace]:
    """Workspace over the fixture project whose harness uses ``fake_runner``."""
    ws = Workspace(settings, runner=fake_runner)
    try:
        yield ws
    finally:
        ws.close()


@pytest.fixture
def patched_runner(fake_runner: FakeRunner, monkeypatch: pytest.MonkeyPatch) -> FakeRunner:
    """Make every harness built during the test (e.g. by the CLI) use ``fake_runner``."""
    monkeypatch.setattr("archctl.infrastructure.harness.SubprocessRunner", lambda: fake_runner)
    return fake_runner
