from collections.abc import Callable
from dataclasses import dataclass
from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from nyargit.cli import create_app
from nyargit.repository import FakeGitClient


@dataclass(frozen=True, slots=True)
class CLIRun:
    """Outcome of one CLI invocation."""

    exit_code: int
    out: str
    err: str


type RunCLI = Callable[..., CLIRun]


@pytest.fixture
def fake_client(tmp_path: Path) -> FakeGitClient:
    return FakeGitClient(path=tmp_path / "work")


@pytest.fixture
def run_cli(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, fake_client: FakeGitClient
) -> RunCLI:
    """Run the CLI against the fake client and return exit code and output.

    Global options ``--repo`` and the test's working tree are prepended, and
    CLI logs go under a temporary NyarGit home.
    """
    monkeypatch.setenv("NYARGIT_HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    work = tmp_path / "work"
    work.mkdir(exist_ok=True)
    monkeypatch.chdir(work)

    def _run(*args: str) -> CLIRun:
        # Each command closes its client; reopen the fake between runs
        fake_client.closed = False
        out = Console(file=StringIO(), width=200)
        err = Console(file=StringIO(), width=200)
        app = create_app(
            console=out,
            error_console=err,
            exit_on_error=False,
            client_factory=lambda _ctx: fake_client,
        )
        try:
            app.meta(["--repo", str(work), *args])
        except SystemExit as e:
            code = e.code if isinstance(e.code, int) else 0 if e.code is None else 1
        else:
            code = 0
        return CLIRun(
            exit_code=code,
            out=out.file.getvalue(),  # pyright: ignore[reportAttributeAccessIssue]
            err=err.file.getvalue(),  # pyright: ignore[reportAttributeAccessIssue]
        )

    return _run
