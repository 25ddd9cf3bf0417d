"""Shared test fixtures for NyarGit tests."""

import logging
import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import pytest
import structlog
from structlog.testing import CapturingLogger
from structlog.typing import FilteringBoundLogger

# Keep the developer's global git config (signing, hooks, default branch) out
# of the repositories the tests create.
_GIT_ENV = {
    **os.environ,
    "GIT_CONFIG_NOSYSTEM": "1",
    "GIT_CONFIG_GLOBAL": os.devnull,
    "GIT_AUTHOR_NAME": "Test User",
    "GIT_AUTHOR_EMAIL": "test@example.com",
    "GIT_COMMITTER_NAME": "Test User",
    "GIT_COMMITTER_EMAIL": "test@example.com",
}

_NYARGIT_PROCESS_VARS = (
    "NYARGIT_DEBUG",
    "NYARGIT_LOG_LEVEL",
    "NYARGIT_STRICT_CONFIG",
    "NYARGIT_AUTHOR_NAME",
    "NYARGIT_AUTHOR_EMAIL",
    "NYARGIT_HOME",
)


@pytest.fixture(autouse=True)
def _isolate_nyargit_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("NYARGIT_") and "__" in key:
            monkeypatch.delenv(key)
    for key in _NYARGIT_PROCESS_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@dataclass(frozen=True, slots=True)
class CapturedLog:
    """A logger wired to an in-memory capture of every call."""

    logger: FilteringBoundLogger
    capture: CapturingLogger

    def events(self) -> list[str]:
        return [str(call.kwargs.get("event")) for call in self.capture.calls]

    def find(self, event: str) -> dict[str, object]:
        """Return the fields of the first call with the given event name."""
        for call in self.capture.calls:
            if call.kwargs.get("event") == event:
                return dict(call.kwargs)
        msg = f"no {event!r} log entry in {self.events()}"
        raise AssertionError(msg)


@pytest.fixture
def captured_log() -> CapturedLog:
    capture = CapturingLogger()
    logger = structlog.wrap_logger(
        capture,
        processors=[],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
    )
    return CapturedLog(logger=logger, capture=capture)


# ---------------------------------------------------------------------------
# Real git repositories
# ---------------------------------------------------------------------------


def run_git(cwd: Path, *args: str) -> str:
    """Run a git command in the given directory and return stdout."""
    result = subprocess.run(  # noqa: S603 - Safe: running git with controlled args
        ["git", *args],  # noqa: S607
        cwd=str(cwd),
        capture_output=True,
        text=True,
        check=False,
        env=_GIT_ENV,
    )
    if result.returncode != 0:
        msg = f"git {' '.join(args)} failed: {result.stderr}"
        raise RuntimeError(msg)
    return result.stdout


@dataclass(frozen=True, slots=True)
class GitHelper:
    """Builds throwaway repositories under a base directory."""

    base: Path

    def run(self, repo: Path, *args: str) -> str:
        return run_git(repo, *args)

    def _configure(self, repo: Path) -> None:
        run_git(repo, "config", "user.name", "Test User")
        run_git(repo, "config", "user.email", "test@example.com")
        run_git(repo, "config", "commit.gpgsign", "false")

    def init(self, name: str = "work") -> Path:
        """Create a non-bare repository with ``main`` as the unborn branch."""
        path = self.base / name
        path.mkdir(parents=True)
        run_git(path, "init", "--quiet")
        run_git(path, "symbolic-ref", "HEAD", "refs/heads/main")
        self._configure(path)
        return path

    def init_bare(self, name: str = "remote.git") -> Path:
        path = self.base / name
        path.mkdir(parents=True)
        run_git(path, "init", "--bare", "--quiet")
        run_git(path, "symbolic-ref", "HEAD", "refs/heads/main")
        return path

    def clone(self, source: Path, name: str) -> Path:
        path = self.base / name
        run_git(self.base, "clone", "--quiet", str(source), str(path))
        self._configure(path)
        return path

    def write(self, repo: Path, files: Mapping[str, str]) -> None:
        for name, content in files.items():
            target = repo / name
            target.parent.mkdir(parents=True, exist_ok=True)
            _ = target.write_text(content)

    def commit(
        self, repo: Path, files: Mapping[str, str], message: str = "commit"
    ) -> str:
        """Write files, stage them and commit. Returns the new HEAD sha."""
        self.write(repo, files)
        run_git(repo, "add", "--", *files)
        run_git(repo, "commit", "--quiet", "-m", message)
        return run_git(repo, "rev-parse", "HEAD").strip()

    def head(self, repo: Path) -> str:
        return run_git(repo, "rev-parse", "HEAD").strip()

    def published(self, name: str = "work") -> tuple[Path, Path]:
        """Create a bare remote with one commit on main and a clone tracking it.

        Returns:
            Tuple of (bare remote path, working clone path).
        """
        remote = self.init_bare(f"{name}-remote.git")
        seed = self.init(f"{name}-seed")
        _ = self.commit(seed, {"README.md": "hello\n"}, "initial")
        run_git(seed, "remote", "add", "origin", str(remote))
        run_git(seed, "push", "--quiet", "-u", "origin", "main")
        return remote, self.clone(remote, name)

    def snapshot(self, repo: Path) -> dict[str, bytes]:
        """Map every working tree file (outside .git) to its content."""
        return {
            path.relative_to(repo).as_posix(): path.read_bytes()
            for path in sorted(repo.rglob("*"))
            if path.is_file() and ".git" not in path.relative_to(repo).parts
        }


@pytest.fixture
def git(tmp_path: Path) -> GitHelper:
    return GitHelper(base=tmp_path)
