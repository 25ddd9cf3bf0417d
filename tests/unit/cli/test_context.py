from pathlib import Path

from nyargit.cli import CLIContext
from nyargit.cli._commands import default_client_factory
from nyargit.config import Config
from nyargit.repository import GitRepository


class TestCLIContext:
    def test_get_current_defaults(self) -> None:
        CLIContext.reset()

        ctx = CLIContext.get_current()

        assert ctx.verbose is False
        assert ctx.config.pull.remote == "origin"

    def test_set_and_reset(self, tmp_path: Path) -> None:
        ctx = CLIContext(config=Config.from_dict({}), repo_path=tmp_path)

        CLIContext.set_current(ctx)
        try:
            assert CLIContext.get_current() is ctx
        finally:
            CLIContext.reset()

        assert CLIContext.get_current() is not ctx


class TestDefaultClientFactory:
    def test_builds_gateway_for_repo_path(self, tmp_path: Path) -> None:
        config = Config.from_dict({"status": {"include_ignored": True}})
        ctx = CLIContext(config=config, repo_path=tmp_path)

        client = default_client_factory(ctx)

        assert isinstance(client, GitRepository)
        assert client.path == tmp_path
        assert client.is_open is False
        client.close()

    def test_create_client_uses_factory(self, tmp_path: Path) -> None:
        ctx = CLIContext(config=Config.from_dict({}), repo_path=tmp_path)

        client = ctx.create_client()

        assert client.path == tmp_path
        client.close()
