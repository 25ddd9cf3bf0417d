"""Unit tests for author resolution."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from nyargit.utils import AuthorInfo, get_author_info


def _completed(stdout: str) -> MagicMock:
    result = MagicMock()
    result.stdout = stdout
    return result


class TestAuthorInfo:
    def test_complete(self) -> None:
        assert AuthorInfo("Ada", "ada@example.com").complete is True
        assert AuthorInfo("Ada", None).complete is False
        assert AuthorInfo(None, None).complete is False


class TestGetAuthorInfo:
    def test_env_vars_win(
        self, monkeypatch: pytest.MonkeyPatch, mocker: MockerFixture
    ) -> None:
        run = mocker.patch("nyargit.utils._author.subprocess.run")
        monkeypatch.setenv("NYARGIT_AUTHOR_NAME", "Env Ada")
        monkeypatch.setenv("NYARGIT_AUTHOR_EMAIL", "env@example.com")

        info = get_author_info()

        assert info == AuthorInfo("Env Ada", "env@example.com")
        run.assert_not_called()

    def test_reads_git_config_in_cwd(self, mocker: MockerFixture) -> None:
        run = mocker.patch(
            "nyargit.utils._author.subprocess.run",
            side_effect=[_completed("Git Ada\n"), _completed("git@example.com\n")],
        )

        info = get_author_info(cwd=Path("/work"))

        assert info == AuthorInfo("Git Ada", "git@example.com")
        assert run.call_args_list[0].args[0] == ["git", "config", "--get", "user.name"]
        assert run.call_args_list[0].kwargs["cwd"] == Path("/work")

    def test_unset_config_gives_none(self, mocker: MockerFixture) -> None:
        _ = mocker.patch(
            "nyargit.utils._author.subprocess.run",
            side_effect=subprocess.CalledProcessError(1, "git"),
        )

        assert get_author_info() == AuthorInfo(None, None)

    def test_missing_git_gives_none(self, mocker: MockerFixture) -> None:
        _ = mocker.patch(
            "nyargit.utils._author.subprocess.run", side_effect=FileNotFoundError
        )

        assert get_author_info() == AuthorInfo(None, None)

    def test_blank_output_gives_none(self, mocker: MockerFixture) -> None:
        _ = mocker.patch(
            "nyargit.utils._author.subprocess.run", return_value=_completed("  \n")
        )

        assert get_author_info().name is None
