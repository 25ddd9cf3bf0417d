# pyright: reportAny=false
from pathlib import Path

import pytest

from nyargit.config import Config, ConfigSourceName, LogFormat, LogLevel
from nyargit.exceptions import ConfigValidationError
from nyargit.repository import FailureCategory, FastForwardPolicy, MergeStrategy


@pytest.fixture
def user_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    return home / "nyargit" / "config.toml"


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    root = tmp_path / "work"
    (root / ".git").mkdir(parents=True)
    return root


class TestFromDict:
    def test_empty_dict_gives_defaults(self) -> None:
        config = Config.from_dict({})

        assert config.logging.level is LogLevel.INFO
        assert config.logging.format is LogFormat.JSON
        assert config.pull.remote == "origin"
        assert config.pull.fast_forward is FastForwardPolicy.ALLOW
        assert config.pull.strategy is MergeStrategy.MERGE
        assert config.status.include_ignored is False
        assert config.author.name == ""
        assert dict(config.messages) == {}

    def test_sections_are_parsed(self) -> None:
        config = Config.from_dict(
            {
                "author": {"name": "Ada", "email": "ada@example.com"},
                "pull": {"fast_forward": "only", "strategy": "stage-only"},
                "status": {"include_ignored": True},
            }
        )

        assert config.author.email == "ada@example.com"
        assert config.pull.fast_forward is FastForwardPolicy.ONLY
        assert config.pull.strategy is MergeStrategy.STAGE_ONLY
        assert config.status.include_ignored is True

    def test_invalid_value_raises(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            _ = Config.from_dict({"pull": {"strategy": "octopus"}})

        assert exc_info.value.key == "pull.strategy"

    def test_invalid_value_without_validation_falls_back(self) -> None:
        config = Config.from_dict({"pull": {"strategy": "octopus"}}, validate=False)

        assert config.pull.strategy is MergeStrategy.MERGE

    def test_non_dict_section_without_validation_is_ignored(self) -> None:
        config = Config.from_dict({"pull": "origin"}, validate=False)

        assert config.pull.remote == "origin"

    def test_unknown_message_key_raises(self) -> None:
        with pytest.raises(ConfigValidationError):
            _ = Config.from_dict({"messages": {"bogus": "text"}})


class TestAccessors:
    def test_get_dotted_key(self) -> None:
        config = Config.from_dict({"pull": {"remote": "upstream"}})

        assert config.get("pull.remote") == "upstream"
        assert config.get("pull.missing", "fallback") == "fallback"
        assert config.get("pull.remote.deeper") is None

    def test_to_dict_without_defaults(self) -> None:
        config = Config.from_dict({"pull": {"remote": "upstream"}})

        assert config.to_dict(include_defaults=False) == {
            "pull": {"remote": "upstream"}
        }

    def test_to_toml(self) -> None:
        config = Config.from_dict({"author": {"name": "Ada"}})

        assert config.to_toml() == '[author]\nname = "Ada"\n'

    def test_pull_to_options(self) -> None:
        config = Config.from_dict({"pull": {"fast_forward": "never"}})

        options = config.pull.to_options()

        assert options.fast_forward is FastForwardPolicy.NEVER
        assert options.strategy is MergeStrategy.MERGE

    def test_message_table_applies_overrides(self) -> None:
        config = Config.from_dict(
            {"messages": {"no_upstream": "Set upstream for {branch}"}}
        )

        table = config.message_table()

        assert table.failure(FailureCategory.NO_UPSTREAM, branch="main") == (
            "Set upstream for main"
        )

    def test_messages_are_read_only(self) -> None:
        config = Config.from_dict({"messages": {"cancelled": "Stopped."}})

        with pytest.raises(TypeError):
            config.messages["cancelled"] = "x"  # pyright: ignore[reportIndexIssue]


class TestFromFile:
    def test_loads_single_file(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.toml"
        _ = path.write_text('[pull]\nremote = "upstream"\n')

        config = Config.from_file(path)

        assert config.pull.remote == "upstream"
        assert config.sources[0].name is ConfigSourceName.REPOSITORY
        assert config.sources[0].path == path

    def test_invalid_file_names_source(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.toml"
        _ = path.write_text('[logging]\nlevel = "loud"\n')

        with pytest.raises(ConfigValidationError) as exc_info:
            _ = Config.from_file(path)

        assert exc_info.value.source == str(path)


class TestLoad:
    def test_precedence(
        self,
        repo_root: Path,
        user_config_home: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        user_config_home.parent.mkdir(parents=True)
        _ = user_config_home.write_text(
            '[pull]\nremote = "user"\nstrategy = "stage-only"\n'
            '[author]\nname = "User"\n'
        )
        _ = (repo_root / ".nyargit.toml").write_text(
            '[pull]\nremote = "repository"\n[author]\nname = "Repo"\n'
        )
        monkeypatch.setenv("NYARGIT_AUTHOR__NAME", "Env")

        config = Config.load(
            repo_root=repo_root,
            include_cli=True,
            cli_overrides={"logging": {"level": "debug"}},
        )

        assert config.pull.remote == "repository"
        assert config.pull.strategy is MergeStrategy.STAGE_ONLY
        assert config.author.name == "Env"
        assert config.logging.level is LogLevel.DEBUG
        assert [s.name for s in config.sources] == [
            ConfigSourceName.CLI,
            ConfigSourceName.ENV,
            ConfigSourceName.REPOSITORY,
            ConfigSourceName.USER,
            ConfigSourceName.DEFAULT,
        ]

    def test_missing_files_give_defaults(
        self, repo_root: Path, user_config_home: Path
    ) -> None:
        config = Config.load(repo_root=repo_root)

        assert config.pull.remote == "origin"
        assert not user_config_home.exists()

    def test_invalid_source_is_reported(
        self, repo_root: Path, user_config_home: Path
    ) -> None:
        _ = (repo_root / ".nyargit.toml").write_text(
            '[status]\ninclude_ignored = "sometimes"\n'
        )

        with pytest.raises(ConfigValidationError) as exc_info:
            _ = Config.load(repo_root=repo_root)

        assert exc_info.value.source == "repository"
        assert exc_info.value.key == "status.include_ignored"
