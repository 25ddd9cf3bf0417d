from pathlib import Path

import pytest
from pydantic import ValidationError

from nyargit.config import (
    AuthorConfig,
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LoggingConfig,
    LogLevel,
    PullConfig,
    StatusConfig,
)
from nyargit.repository import FastForwardPolicy, MergeStrategy


class TestLoggingConfig:
    def test_defaults(self) -> None:
        config = LoggingConfig()

        assert config.level is LogLevel.INFO
        assert config.format is LogFormat.JSON
        assert config.file == ""

    def test_parses_strings(self) -> None:
        config = LoggingConfig.model_validate({"level": "debug", "format": "text"})

        assert config.level is LogLevel.DEBUG
        assert config.format is LogFormat.TEXT

    def test_names_are_case_insensitive(self) -> None:
        config = LoggingConfig.model_validate({"level": " DEBUG ", "format": "Text"})

        assert config.level is LogLevel.DEBUG
        assert config.format is LogFormat.TEXT

    def test_expands_home_in_file(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))

        config = LoggingConfig.model_validate({"file": "~/logs/nyargit.log"})

        assert config.file == str(tmp_path / "logs" / "nyargit.log")

    def test_rejects_unknown_level(self) -> None:
        with pytest.raises(ValidationError):
            _ = LoggingConfig.model_validate({"level": "verbose"})

    def test_is_frozen(self) -> None:
        config = LoggingConfig()

        with pytest.raises(ValidationError):
            config.level = LogLevel.DEBUG  # pyright: ignore[reportAttributeAccessIssue]


class TestRepositorySections:
    def test_author_defaults_are_empty(self) -> None:
        assert AuthorConfig() == AuthorConfig(name="", email="")

    def test_pull_ignores_unknown_keys(self) -> None:
        config = PullConfig.model_validate({"remote": "upstream", "depth": 3})

        assert config.remote == "upstream"
        assert config.fast_forward is FastForwardPolicy.ALLOW

    def test_pull_strategy_values(self) -> None:
        config = PullConfig.model_validate({"strategy": "stage-only"})

        assert config.strategy is MergeStrategy.STAGE_ONLY

    def test_status_default(self) -> None:
        assert StatusConfig().include_ignored is False


class TestConfigSource:
    def test_describe_file_source(self, tmp_path: Path) -> None:
        source = ConfigSource(
            name=ConfigSourceName.REPOSITORY,
            path=tmp_path / ".nyargit.toml",
            exists=False,
            values={},
        )

        assert source.describe() == (
            f"repository: {tmp_path / '.nyargit.toml'} (not found)"
        )

    def test_describe_pathless_source(self) -> None:
        source = ConfigSource(
            name=ConfigSourceName.ENV,
            path=None,
            exists=True,
            values={"pull": {"remote": "upstream"}},
        )

        assert source.describe() == "env: (no path)"
