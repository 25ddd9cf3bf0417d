from pathlib import Path

import pytest

from nyargit.config import safe_load_config


@pytest.fixture
def repo_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    root = tmp_path / "work"
    (root / ".git").mkdir(parents=True)
    return root


class TestSafeLoadConfig:
    def test_loads_repository_config(self, repo_root: Path) -> None:
        _ = (repo_root / ".nyargit.toml").write_text('[pull]\nremote = "up"\n')

        config, error = safe_load_config(repo_root=repo_root)

        assert error is None
        assert config.pull.remote == "up"

    def test_cli_overrides(self, repo_root: Path) -> None:
        config, _ = safe_load_config(
            repo_root=repo_root, cli_overrides={"logging": {"level": "debug"}}
        )

        assert config.logging.level == "debug"

    def test_invalid_config_warns_and_returns_defaults(
        self, repo_root: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _ = (repo_root / ".nyargit.toml").write_text("[pull\n")

        config, error = safe_load_config(repo_root=repo_root)

        assert error is not None
        assert config.pull.remote == "origin"
        assert "Warning: Failed to load config" in capsys.readouterr().err

    def test_strict_mode_exits(
        self, repo_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("NYARGIT_STRICT_CONFIG", "1")
        _ = (repo_root / ".nyargit.toml").write_text('[pull]\nstrategy = "x"\n')

        with pytest.raises(SystemExit) as exc_info:
            _ = safe_load_config(repo_root=repo_root)

        assert exc_info.value.code == 1

    def test_explicit_missing_path_always_exits(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _ = safe_load_config(config_path=tmp_path / "nope.toml")

        assert exc_info.value.code == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.toml"
        _ = path.write_text('[author]\nname = "Ada"\n')

        config, error = safe_load_config(config_path=path)

        assert error is None
        assert config.author.name == "Ada"
