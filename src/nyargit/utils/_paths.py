from os import getenv
from pathlib import Path

import platformdirs


def get_nyargit_home() -> Path:
    """Get the NyarGit home directory.

    Uses ``NYARGIT_HOME`` when set, otherwise ``~/.nyargit``.
    """
    home = getenv("NYARGIT_HOME")
    if home:
        return Path(home).expanduser()
    return Path.home() / ".nyargit"


def get_nyargit_log_dir() -> Path:
    """Get the path to the logs/ directory inside the NyarGit home."""
    return get_nyargit_home() / "logs"


def get_nyargit_cli_log_file() -> Path:
    """Get the path to the CLI log file.

    Returns:
        Path to the CLI log file (``<home>/logs/cli.log``).
    """
    return get_nyargit_log_dir() / "cli.log"


def get_user_config_path() -> Path:
    r"""Get platform-specific user config file path.

    - Linux: ``~/.config/nyargit/config.toml`` (honours ``XDG_CONFIG_HOME``)
    - macOS: ``~/Library/Application Support/nyargit/config.toml``
    - Windows: ``%APPDATA%\nyargit\config.toml``

    The path is returned regardless of whether it exists.
    """
    return platformdirs.user_config_path("nyargit") / "config.toml"


def get_repository_config_path(repo_root: Path) -> Path:
    """Get the path to the per-repository config file (``.nyargit.toml``)."""
    return repo_root / ".nyargit.toml"
