"""Repository root and config source discovery.

This module locates the working tree that encloses a directory, by searching
upward for a ``.git`` entry, and lists the configuration sources that apply
to it.
"""

from pathlib import Path
from typing import Any

from nyargit.utils._paths import get_repository_config_path, get_user_config_path

from ._defaults import DEFAULT_CONFIG
from ._models._common import ConfigSource, ConfigSourceName


def find_repository_root(start: Path | None = None) -> Path | None:
    """Find the working tree root by searching upward for ``.git``.

    ``.git`` may be a directory or, for linked worktrees and submodules,
    a file.

    Args:
        start: Directory to start searching from. Defaults to current
            working directory if not specified.

    Returns:
        Path to the working tree root, or None if no repository is found.

    Examples:
        >>> root = find_repository_root(Path("/path/to/repo/src"))
    """
    current = (start or Path.cwd()).resolve()

    while True:
        if (current / ".git").exists():
            return current
        parent = current.parent
        if parent == current:  # Reached filesystem root
            return None
        current = parent


def _file_exists(path: Path) -> bool:
    """Check if a file exists, treating permission errors as absence."""
    try:
        return path.is_file()
    except OSError:
        return False


def discover_sources(
    repo_root: Path | None = None,
    *,
    include_env: bool = True,
    include_cli: bool = False,
    cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> list[ConfigSource]:
    """Discover all configuration sources.

    Sources are returned in precedence order (highest first). File-based
    sources are checked for existence. The repository source is omitted when
    no working tree is found.

    Args:
        repo_root: Working tree root. If None, auto-detect from the current
            directory.
        include_env: Include environment variables as a source.
        include_cli: Include CLI overrides as a source.
        cli_overrides: Dictionary of CLI argument overrides. Only used
            if include_cli is True.

    Returns:
        List of ConfigSource objects in precedence order (highest first).
        Sources that don't exist are still included with exists=False.

    Examples:
        >>> overrides = {"logging": {"level": "debug"}}
        >>> sources = discover_sources(include_cli=True, cli_overrides=overrides)
        >>> sources[0].name
        <ConfigSourceName.CLI: 'cli'>
    """
    sources: list[ConfigSource] = []
    resolved_root = repo_root if repo_root else find_repository_root()

    if include_cli:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.CLI,
                path=None,
                exists=bool(cli_overrides),
                values=cli_overrides or {},
            )
        )

    if include_env:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.ENV,
                path=None,
                exists=True,  # Actual values parsed during loading phase
                values={},
            )
        )

    if resolved_root:
        repository_path = get_repository_config_path(resolved_root)
        sources.append(
            ConfigSource(
                name=ConfigSourceName.REPOSITORY,
                path=repository_path,
                exists=_file_exists(repository_path),
                values={},
            )
        )

    user_path = get_user_config_path()
    sources.append(
        ConfigSource(
            name=ConfigSourceName.USER,
            path=user_path,
            exists=_file_exists(user_path),
            values={},
        )
    )

    sources.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT,
            path=None,
            exists=True,
            values=DEFAULT_CONFIG,
        )
    )

    return sources
