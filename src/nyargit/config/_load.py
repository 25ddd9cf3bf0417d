"""Configuration loading with CLI-friendly error handling."""

import os
import sys
from typing import TYPE_CHECKING

from nyargit.exceptions import ConfigError

from ._models import Config

if TYPE_CHECKING:
    from pathlib import Path


def _fail_or_warn(error_msg: str, *, strict: bool, prefix: str) -> tuple[Config, str]:
    if strict:
        print(f"Error: {error_msg}", file=sys.stderr)  # noqa: T201
        sys.exit(1)
    print(f"Warning: {prefix}{error_msg}", file=sys.stderr)  # noqa: T201
    return Config.from_dict({}), error_msg


def safe_load_config(
    *,
    config_path: Path | None = None,
    repo_root: Path | None = None,
    cli_overrides: dict[str, object] | None = None,
) -> tuple[Config, str | None]:
    """Load configuration with error handling.

    Attempts to load configuration and handles errors based on the
    NYARGIT_STRICT_CONFIG environment variable:
    - If unset or "0": warn to stderr and return the default config
    - If "1": fail fast with sys.exit(1)

    When config_path is provided, the file must exist (explicit user request).

    Args:
        config_path: Explicit path to config file (--config flag).
        repo_root: Working tree root used to find ``.nyargit.toml``.
        cli_overrides: CLI argument overrides to pass to Config.load().

    Returns:
        Tuple of (Config, error_message). On success, error_message is None.
        On failure (non-strict mode), returns the default Config with the
        error message.
    """
    strict_mode = os.environ.get("NYARGIT_STRICT_CONFIG", "0") == "1"

    try:
        if config_path is not None:
            if not config_path.exists():
                # Always fail for an explicit path
                print(  # noqa: T201
                    f"Error: Config file not found: {config_path}", file=sys.stderr
                )
                sys.exit(1)
            return Config.from_file(config_path), None

        config = Config.load(
            repo_root=repo_root,
            include_env=True,
            include_cli=cli_overrides is not None,
            cli_overrides=cli_overrides,
        )
    except ConfigError as e:
        return _fail_or_warn(
            str(e), strict=strict_mode, prefix="Failed to load config: "
        )
    except FileNotFoundError as e:
        return _fail_or_warn(
            str(e), strict=strict_mode, prefix="Config file not found: "
        )
    except OSError as e:
        return _fail_or_warn(
            f"Failed to load config: {e}", strict=strict_mode, prefix=""
        )
    else:
        return config, None
