"""Author information resolution utilities."""

import os
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(slots=True, frozen=True)
class AuthorInfo:
    """Resolved author information.

    Attributes:
        name: Author name, or None if not found.
        email: Author email, or None if not found.
    """

    name: str | None
    email: str | None

    @property
    def complete(self) -> bool:
        return bool(self.name and self.email)


def get_author_info(cwd: Path | None = None) -> AuthorInfo:
    """Resolve author info from environment variables or git config.

    Resolution order:
    1. Environment variables (NYARGIT_AUTHOR_NAME, NYARGIT_AUTHOR_EMAIL)
    2. Git config (user.name, user.email), read from ``cwd`` when given so
       repository-local identity wins over the global one

    Args:
        cwd: Directory to run ``git config`` in.

    Returns:
        AuthorInfo with resolved name and email (either may be None).
    """
    name = os.environ.get("NYARGIT_AUTHOR_NAME") or _git_config("user.name", cwd)
    email = os.environ.get("NYARGIT_AUTHOR_EMAIL") or _git_config("user.email", cwd)

    return AuthorInfo(name=name, email=email)


def _git_config(key: str, cwd: Path | None = None) -> str | None:
    """Read a value from git config.

    Args:
        key: Git config key (e.g., "user.name").
        cwd: Directory to run git in.

    Returns:
        The config value, or None if not set or git is unavailable.
    """
    # Validate key to prevent injection
    if not key.replace(".", "").replace("_", "").isalnum():
        return None

    try:
        result = subprocess.run(  # noqa: S603
            ["git", "config", "--get", key],  # noqa: S607
            capture_output=True,
            text=True,
            check=True,
            cwd=cwd,
        )
        return result.stdout.strip() or None
    except (subprocess.CalledProcessError, FileNotFoundError, NotADirectoryError):
        return None
