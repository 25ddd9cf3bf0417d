"""Enums and source metadata shared by the NyarGit configuration models."""

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class LogLevel(StrEnum):
    """Threshold for gateway and CLI log events.

    ``NYARGIT_DEBUG`` forces ``debug`` regardless of the configured value.
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Rendering of log events: JSON lines, or structlog's console layout."""

    JSON = "json"
    TEXT = "text"


class ConfigSourceName(StrEnum):
    """Where a layer of configuration came from.

    Listed from highest precedence to lowest. ``REPOSITORY`` is the
    ``.nyargit.toml`` in the working tree, or the file given with ``--config``.
    """

    CLI = "cli"
    ENV = "env"
    REPOSITORY = "repository"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """One layer of configuration as discovered for a repository.

    Attributes:
        name: Which layer this is.
        path: The TOML file behind the layer, None for CLI, ENV and DEFAULT.
        exists: True if the file exists, or the layer carries any values.
        values: Raw values contributed by the layer.
    """

    name: ConfigSourceName
    path: Path | None
    exists: bool
    values: dict[str, Any]  # pyright: ignore[reportExplicitAny]

    def describe(self) -> str:
        """One-line summary, e.g. ``repository: /work/.nyargit.toml (not found)``."""
        location = str(self.path) if self.path is not None else "(no path)"
        missing = "" if self.exists else " (not found)"
        return f"{self.name.value}: {location}{missing}"
