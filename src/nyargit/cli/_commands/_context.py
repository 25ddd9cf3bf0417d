# pyright: reportUnusedCallResult=false
# ruff: noqa: TC003  # Path needed at runtime for dataclass field
"""CLI context for global state management.

This module provides thread-safe context management for CLI options and
loaded configuration. The CLIContext is set once at CLI startup and
made available to all commands via contextvars.
"""

import contextvars
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console

from nyargit.repository import GitClientProtocol, GitRepository

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from nyargit.config import Config

type ClientFactory = Callable[[CLIContext], GitClientProtocol]


class OutputFormat(StrEnum):
    """Supported output formats for commands."""

    TOML = "toml"
    JSON = "json"


def default_client_factory(ctx: CLIContext) -> GitClientProtocol:
    """Create a GitRepository for the context's repository path.

    The gateway logs through the CLI logger when one is configured so
    failures land in the CLI log file rather than on the terminal.
    """
    logger = ctx.logger.bind(component="repository") if ctx.logger else None
    return GitRepository(
        ctx.repo_path,
        messages=ctx.config.message_table(),
        logger=logger,
        include_ignored=ctx.config.status.include_ignored,
    )


# Thread-safe context variable for CLIContext
_current_cli_context: contextvars.ContextVar[CLIContext | None] = (
    contextvars.ContextVar("cli_context", default=None)
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI context with configuration and options.

    Attributes:
        config: Loaded configuration object.
        verbose: Enable verbose output with additional details.
        quiet: Suppress non-essential output.
        repo_path: Working tree the repository commands act on.
        config_error: Error message if config loading failed.
        logger: Structured logger for CLI commands (writes to file only).
        console: Console for regular output.
        error_console: Console for error output.
        client_factory: Creates the git client used by repository commands.
    """

    config: Config = field(repr=False)
    verbose: bool = False
    quiet: bool = False
    repo_path: Path = field(default_factory=Path.cwd)
    config_error: str | None = None
    logger: FilteringBoundLogger | None = field(default=None, repr=False)
    console: Console = field(default_factory=Console, repr=False)
    error_console: Console = field(
        default_factory=lambda: Console(stderr=True), repr=False
    )
    client_factory: ClientFactory = field(default=default_client_factory, repr=False)

    def create_client(self) -> GitClientProtocol:
        return self.client_factory(self)

    @classmethod
    def get_current(cls) -> CLIContext:
        """Get current active CLIContext, or create a default if not set.

        Returns:
            The currently active CLIContext, or a default instance if none is set.
        """
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx

        # Create default context with default config
        from nyargit.config import Config  # noqa: PLC0415

        return cls(config=Config.from_dict({}))

    @classmethod
    def set_current(cls, ctx: CLIContext) -> None:
        """Set the current active CLIContext."""
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Reset to default context.

        This is primarily useful for testing to ensure a clean state between tests.
        """
        _current_cli_context.set(None)
