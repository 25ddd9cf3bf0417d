"""NyarGit CLI commands."""
# pyright: reportUnusedCallResult=false

from typing import TYPE_CHECKING

from ._config import app as config_app
from ._context import CLIContext, OutputFormat, default_client_factory
from ._repo import app as repo_app
from ._shared import (
    ExitCode,
    exit_code_for,
    exit_with_error,
    exit_with_success,
    format_json,
    format_toml,
    report_result,
)

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "CLIContext",
    "ExitCode",
    "OutputFormat",
    "config_app",
    "default_client_factory",
    "exit_code_for",
    "exit_with_error",
    "exit_with_success",
    "format_json",
    "format_toml",
    "register_commands",
    "repo_app",
    "report_result",
]


def register_commands(app: App) -> None:
    app.command(config_app)
    app.command(repo_app)
