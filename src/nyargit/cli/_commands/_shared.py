# pyright: reportExplicitAny=false
"""Shared CLI utilities for commands.

This module provides common utilities used across CLI command implementations:
- Standardized exit codes and their mapping from failure categories
- Output formatters (JSON, TOML)
- Result reporting for repository commands
"""

from enum import IntEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final, Never

from nyargit.repository import FailureCategory

if TYPE_CHECKING:
    from collections.abc import Mapping

    from rich.console import Console

    from nyargit.repository import OperationResult

# Type alias for formattable data - uses Any to match library signatures
FormattableData = dict[str, Any]

__all__ = [
    "CATEGORY_EXIT_CODES",
    "ExitCode",
    "FormattableData",
    "exit_code_for",
    "exit_with_error",
    "exit_with_success",
    "format_json",
    "format_toml",
    "get_error_console",
    "report_result",
]


class ExitCode(IntEnum):
    """Standard exit codes for NyarGit CLI commands."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    NOT_FOUND = 3
    IO_ERROR = 4
    INTERNAL_ERROR = 5
    CONFLICT = 6
    REMOTE_ERROR = 7
    CANCELLED = 8


CATEGORY_EXIT_CODES: Final[Mapping[FailureCategory, ExitCode]] = MappingProxyType(
    {
        FailureCategory.NOT_A_REPOSITORY: ExitCode.NOT_FOUND,
        FailureCategory.ALREADY_EXISTS: ExitCode.CONFLICT,
        FailureCategory.PATH_NOT_FOUND: ExitCode.NOT_FOUND,
        FailureCategory.INVALID_AUTHOR: ExitCode.VALIDATION_ERROR,
        FailureCategory.COMMIT_FAILED: ExitCode.IO_ERROR,
        FailureCategory.NO_CURRENT_BRANCH: ExitCode.VALIDATION_ERROR,
        FailureCategory.NO_UPSTREAM: ExitCode.REMOTE_ERROR,
        FailureCategory.PUSH_REJECTED: ExitCode.REMOTE_ERROR,
        FailureCategory.MERGE_CONFLICT: ExitCode.CONFLICT,
        FailureCategory.BRANCH_NOT_FOUND: ExitCode.NOT_FOUND,
        FailureCategory.CHECKOUT_CONFLICT: ExitCode.CONFLICT,
        FailureCategory.CLONE_FAILED: ExitCode.REMOTE_ERROR,
        FailureCategory.FETCH_FAILED: ExitCode.REMOTE_ERROR,
        FailureCategory.CANCELLED: ExitCode.CANCELLED,
        FailureCategory.DISPOSED: ExitCode.INTERNAL_ERROR,
        FailureCategory.ENGINE_FAULT: ExitCode.INTERNAL_ERROR,
    }
)


def exit_code_for(category: FailureCategory | None) -> ExitCode:
    """Map a failure category to the process exit code."""
    if category is None:
        return ExitCode.INTERNAL_ERROR
    return CATEGORY_EXIT_CODES.get(category, ExitCode.INTERNAL_ERROR)


def format_json(data: FormattableData, *, indent: bool = True) -> str:
    """Format data as JSON.

    Args:
        data: Dictionary to format as JSON.
        indent: Whether to pretty-print with indentation.

    Returns:
        JSON-formatted string representation.
    """
    import orjson  # noqa: PLC0415

    options = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(data, option=options).decode("utf-8")


def format_toml(data: FormattableData) -> str:
    """Format data as TOML."""
    import tomli_w  # noqa: PLC0415

    return tomli_w.dumps(data)


def get_error_console() -> Console:
    """Get a Rich console configured for error output to stderr."""
    from rich.console import Console  # noqa: PLC0415

    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = get_error_console()

    from rich.markup import escape  # noqa: PLC0415

    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    raise SystemExit(code)


def exit_with_success(
    message: str | None = None,
    *,
    console: Console | None = None,
) -> Never:
    """Print an optional success message and exit with SUCCESS code.

    Raises:
        SystemExit: Always raised with ExitCode.SUCCESS (0).
    """
    if message:
        if console is None:
            console = get_error_console()
        console.print(message, markup=False, highlight=False)
    raise SystemExit(ExitCode.SUCCESS)


def report_result(
    result: OperationResult,
    *,
    console: Console,
    error_console: Console,
    quiet: bool = False,
) -> Never:
    """Print a result's message and exit with the code for its category.

    Successful results print their informational note (if any) unless
    ``quiet`` is set. Failed results always print to the error console.

    Raises:
        SystemExit: Always.
    """
    if result.success:
        exit_with_success(None if quiet else result.message, console=console)
    exit_with_error(
        result.message, exit_code_for(result.category), console=error_console
    )
