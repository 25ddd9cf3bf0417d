# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# pyright: reportExplicitAny=false, reportAny=false
# ruff: noqa: D415, A002, FBT002
"""Config commands for viewing NyarGit configuration."""

from typing import Annotated, Any

from cyclopts import Parameter

from nyargit.cli._commands._context import CLIContext, OutputFormat
from nyargit.cli._commands._shared import (
    ExitCode,
    exit_with_error,
    format_json,
    format_toml,
)

from ._app import app

__all__ = ["app"]


@app.command(name="show")
def _show(
    *,
    format: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format (toml, json)"),
    ] = OutputFormat.TOML,
    section: Annotated[
        str | None,
        Parameter(name="--section", help="Show one section only (e.g., pull)"),
    ] = None,
    no_defaults: Annotated[
        bool,
        Parameter(name="--no-defaults", help="Exclude default values"),
    ] = False,
) -> None:
    """Display the merged configuration

    Args:
        format: Output format (toml, json).
        section: Section to show (logging, author, pull, status, messages).
        no_defaults: Exclude default values from output.
    """
    ctx = CLIContext.get_current()
    data: dict[str, Any] = ctx.config.to_dict(include_defaults=not no_defaults)

    if section:
        if section not in ctx.config.to_dict():
            exit_with_error(
                f"Section '{section}' not found",
                ExitCode.NOT_FOUND,
                console=ctx.error_console,
            )
        data = {section: data.get(section, {})}

    match format:
        case OutputFormat.JSON:
            output = format_json(data)
        case _:
            output = format_toml(data)

    ctx.console.print(output.rstrip(), markup=False, highlight=False)


@app.command(name="sources")
def _sources() -> None:
    """List configuration sources in precedence order"""
    ctx = CLIContext.get_current()

    for source in ctx.config.sources:
        ctx.console.print(source.describe(), markup=False, highlight=False)
