"""The command-line interface for NyarGit."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

from cyclopts import App, Parameter
from rich.console import Console

from nyargit.config import find_repository_root, safe_load_config
from nyargit.exceptions import EngineFaultError
from nyargit.utils import create_cli_logger

from ._commands import register_commands
from ._commands._context import CLIContext, default_client_factory
from ._commands._shared import exit_code_for, exit_with_error

if TYPE_CHECKING:
    from ._commands._context import ClientFactory

_HELP = "A thread-safe gateway onto git repositories."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
    client_factory: ClientFactory | None = None,
) -> App:
    """Build the CLI application.

    Args:
        console: Console for regular output.
        error_console: Console for error output.
        exit_on_error: Exit on parse errors instead of raising.
        client_factory: Creates the git client for repository commands.
            Defaults to a dulwich-backed GitRepository.

    Returns:
        The configured cyclopts App.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    factory = client_factory or default_client_factory

    app = App(
        name="nyargit",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Enable verbose output")] = False,
        quiet: Annotated[bool, Parameter(help="Suppress non-essential output")] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        repo: Annotated[
            Path | None,
            Parameter(name="--repo", help="Repository path (default: current repo)"),
        ] = None,
    ) -> None:
        """Launch NyarGit CLI with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Enable verbose output with additional details.
            quiet: Suppress non-essential output.
            config: Explicit path to config file.
            repo: Working tree the repository commands act on.
        """
        repo_path = (repo or find_repository_root() or Path.cwd()).absolute()

        cli_overrides: dict[str, object] | None = None
        if verbose:
            cli_overrides = {"logging": {"level": "debug"}}

        loaded_config, config_error = safe_load_config(
            config_path=config,
            repo_root=repo_path,
            cli_overrides=cli_overrides,
        )

        cli_logger = create_cli_logger(
            level=loaded_config.logging.level.value,
            log_format=loaded_config.logging.format.value,  # type: ignore[arg-type]
            log_file=loaded_config.logging.file,
            command=tokens[0] if tokens else "",
        )

        ctx = CLIContext(
            config=loaded_config,
            verbose=verbose,
            quiet=quiet,
            repo_path=repo_path,
            config_error=config_error,
            logger=cli_logger,
            console=console,
            error_console=error_console,
            client_factory=factory,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        except EngineFaultError as e:
            cli_logger.error(
                "engine_fault",
                operation=e.operation,
                path=str(e.path),
                detail=str(e.__cause__ or e),
            )
            exit_with_error(str(e), exit_code_for(e.category), console=error_console)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `nyargit` CLI."""
    app.meta()


if __name__ == "__main__":
    main()
