# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: D415, FBT002
"""NyarGit repository commands."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter
from rich.markup import escape

from nyargit.cli._commands._context import CLIContext
from nyargit.cli._commands._shared import (
    exit_code_for,
    exit_with_error,
    report_result,
)
from nyargit.repository import (
    FastForwardPolicy,
    FileState,
    MergeStrategy,
    PullOptions,
)
from nyargit.utils import get_author_info

from ._app import app

if TYPE_CHECKING:
    from nyargit.repository import GitClientProtocol, RepositoryStatusView

__all__ = ["app"]


def _open(ctx: CLIContext, client: GitClientProtocol) -> None:
    """Bind the client to the repository or exit with the failure."""
    result = client.open()
    if not result.success:
        report_result(result, console=ctx.console, error_console=ctx.error_console)


def _resolve_author(
    ctx: CLIContext, name: str | None, email: str | None
) -> tuple[str, str]:
    """Fill missing author fields from config, then environment and git."""
    name = name or ctx.config.author.name
    email = email or ctx.config.author.email
    if not name or not email:
        fallback = get_author_info(cwd=ctx.repo_path)
        name = name or fallback.name or ""
        email = email or fallback.email or ""
    return name, email


def _to_repo_path(ctx: CLIContext, raw: str) -> str:
    """Interpret a path relative to the cwd when the cwd is inside the repo."""
    candidate = Path.cwd() / raw
    if candidate.is_relative_to(ctx.repo_path):
        return str(candidate)
    return raw


def _print_status(ctx: CLIContext, status: RepositoryStatusView) -> None:
    console = ctx.console
    if status.branch is not None:
        console.print(f"On branch [bold]{escape(status.branch)}[/bold]")
    elif status.head is not None:
        console.print(f"HEAD detached at [yellow]{status.head[:7]}[/yellow]")

    if status.is_clean:
        console.print("[dim]Nothing to commit, working tree clean[/dim]")
        return

    if status.conflicted:
        console.print("[bold red]Unmerged paths:[/bold red]")
        for path in status.conflicted:
            console.print(f"  [red]! {escape(path)}[/red]")

    staged = [e for e in status.entries if FileState.STAGED in e.states]
    if staged:
        console.print("[bold green]Staged changes:[/bold green]")
        for entry in staged:
            if entry.renamed_from is not None:
                line = f"R {escape(entry.renamed_from)} -> {escape(entry.path)}"
            elif FileState.DELETED in entry.states:
                line = f"- {escape(entry.path)}"
            else:
                line = f"+ {escape(entry.path)}"
            console.print(f"  [green]{line}[/green]")

    unstaged = [
        e
        for e in status.entries
        if FileState.MODIFIED in e.states
        or (FileState.DELETED in e.states and FileState.STAGED not in e.states)
    ]
    if unstaged:
        console.print("[bold yellow]Unstaged changes:[/bold yellow]")
        for entry in unstaged:
            marker = "~" if FileState.MODIFIED in entry.states else "-"
            console.print(f"  [yellow]{marker} {escape(entry.path)}[/yellow]")

    if status.untracked:
        console.print("[bold cyan]Untracked files:[/bold cyan]")
        for path in status.untracked:
            console.print(f"  [cyan]? {escape(path)}[/cyan]")

    if ctx.verbose and status.ignored:
        console.print("[bold]Ignored files:[/bold]")
        for path in status.ignored:
            console.print(f"  [dim]{escape(path)}[/dim]")


@app.command(name="status")
def _status() -> None:
    """Show the working tree status"""
    ctx = CLIContext.get_current()

    with ctx.create_client() as client:
        _open(ctx, client)
        snapshot = client.get_status()
        if snapshot.status is None:
            exit_with_error(
                snapshot.message,
                exit_code_for(snapshot.category),
                console=ctx.error_console,
            )
        _print_status(ctx, snapshot.status)


@app.command(name="staged")
def _staged() -> None:
    """List every path recorded in the index"""
    ctx = CLIContext.get_current()

    with ctx.create_client() as client:
        _open(ctx, client)
        result = client.list_staged_paths()
        if not result.success:
            exit_with_error(
                result.message,
                exit_code_for(result.category),
                console=ctx.error_console,
            )
        for path in result.paths:
            ctx.console.print(path, markup=False, highlight=False)


@app.command(name="stage")
def _stage(
    *paths: Annotated[
        str, Parameter(help="Paths to stage. Stages everything when omitted.")
    ],
    all_changes: Annotated[
        bool,
        Parameter(name=["--all", "-A"], help="Stage all changes"),
    ] = False,
) -> None:
    """Stage changes for the next commit

    Args:
        paths: Paths to stage, relative to the current directory.
        all_changes: Stage all untracked, modified, deleted and conflicted paths.
    """
    ctx = CLIContext.get_current()

    with ctx.create_client() as client:
        _open(ctx, client)
        if all_changes or not paths:
            result = client.stage_all()
        else:
            result = client.stage([_to_repo_path(ctx, p) for p in paths])
        if ctx.logger is not None:
            ctx.logger.info(
                "stage", success=result.success, category=result.category
            )
        report_result(
            result,
            console=ctx.console,
            error_console=ctx.error_console,
            quiet=ctx.quiet,
        )


@app.command(name="commit")
def _commit(
    *,
    message: Annotated[
        str,
        Parameter(name=["--message", "-m"], help="Commit message"),
    ],
    author_name: Annotated[
        str | None,
        Parameter(name="--author-name", help="Author name"),
    ] = None,
    author_email: Annotated[
        str | None,
        Parameter(name="--author-email", help="Author email"),
    ] = None,
) -> None:
    """Commit staged changes

    Args:
        message: Commit message.
        author_name: Author name (defaults to config, then git config).
        author_email: Author email (defaults to config, then git config).
    """
    ctx = CLIContext.get_current()
    name, email = _resolve_author(ctx, author_name, author_email)

    with ctx.create_client() as client:
        _open(ctx, client)
        result = client.commit(message, name, email)
        if ctx.logger is not None:
            ctx.logger.info(
                "commit", success=result.success, category=result.category
            )
        report_result(
            result,
            console=ctx.console,
            error_console=ctx.error_console,
            quiet=ctx.quiet,
        )


@app.command(name="push")
def _push() -> None:
    """Push the current branch to its upstream"""
    ctx = CLIContext.get_current()

    with ctx.create_client() as client:
        _open(ctx, client)
        result = client.push()
        if ctx.logger is not None:
            ctx.logger.info("push", success=result.success, category=result.category)
        report_result(
            result,
            console=ctx.console,
            error_console=ctx.error_console,
            quiet=ctx.quiet,
        )


@app.command(name="pull")
def _pull(  # noqa: PLR0913
    *,
    remote: Annotated[
        str | None,
        Parameter(name=["--remote", "-r"], help="Remote to fetch from"),
    ] = None,
    ref: Annotated[
        str,
        Parameter(name="--ref", help="Remote ref to merge (default: upstream)"),
    ] = "",
    fast_forward: Annotated[
        FastForwardPolicy | None,
        Parameter(name="--ff", help="Fast-forward policy"),
    ] = None,
    strategy: Annotated[
        MergeStrategy | None,
        Parameter(name="--strategy", help="Merge strategy"),
    ] = None,
    author_name: Annotated[
        str | None,
        Parameter(name="--author-name", help="Author name for merge commits"),
    ] = None,
    author_email: Annotated[
        str | None,
        Parameter(name="--author-email", help="Author email for merge commits"),
    ] = None,
) -> None:
    """Fetch from a remote and merge into the current branch

    Args:
        remote: Remote name (defaults to pull.remote).
        ref: Remote ref to merge.
        fast_forward: Fast-forward policy (defaults to pull.fast_forward).
        strategy: Merge strategy (defaults to pull.strategy).
        author_name: Author name for merge commits.
        author_email: Author email for merge commits.
    """
    ctx = CLIContext.get_current()
    pull_config = ctx.config.pull
    name, email = _resolve_author(ctx, author_name, author_email)
    options = PullOptions(
        fast_forward=fast_forward or pull_config.fast_forward,
        strategy=strategy or pull_config.strategy,
    )

    with ctx.create_client() as client:
        _open(ctx, client)
        result = client.pull(remote or pull_config.remote, ref, name, email, options)
        if ctx.logger is not None:
            ctx.logger.info("pull", success=result.success, category=result.category)
        report_result(
            result,
            console=ctx.console,
            error_console=ctx.error_console,
            quiet=ctx.quiet,
        )


@app.command(name="checkout")
def _checkout(branch: str, /) -> None:
    """Switch to a local branch

    Args:
        branch: Local branch name.
    """
    ctx = CLIContext.get_current()

    with ctx.create_client() as client:
        _open(ctx, client)
        result = client.checkout_branch(branch)
        report_result(
            result,
            console=ctx.console,
            error_console=ctx.error_console,
            quiet=ctx.quiet,
        )


@app.command(name="clone")
def _clone(url: str, /) -> None:
    """Clone a repository into the repository path

    Args:
        url: URL or local path of the repository to clone.
    """
    ctx = CLIContext.get_current()

    with ctx.create_client() as client:
        result = client.clone(url)
        if ctx.logger is not None:
            ctx.logger.info("clone", success=result.success, category=result.category)
        report_result(
            result,
            console=ctx.console,
            error_console=ctx.error_console,
            quiet=ctx.quiet,
        )
