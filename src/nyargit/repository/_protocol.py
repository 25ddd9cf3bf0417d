# ruff: noqa: TC003  # Path needed at runtime for Protocol method bodies
"""Client protocol for type-safe dependency injection.

This module defines the runtime-checkable Protocol that front ends program
against. ``GitRepository`` and ``FakeGitClient`` both satisfy it, so UI and
CLI code can be tested without a real repository.
"""

import os
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import TracebackType

    from nyargit.repository._cancel import CancellationToken
    from nyargit.repository._models import (
        OperationResult,
        PullOptions,
        StagedPathsResult,
        StatusSnapshot,
    )


@runtime_checkable
class GitClientProtocol(Protocol):
    """Protocol for serialized git repository operations.

    Every method returns a result value. Expected failures are reported
    through ``success``, ``message`` and ``category``; only an engine fault
    raises (``EngineFaultError``).

    Example:
        >>> def save(client: GitClientProtocol, message: str) -> bool:
        ...     if not client.stage_all().success:
        ...         return False
        ...     return client.commit(message, "Ada", "ada@example.com").success
    """

    @property
    def path(self) -> Path:
        """Working tree path the client is bound to."""
        ...

    def open(self) -> OperationResult:
        """Bind to an existing repository.

        Returns:
            Success, or a failure with category NOT_A_REPOSITORY.
        """
        ...

    def clone(
        self,
        remote_url: str,
        *,
        cancel: CancellationToken | None = None,
    ) -> OperationResult:
        """Clone a remote repository into the client's path and bind to it.

        Args:
            remote_url: URL or local path of the repository to clone.
            cancel: Optional cancellation token.

        Returns:
            Success, or a failure with category ALREADY_EXISTS, CLONE_FAILED
            or CANCELLED.
        """
        ...

    def get_status(self) -> StatusSnapshot:
        """Take a read-only status snapshot."""
        ...

    def stage_all(self) -> OperationResult:
        """Stage all untracked, modified, conflicted and deleted paths."""
        ...

    def stage(
        self, paths: str | os.PathLike[str] | Iterable[str | os.PathLike[str]]
    ) -> OperationResult:
        """Stage specific paths.

        Args:
            paths: One path or an iterable of paths.

        Returns:
            Success, or a failure with category PATH_NOT_FOUND.
        """
        ...

    def commit(
        self, message: str, author_name: str, author_email: str
    ) -> OperationResult:
        """Commit staged changes.

        Returns:
            Success carrying the short SHA, or a failure with category
            INVALID_AUTHOR or COMMIT_FAILED.
        """
        ...

    def push(self, *, cancel: CancellationToken | None = None) -> OperationResult:
        """Push the current branch to its upstream."""
        ...

    def pull(  # noqa: PLR0913
        self,
        remote_name: str,
        ref_spec: str,
        user: str,
        email: str,
        options: PullOptions | None = None,
        *,
        cancel: CancellationToken | None = None,
    ) -> OperationResult:
        """Fetch from a named remote and merge into the current branch."""
        ...

    def checkout_branch(self, branch_name: str) -> OperationResult:
        """Switch to a local branch."""
        ...

    def list_staged_paths(self) -> StagedPathsResult:
        """List every path recorded in the index."""
        ...

    def close(self) -> None:
        """Release the repository handle. Idempotent."""
        ...

    def __enter__(self) -> Self: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...
