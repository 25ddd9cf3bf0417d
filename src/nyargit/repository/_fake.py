# ruff: noqa: TC003  # Path needed at runtime for dataclass fields
"""Fake git client for testing.

This module provides a FakeGitClient class that implements GitClientProtocol
for use in tests of front-end code without requiring an actual repository.
"""

import os
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path
from types import TracebackType
from typing import Self

from nyargit.repository._cancel import CancellationToken
from nyargit.repository._messages import DEFAULT_MESSAGES, FailureCategory
from nyargit.repository._models import (
    OperationResult,
    PullOptions,
    RepositoryStatusView,
    StagedPathsResult,
    StatusSnapshot,
)


@dataclass(slots=True)
class FakeGitClient:
    """Fake git client for testing.

    Records every call in ``calls`` as ``(operation, args)`` and returns
    results queued with ``script()``. Unscripted calls succeed, with
    ``get_status()`` returning ``status`` and ``list_staged_paths()``
    returning ``staged_paths``. A scripted exception is raised instead of
    returned, which is how engine faults are simulated. After ``close()``
    every operation fails with ``FailureCategory.DISPOSED``.

    Example:
        >>> client = FakeGitClient()
        >>> client.script("push", OperationResult.failed(
        ...     FailureCategory.PUSH_REJECTED, "rejected"))
        >>> client.push().category
        <FailureCategory.PUSH_REJECTED: 'push_rejected'>
        >>> client.push().success
        True
        >>> [name for name, _ in client.calls]
        ['push', 'push']
    """

    path: Path = field(default_factory=lambda: Path("/fake/repo"))
    status: RepositoryStatusView = field(default_factory=RepositoryStatusView)
    staged_paths: tuple[str, ...] = ()
    calls: list[tuple[str, tuple[object, ...]]] = field(default_factory=list)
    closed: bool = False
    _scripted: dict[str, deque[object]] = field(default_factory=dict)

    # =========================================================================
    # Test helpers
    # =========================================================================

    def script(self, operation: str, *results: object) -> None:
        """Queue results (or exceptions) for the next calls to an operation.

        Args:
            operation: Method name, e.g. ``"commit"``.
            *results: Results returned in order, one per call.
        """
        self._scripted.setdefault(operation, deque()).extend(results)

    def called(self, operation: str) -> list[tuple[object, ...]]:
        """Return the argument tuples of every call to an operation."""
        return [args for name, args in self.calls if name == operation]

    def _respond[T](
        self,
        operation: str,
        args: tuple[object, ...],
        default: Callable[[], T],
        on_failure: Callable[[FailureCategory, str], T],
        cancel: CancellationToken | None = None,
    ) -> T:
        self.calls.append((operation, args))
        if self.closed:
            category = FailureCategory.DISPOSED
            return on_failure(category, DEFAULT_MESSAGES.failure(category))
        if cancel is not None and cancel.cancelled:
            category = FailureCategory.CANCELLED
            return on_failure(category, DEFAULT_MESSAGES.failure(category))
        queue = self._scripted.get(operation)
        if queue:
            result = queue.popleft()
            if isinstance(result, BaseException):
                raise result
            return result  # pyright: ignore[reportReturnType]
        return default()

    # =========================================================================
    # Context Manager Protocol
    # =========================================================================

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self.calls.append(("close", ()))
        self.closed = True

    # =========================================================================
    # GitClientProtocol
    # =========================================================================

    def open(self) -> OperationResult:
        return self._respond(
            "open", (), OperationResult.succeeded, OperationResult.failed
        )

    def clone(
        self,
        remote_url: str,
        *,
        cancel: CancellationToken | None = None,
    ) -> OperationResult:
        return self._respond(
            "clone",
            (remote_url,),
            OperationResult.succeeded,
            OperationResult.failed,
            cancel,
        )

    def get_status(self) -> StatusSnapshot:
        return self._respond(
            "get_status",
            (),
            lambda: StatusSnapshot.succeeded(self.status),
            StatusSnapshot.failed,
        )

    def stage_all(self) -> OperationResult:
        return self._respond(
            "stage_all", (), OperationResult.succeeded, OperationResult.failed
        )

    def stage(
        self, paths: str | os.PathLike[str] | Iterable[str | os.PathLike[str]]
    ) -> OperationResult:
        if isinstance(paths, (str, os.PathLike)):
            requested = (os.fspath(paths),)
        else:
            requested = tuple(os.fspath(p) for p in paths)
        return self._respond(
            "stage", (requested,), OperationResult.succeeded, OperationResult.failed
        )

    def commit(
        self, message: str, author_name: str, author_email: str
    ) -> OperationResult:
        return self._respond(
            "commit",
            (message, author_name, author_email),
            OperationResult.succeeded,
            OperationResult.failed,
        )

    def push(self, *, cancel: CancellationToken | None = None) -> OperationResult:
        return self._respond(
            "push", (), OperationResult.succeeded, OperationResult.failed, cancel
        )

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
        args = (remote_name, ref_spec, user, email, options or PullOptions())
        return self._respond(
            "pull", args, OperationResult.succeeded, OperationResult.failed, cancel
        )

    def checkout_branch(self, branch_name: str) -> OperationResult:
        return self._respond(
            "checkout_branch",
            (branch_name,),
            OperationResult.succeeded,
            OperationResult.failed,
        )

    def list_staged_paths(self) -> StagedPathsResult:
        return self._respond(
            "list_staged_paths",
            (),
            lambda: StagedPathsResult.succeeded(tuple(sorted(self.staged_paths))),
            StagedPathsResult.failed,
        )
