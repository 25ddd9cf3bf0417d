"""Async adapter for git clients.

Gateway operations block on the instance lock and on dulwich I/O. This
module runs them on anyio worker threads so an event loop (for example a UI
loop dispatching background work while polling status) never blocks.
"""

import os
from functools import partial
from typing import TYPE_CHECKING, Final

import anyio
import anyio.to_thread

from nyargit.repository._cancel import CancellationToken

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path

    from nyargit.repository._models import (
        OperationResult,
        PullOptions,
        StagedPathsResult,
        StatusSnapshot,
    )
    from nyargit.repository._protocol import GitClientProtocol


class AsyncGitClient:
    """Coroutine facade over any GitClientProtocol implementation.

    Network operations (clone, push, pull) always run with a cancellation
    token. If the awaiting task is cancelled, the token is cancelled too, so
    the worker thread stops at its next progress report and releases the
    gateway lock.

    Example:
        >>> async def refresh(client: AsyncGitClient) -> None:
        ...     snapshot = await client.get_status()
        ...     if snapshot.success and not snapshot.status.is_clean:
        ...         await client.stage_all()
    """

    __slots__: Final = ("_client", "_limiter")

    def __init__(
        self,
        client: GitClientProtocol,
        *,
        limiter: anyio.CapacityLimiter | None = None,
    ) -> None:
        """Wrap a client.

        Args:
            client: The synchronous client to delegate to.
            limiter: Optional capacity limiter for the worker threads.
        """
        self._client: GitClientProtocol = client
        self._limiter: anyio.CapacityLimiter | None = limiter

    @property
    def client(self) -> GitClientProtocol:
        return self._client

    @property
    def path(self) -> Path:
        return self._client.path

    async def _call[T](self, func: Callable[[], T]) -> T:
        return await anyio.to_thread.run_sync(func, limiter=self._limiter)

    async def _call_cancellable[T](
        self,
        func: Callable[..., T],
        cancel: CancellationToken | None,
    ) -> T:
        token = cancel if cancel is not None else CancellationToken()
        try:
            return await anyio.to_thread.run_sync(
                partial(func, cancel=token),
                abandon_on_cancel=True,
                limiter=self._limiter,
            )
        except anyio.get_cancelled_exc_class():
            token.cancel()
            raise

    async def open(self) -> OperationResult:
        return await self._call(self._client.open)

    async def clone(
        self, remote_url: str, *, cancel: CancellationToken | None = None
    ) -> OperationResult:
        return await self._call_cancellable(
            partial(self._client.clone, remote_url), cancel
        )

    async def get_status(self) -> StatusSnapshot:
        return await self._call(self._client.get_status)

    async def stage_all(self) -> OperationResult:
        return await self._call(self._client.stage_all)

    async def stage(
        self, paths: str | os.PathLike[str] | Iterable[str | os.PathLike[str]]
    ) -> OperationResult:
        if not isinstance(paths, (str, os.PathLike)):
            # Materialize lazy iterables on the caller's side
            paths = list(paths)
        return await self._call(partial(self._client.stage, paths))

    async def commit(
        self, message: str, author_name: str, author_email: str
    ) -> OperationResult:
        return await self._call(
            partial(self._client.commit, message, author_name, author_email)
        )

    async def push(self, *, cancel: CancellationToken | None = None) -> OperationResult:
        return await self._call_cancellable(self._client.push, cancel)

    async def pull(  # noqa: PLR0913
        self,
        remote_name: str,
        ref_spec: str,
        user: str,
        email: str,
        options: PullOptions | None = None,
        *,
        cancel: CancellationToken | None = None,
    ) -> OperationResult:
        return await self._call_cancellable(
            partial(self._client.pull, remote_name, ref_spec, user, email, options),
            cancel,
        )

    async def checkout_branch(self, branch_name: str) -> OperationResult:
        return await self._call(partial(self._client.checkout_branch, branch_name))

    async def list_staged_paths(self) -> StagedPathsResult:
        return await self._call(self._client.list_staged_paths)

    async def close(self) -> None:
        await self._call(self._client.close)

    async def __aenter__(self) -> AsyncGitClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
