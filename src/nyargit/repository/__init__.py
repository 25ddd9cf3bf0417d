"""NyarGit repository gateway.

This package provides a thread-safe gateway over git repositories with
uniform result semantics: every operation returns a result value carrying
``success``, ``message`` and a ``FailureCategory``, and only unexpected
engine failures raise.

Classes:
    GitRepository: Serialized gateway onto one working tree (dulwich-backed).
    GitClientProtocol: Runtime-checkable protocol for dependency injection.
    FakeGitClient: Scriptable test double implementing GitClientProtocol.
    AsyncGitClient: Coroutine facade running a client on worker threads.
    CancellationToken: Cooperative cancellation for clone, push and pull.
    MessageTable: Failure and informational message templates.

Models:
    OperationResult: Outcome of a mutating operation.
    StatusSnapshot: Outcome of a status query.
    StagedPathsResult: Outcome of listing index entries.
    RepositoryStatusView: Read-only status of index and working tree.
    StatusEntry: Status of one path.
    Signature: Commit author identity.
    PullOptions: Fast-forward policy and merge strategy for pull.

Example:
    >>> from nyargit.repository import GitRepository
    >>> with GitRepository("/path/to/repo") as repo:
    ...     if repo.open().success:
    ...         repo.stage_all()
    ...         result = repo.commit("Update docs", "Ada", "ada@example.com")
    ...         print(result.message)
"""

from nyargit.repository._async import AsyncGitClient
from nyargit.repository._cancel import CancellationToken, ProgressStream
from nyargit.repository._fake import FakeGitClient
from nyargit.repository._gateway import GitRepository
from nyargit.repository._messages import (
    DEFAULT_MESSAGES,
    FailureCategory,
    InfoMessage,
    MessageTable,
)
from nyargit.repository._models import (
    FastForwardPolicy,
    FileState,
    MergeStrategy,
    OperationResult,
    PullOptions,
    RepositoryStatusView,
    Signature,
    StagedPathsResult,
    StatusEntry,
    StatusSnapshot,
)
from nyargit.repository._protocol import GitClientProtocol

__all__ = [
    "DEFAULT_MESSAGES",
    "AsyncGitClient",
    "CancellationToken",
    "FailureCategory",
    "FakeGitClient",
    "FastForwardPolicy",
    "FileState",
    "GitClientProtocol",
    "GitRepository",
    "InfoMessage",
    "MergeStrategy",
    "MessageTable",
    "OperationResult",
    "ProgressStream",
    "PullOptions",
    "RepositoryStatusView",
    "Signature",
    "StagedPathsResult",
    "StatusEntry",
    "StatusSnapshot",
]
