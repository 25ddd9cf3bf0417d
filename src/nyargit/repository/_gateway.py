"""Thread-safe repository gateway.

``GitRepository`` is the single point of entry for every operation against
one working tree. Each operation runs while holding a lock owned by the
instance, delegates to dulwich, and reports the outcome as a result value.
Expected failures never raise: they come back as failed results carrying a
``FailureCategory`` and a message from the ``MessageTable``. Only an
unexpected engine failure escapes, as ``EngineFaultError``.
"""

import os
import shutil
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Final, Self

from dulwich import porcelain
from dulwich.client import HTTPProxyUnauthorized, HTTPUnauthorized
from dulwich.errors import (
    CommitError,
    GitProtocolError,
    HookError,
    NotGitRepository,
    WorkingTreeModifiedError,
)
from dulwich.graph import can_fast_forward, find_merge_base
from dulwich.repo import Repo

from nyargit.exceptions import (
    EngineFaultError,
    OperationCancelledError,
    RepositoryOperationError,
)
from nyargit.repository._cancel import ProgressStream
from nyargit.repository._engine import (
    branch_ref,
    branch_upstream,
    changed_paths,
    clear_merge_head,
    collect_status,
    commit_tree,
    conflicted_paths,
    current_branch,
    decode_path,
    encode_path,
    head_sha,
    ignored_untracked,
    is_valid_repository,
    local_branch_sha,
    merge_in_progress,
    record_conflicts,
    remote_url,
    remove_from_index,
    worktree_root,
    write_merge_head,
)
from nyargit.repository._messages import (
    DEFAULT_MESSAGES,
    FailureCategory,
    InfoMessage,
    MessageTable,
)
from nyargit.repository._models import (
    FastForwardPolicy,
    MergeStrategy,
    OperationResult,
    PullOptions,
    Signature,
    StagedPathsResult,
    StatusSnapshot,
)
from nyargit.utils._logging import create_repository_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from types import TracebackType

    from structlog.typing import FilteringBoundLogger

    from nyargit.repository._cancel import CancellationToken

# Failures talking to a remote: bad URL, refused connection, auth, protocol.
_REMOTE_ERRORS: Final = (
    GitProtocolError,
    HTTPUnauthorized,
    HTTPProxyUnauthorized,
    NotGitRepository,
    ConnectionError,
    porcelain.Error,
)

_SHORT_SHA_LENGTH: Final = 7


def _split_paths(
    paths: str | os.PathLike[str] | Iterable[str | os.PathLike[str]],
) -> list[str]:
    if isinstance(paths, (str, os.PathLike)):
        return [os.fspath(paths)]
    return [os.fspath(p) for p in paths]


def _tracked_beneath(tracked: list[str], name: str) -> list[str]:
    """Index paths equal to ``name`` or inside it (``"."`` is the root)."""
    if name == ".":
        return list(tracked)
    prefix = f"{name}/"
    return [p for p in tracked if p == name or p.startswith(prefix)]


def _parent_names(name: str) -> list[str]:
    """Every leading directory of a repository path, outermost first."""
    parts = name.split("/")[:-1]
    return ["/".join(parts[: i + 1]) for i in range(len(parts))]


class GitRepository:
    """Serialized gateway onto one git working tree.

    The constructor does not touch the disk. Call ``open()`` to bind to an
    existing repository or ``clone()`` to create one. Every public operation,
    including ``close()``, takes the instance lock, so concurrent callers on
    different threads see operations as atomic. Two gateways over different
    paths never block each other.

    Attributes:
        path: The working tree path this gateway is bound to.

    Example:
        >>> with GitRepository("/path/to/repo") as repo:
        ...     if repo.open().success:
        ...         snapshot = repo.get_status()
        ...         print(sorted(snapshot.status.modified))
    """

    __slots__: Final = (
        "_disposed",
        "_include_ignored",
        "_lock",
        "_logger",
        "_messages",
        "_path",
        "_repo",
    )

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        messages: MessageTable | None = None,
        logger: FilteringBoundLogger | None = None,
        include_ignored: bool = False,
    ) -> None:
        """Create an unbound gateway.

        Args:
            path: Working tree root.
            messages: Message table for result text. Defaults to the built-in
                English table.
            logger: structlog logger for failure reporting. Defaults to a
                stderr logger from ``create_repository_logger()``.
            include_ignored: Report ignored files in ``get_status()``.
        """
        self._path: Path = Path(path).expanduser().absolute()
        self._repo: Repo | None = None
        self._lock: threading.Lock = threading.Lock()
        self._disposed: bool = False
        self._messages: MessageTable = (
            messages if messages is not None else DEFAULT_MESSAGES
        )
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else create_repository_logger()
        )
        self._include_ignored: bool = include_ignored

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
        """Release the repository handle.

        Waits for any in-flight operation. Idempotent. Every later operation
        fails with ``FailureCategory.DISPOSED``.
        """
        with self._lock:
            if self._disposed:
                return
            if self._repo is not None:
                self._repo.close()
                self._repo = None
            self._disposed = True
            self._logger.debug("repository_closed", path=str(self._path))

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_open(self) -> bool:
        """True if a repository handle is bound and the gateway is not closed."""
        return self._repo is not None and not self._disposed

    # =========================================================================
    # Operation boundary
    # =========================================================================

    def _run[T](
        self,
        operation: str,
        action: Callable[[], T],
        on_failure: Callable[[FailureCategory, str], T],
        *,
        requires_repo: bool = True,
    ) -> T:
        """Run an operation under the lock and convert failures to results.

        Args:
            operation: Operation name used in logs and engine faults.
            action: The operation body.
            on_failure: Factory building a failed result of the right type.
            requires_repo: Fail with NOT_A_REPOSITORY if no handle is bound.

        Returns:
            The action's result, or a failed result.

        Raises:
            EngineFaultError: If the engine raised anything unexpected.
        """
        with self._lock:
            try:
                if self._disposed:
                    msg = "gateway is closed"
                    raise RepositoryOperationError(FailureCategory.DISPOSED, msg)
                if requires_repo and self._repo is None:
                    msg = "repository has not been opened"
                    raise RepositoryOperationError(
                        FailureCategory.NOT_A_REPOSITORY, msg
                    )
                result = action()
            except RepositoryOperationError as e:
                return self._fail(operation, e, on_failure)
            except OperationCancelledError as e:
                cancelled = RepositoryOperationError(FailureCategory.CANCELLED, str(e))
                return self._fail(operation, cancelled, on_failure)
            except Exception as e:
                self._logger.exception(
                    "engine_fault",
                    operation=operation,
                    category=str(FailureCategory.ENGINE_FAULT),
                    detail=str(e),
                    path=str(self._path),
                )
                msg = self._messages.failure(FailureCategory.ENGINE_FAULT)
                raise EngineFaultError(msg, operation=operation, path=self._path) from e
            self._logger.debug("operation_completed", operation=operation)
            return result

    def _fail[T](
        self,
        operation: str,
        error: RepositoryOperationError,
        on_failure: Callable[[FailureCategory, str], T],
    ) -> T:
        params = {"path": self._path, **error.params}
        message = self._messages.failure(error.category, **params)
        self._logger.warning(
            "operation_failed",
            operation=operation,
            category=str(error.category),
            detail=error.detail,
            path=str(self._path),
        )
        return on_failure(error.category, message)

    def _require_repo(self) -> Repo:
        if self._repo is None:
            msg = "repository has not been opened"
            raise RepositoryOperationError(
                FailureCategory.NOT_A_REPOSITORY, msg
            )
        return self._repo

    def _info(self, key: InfoMessage, **params: object) -> OperationResult:
        return OperationResult.succeeded(self._messages.info(key, **params))

    # =========================================================================
    # Binding
    # =========================================================================

    def open(self) -> OperationResult:
        """Bind to an existing repository at ``path``.

        Opening an already open gateway is a successful no-op.

        Returns:
            Success, or NOT_A_REPOSITORY if no repository exists at ``path``.
        """

        def action() -> OperationResult:
            if self._repo is None:
                if not is_valid_repository(self._path):
                    msg = f"no repository at {self._path}"
                    raise RepositoryOperationError(
                        FailureCategory.NOT_A_REPOSITORY, msg
                    )
                self._repo = Repo(str(self._path))
            return self._info(InfoMessage.OPENED)

        return self._run("open", action, OperationResult.failed, requires_repo=False)

    def clone(
        self,
        remote_url: str,
        *,
        cancel: CancellationToken | None = None,
    ) -> OperationResult:
        """Clone a remote repository into ``path`` and bind to it.

        Args:
            remote_url: URL or local path of the repository to clone.
            cancel: Optional cancellation token.

        Returns:
            Success, ALREADY_EXISTS if ``path`` holds a repository or a
            non-empty directory, CLONE_FAILED on remote errors, or CANCELLED.
        """

        def action() -> OperationResult:
            target = self._path
            if self._repo is not None or is_valid_repository(target):
                msg = "a repository is already present"
                raise RepositoryOperationError(FailureCategory.ALREADY_EXISTS, msg)
            if target.exists() and (not target.is_dir() or any(target.iterdir())):
                msg = "target exists and is not an empty directory"
                raise RepositoryOperationError(FailureCategory.ALREADY_EXISTS, msg)
            if cancel is not None:
                cancel.raise_if_cancelled()

            created = not target.exists()
            stream = ProgressStream(cancel)
            try:
                cloned = porcelain.clone(
                    remote_url,
                    str(target),
                    checkout=True,
                    errstream=stream,
                )
            except Exception as e:
                self._discard_clone_target(created=created)
                if isinstance(e, _REMOTE_ERRORS):
                    raise RepositoryOperationError(
                        FailureCategory.CLONE_FAILED, str(e), remote=remote_url
                    ) from e
                raise
            cloned.close()
            self._repo = Repo(str(target))
            return self._info(InfoMessage.CLONED, remote=remote_url)

        return self._run("clone", action, OperationResult.failed, requires_repo=False)

    def _discard_clone_target(self, *, created: bool) -> None:
        target = self._path
        if created:
            shutil.rmtree(target, ignore_errors=True)
            return
        if not target.is_dir():
            return
        for child in target.iterdir():
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child, ignore_errors=True)
            else:
                child.unlink(missing_ok=True)

    # =========================================================================
    # Status
    # =========================================================================

    def get_status(self) -> StatusSnapshot:
        """Take a read-only snapshot of index and working tree state."""

        def action() -> StatusSnapshot:
            view = collect_status(
                self._require_repo(), include_ignored=self._include_ignored
            )
            return StatusSnapshot.succeeded(view)

        return self._run("get_status", action, StatusSnapshot.failed)

    def list_staged_paths(self) -> StagedPathsResult:
        """List every path recorded in the index, sorted."""

        def action() -> StagedPathsResult:
            index = self._require_repo().open_index()
            paths = sorted({decode_path(path) for path in index.paths()})
            return StagedPathsResult.succeeded(tuple(paths))

        return self._run("list_staged_paths", action, StagedPathsResult.failed)

    # =========================================================================
    # Staging
    # =========================================================================

    def stage_all(self) -> OperationResult:
        """Stage every untracked, modified and conflicted file and every deletion."""

        def action() -> OperationResult:
            repo = self._require_repo()
            view = collect_status(repo)
            candidates = view.untracked | view.modified | view.conflicted | view.deleted
            if not candidates:
                return self._info(InfoMessage.NOTHING_TO_STAGE)

            index = repo.open_index()
            root = worktree_root(repo).resolve()
            present: list[str] = []
            removed: list[str] = []
            for name in sorted(candidates):
                if os.path.lexists(root / name):
                    present.append(name)
                elif encode_path(name) in index:
                    removed.append(name)
            self._apply_staging(repo, root, present, removed)
            return self._info(InfoMessage.STAGED)

        return self._run("stage_all", action, OperationResult.failed)

    def stage(
        self, paths: str | os.PathLike[str] | Iterable[str | os.PathLike[str]]
    ) -> OperationResult:
        """Stage specific paths.

        Args:
            paths: One path or an iterable of paths, relative to the working
                tree root or absolute inside it. Directories (including the
                root itself, ``"."``) stage everything beneath them, deletions
                included.

        Returns:
            Success (also for an empty iterable, which leaves the index
            untouched), or PATH_NOT_FOUND naming every invalid or ignored
            untracked path. Nothing is staged unless every path is valid.
        """
        requested = _split_paths(paths)

        def action() -> OperationResult:
            repo = self._require_repo()
            if not requested:
                return self._info(InfoMessage.STAGED)

            index = repo.open_index()
            tracked = [decode_path(p) for p in index.paths()]
            root = worktree_root(repo).resolve()
            present: list[str] = []
            removed: list[str] = []
            invalid: list[str] = []
            for raw in requested:
                name = self._relative_name(repo, root, raw)
                if name is None:
                    invalid.append(raw)
                elif os.path.lexists(root / name):
                    present.append(name)
                    if (root / name).is_dir():
                        removed.extend(
                            p
                            for p in _tracked_beneath(tracked, name)
                            if not os.path.lexists(root / p)
                        )
                else:
                    matches = _tracked_beneath(tracked, name)
                    if matches:
                        removed.extend(matches)
                    else:
                        invalid.append(raw)
            if invalid:
                raise RepositoryOperationError(
                    FailureCategory.PATH_NOT_FOUND,
                    f"invalid paths: {invalid}",
                    paths=", ".join(invalid),
                )
            ignored = ignored_untracked(repo, present)
            if ignored:
                raise RepositoryOperationError(
                    FailureCategory.PATH_NOT_FOUND,
                    f"ignored paths: {ignored}",
                    paths=", ".join(ignored),
                )
            self._apply_staging(repo, root, present, sorted(set(removed)))
            return self._info(InfoMessage.STAGED)

        return self._run("stage", action, OperationResult.failed)

    def _relative_name(self, repo: Repo, root: Path, raw: str) -> str | None:
        """Map a caller path to a repository-relative name, or None if invalid."""
        candidate = Path(raw)
        bases = (root, Path(decode_path(repo.path)).absolute())
        for base in bases:
            absolute = candidate if candidate.is_absolute() else base / candidate
            normalized = Path(os.path.normpath(absolute))
            try:
                relative = normalized.relative_to(base)
            except ValueError:
                continue
            if not relative.parts:
                return "."
            if relative.parts[0] == ".git":
                return None
            return relative.as_posix()
        return None

    @staticmethod
    def _apply_staging(
        repo: Repo, root: Path, present: list[str], removed: list[str]
    ) -> None:
        if present:
            _ = porcelain.add(repo, paths=[str(root / name) for name in present])
        if removed:
            remove_from_index(repo, removed)

    # =========================================================================
    # Commit
    # =========================================================================

    def commit(
        self, message: str, author_name: str, author_email: str
    ) -> OperationResult:
        """Commit the staged changes on the current branch.

        Args:
            message: Commit message.
            author_name: Author and committer name.
            author_email: Author and committer email.

        Returns:
            Success with the short SHA, INVALID_AUTHOR, or COMMIT_FAILED when
            the index has conflicts, the message is blank, nothing is staged
            or a hook rejects the commit.
        """

        def action() -> OperationResult:
            if not author_name.strip() or not author_email.strip():
                msg = "author name and email are required"
                raise RepositoryOperationError(FailureCategory.INVALID_AUTHOR, msg)
            repo = self._require_repo()
            conflicts = conflicted_paths(repo.open_index())
            if conflicts:
                raise RepositoryOperationError(
                    FailureCategory.COMMIT_FAILED,
                    f"unresolved conflicts: {sorted(conflicts)}",
                    paths=", ".join(sorted(conflicts)),
                )
            if not message.strip():
                msg = "commit message is empty"
                raise RepositoryOperationError(FailureCategory.COMMIT_FAILED, msg)
            merging = merge_in_progress(repo)
            if not merging and not collect_status(repo).staged:
                msg = "nothing staged"
                raise RepositoryOperationError(FailureCategory.COMMIT_FAILED, msg)

            signature = Signature.now(author_name.strip(), author_email.strip())
            try:
                sha = porcelain.commit(
                    repo,
                    message=message.encode(),
                    author=signature.identity,
                    author_timezone=signature.utc_offset,
                    committer=signature.identity,
                    commit_timezone=signature.utc_offset,
                )
            except (CommitError, HookError) as e:
                raise RepositoryOperationError(
                    FailureCategory.COMMIT_FAILED, str(e)
                ) from e
            if merging:
                clear_merge_head(repo)
            short_sha = decode_path(sha)[:_SHORT_SHA_LENGTH]
            return self._info(InfoMessage.COMMITTED, sha=short_sha)

        return self._run("commit", action, OperationResult.failed)

    # =========================================================================
    # Remote operations
    # =========================================================================

    def _checked_out_branch(self, repo: Repo) -> str:
        branch = current_branch(repo)
        if branch is None:
            msg = "HEAD is detached"
            raise RepositoryOperationError(FailureCategory.NO_CURRENT_BRANCH, msg)
        return branch

    def push(self, *, cancel: CancellationToken | None = None) -> OperationResult:
        """Push the current branch to its configured upstream.

        Returns:
            Success, NO_CURRENT_BRANCH, NO_UPSTREAM, PUSH_REJECTED or CANCELLED.
        """

        def action() -> OperationResult:
            repo = self._require_repo()
            branch = self._checked_out_branch(repo)
            if local_branch_sha(repo, branch) is None:
                msg = f"branch {branch} has no commits"
                raise RepositoryOperationError(FailureCategory.NO_CURRENT_BRANCH, msg)
            upstream = branch_upstream(repo, branch)
            if upstream is None:
                raise RepositoryOperationError(
                    FailureCategory.NO_UPSTREAM,
                    f"branch.{branch}.remote/merge not configured",
                    branch=branch,
                )
            remote, merge_ref = upstream
            if cancel is not None:
                cancel.raise_if_cancelled()

            stream = ProgressStream(cancel)
            try:
                _ = porcelain.push(
                    repo,
                    remote_location=decode_path(remote),
                    refspecs=[branch_ref(branch) + b":" + merge_ref],
                    outstream=stream,
                    errstream=stream,
                )
            except _REMOTE_ERRORS as e:
                raise RepositoryOperationError(
                    FailureCategory.PUSH_REJECTED,
                    str(e),
                    branch=branch,
                    remote=decode_path(remote),
                ) from e
            return self._info(InfoMessage.PUSHED, branch=branch)

        return self._run("push", action, OperationResult.failed)

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
        """Fetch from a named remote and merge into the current branch.

        Args:
            remote_name: Configured remote to fetch from (e.g. ``"origin"``).
            ref_spec: Remote ref to merge. A bare name such as ``"main"`` means
                ``refs/heads/main``. Empty uses the branch's configured
                ``merge`` ref.
            user: Name for the merge commit signature.
            email: Email for the merge commit signature.
            options: Fast-forward policy and merge strategy.
            cancel: Optional cancellation token.

        Returns:
            Success (possibly "Already up to date."), or INVALID_AUTHOR,
            NO_CURRENT_BRANCH, NO_UPSTREAM, FETCH_FAILED, BRANCH_NOT_FOUND,
            MERGE_CONFLICT or CANCELLED.
        """
        effective = options if options is not None else PullOptions()

        def action() -> OperationResult:
            if not user.strip() or not email.strip():
                msg = "author name and email are required"
                raise RepositoryOperationError(FailureCategory.INVALID_AUTHOR, msg)
            repo = self._require_repo()
            branch = self._checked_out_branch(repo)
            if remote_url(repo, remote_name) is None:
                raise RepositoryOperationError(
                    FailureCategory.NO_UPSTREAM,
                    f"remote {remote_name!r} is not configured",
                    branch=branch,
                    remote=remote_name,
                )
            ref = self._resolve_pull_ref(repo, branch, ref_spec)
            conflicts = conflicted_paths(repo.open_index())
            if conflicts:
                raise RepositoryOperationError(
                    FailureCategory.MERGE_CONFLICT,
                    f"unresolved conflicts: {sorted(conflicts)}",
                )
            if cancel is not None:
                cancel.raise_if_cancelled()

            stream = ProgressStream(cancel)
            try:
                fetched = porcelain.fetch(
                    repo,
                    remote_location=remote_name,
                    outstream=stream,
                    errstream=stream,
                )
            except _REMOTE_ERRORS as e:
                raise RepositoryOperationError(
                    FailureCategory.FETCH_FAILED, str(e), remote=remote_name
                ) from e
            remote_sha: bytes | None = fetched.refs.get(ref)
            if remote_sha is None:
                raise RepositoryOperationError(
                    FailureCategory.BRANCH_NOT_FOUND,
                    f"{decode_path(ref)} not found on {remote_name}",
                    branch=decode_path(ref).removeprefix("refs/heads/"),
                )
            if cancel is not None:
                cancel.raise_if_cancelled()

            signature = Signature.now(user.strip(), email.strip())
            message = effective.message or (
                f"Merge {decode_path(ref)} of {remote_name} into {branch}"
            )
            return self._integrate(
                repo, branch, remote_sha, signature, effective, message
            )

        return self._run("pull", action, OperationResult.failed)

    @staticmethod
    def _resolve_pull_ref(repo: Repo, branch: str, ref_spec: str) -> bytes:
        spec = ref_spec.strip()
        if spec:
            if spec.startswith("refs/"):
                return spec.encode()
            return branch_ref(spec)
        upstream = branch_upstream(repo, branch)
        if upstream is None:
            raise RepositoryOperationError(
                FailureCategory.NO_UPSTREAM,
                f"branch.{branch}.merge not configured",
                branch=branch,
            )
        return upstream[1]

    def _integrate(  # noqa: PLR0913
        self,
        repo: Repo,
        branch: str,
        remote_sha: bytes,
        signature: Signature,
        options: PullOptions,
        message: str,
    ) -> OperationResult:
        """Merge a fetched commit into the checked-out branch."""
        head = head_sha(repo)
        if head is None:
            # Unborn branch: adopt the fetched history as-is.
            self._refuse_overwrite(repo, None, remote_sha)
            repo.refs[branch_ref(branch)] = remote_sha
            porcelain.reset(repo, "hard", remote_sha)
            return self._info(InfoMessage.PULLED, branch=branch)

        if head == remote_sha or can_fast_forward(repo, remote_sha, head):
            return self._info(InfoMessage.UP_TO_DATE, branch=branch)

        if options.fast_forward is FastForwardPolicy.ONLY and not can_fast_forward(
            repo, head, remote_sha
        ):
            msg = "histories diverged and only fast-forward is allowed"
            raise RepositoryOperationError(FailureCategory.MERGE_CONFLICT, msg)

        bases = find_merge_base(repo, [head, remote_sha])
        base = bases[0] if bases else None
        self._refuse_overwrite(repo, base, remote_sha)

        stage_only = options.strategy is MergeStrategy.STAGE_ONLY
        try:
            merge_id, conflicts = porcelain.merge(
                repo,
                remote_sha,
                no_commit=stage_only,
                no_ff=options.fast_forward is FastForwardPolicy.NEVER,
                message=message.encode(),
                author=signature.identity,
                committer=signature.identity,
            )
        except WorkingTreeModifiedError as e:
            # A fast-forward moves the branch before touching the tree.
            repo.refs[branch_ref(branch)] = head
            raise RepositoryOperationError(
                FailureCategory.MERGE_CONFLICT, str(e), branch=branch
            ) from e
        if conflicts:
            record_conflicts(
                repo,
                conflicts,
                base_tree=commit_tree(repo, base),
                ours_tree=commit_tree(repo, head),
                theirs_tree=commit_tree(repo, remote_sha),
            )
            write_merge_head(repo, remote_sha)
            names = sorted(decode_path(path) for path in conflicts)
            raise RepositoryOperationError(
                FailureCategory.MERGE_CONFLICT,
                f"conflicting paths: {names}",
                paths=", ".join(names),
            )
        if merge_id is None and stage_only:
            write_merge_head(repo, remote_sha)
            return self._info(InfoMessage.PULLED_UNCOMMITTED, branch=branch)
        return self._info(InfoMessage.PULLED, branch=branch)

    def _refuse_overwrite(self, repo: Repo, base: bytes | None, remote: bytes) -> None:
        """Fail the pull if bringing in ``remote`` would clobber local work."""
        blockers = self._overwrite_blockers(
            repo, commit_tree(repo, base), commit_tree(repo, remote)
        )
        if blockers:
            raise RepositoryOperationError(
                FailureCategory.MERGE_CONFLICT,
                f"local changes would be overwritten: {blockers}",
                paths=", ".join(blockers),
            )

    # =========================================================================
    # Branches
    # =========================================================================

    def checkout_branch(self, branch_name: str) -> OperationResult:
        """Switch the working tree to a local branch.

        Nothing is touched if the switch would overwrite uncommitted changes
        or untracked files, or if the index has unresolved conflicts.

        Returns:
            Success, BRANCH_NOT_FOUND or CHECKOUT_CONFLICT.
        """

        def action() -> OperationResult:
            repo = self._require_repo()
            target = local_branch_sha(repo, branch_name) if branch_name else None
            if target is None:
                raise RepositoryOperationError(
                    FailureCategory.BRANCH_NOT_FOUND,
                    f"refs/heads/{branch_name} does not exist",
                    branch=branch_name,
                )
            if current_branch(repo) == branch_name:
                return self._info(InfoMessage.ALREADY_ON_BRANCH, branch=branch_name)

            blockers = self._overwrite_blockers(
                repo, commit_tree(repo, head_sha(repo)), commit_tree(repo, target)
            )
            if blockers:
                raise RepositoryOperationError(
                    FailureCategory.CHECKOUT_CONFLICT,
                    f"would overwrite: {blockers}",
                    branch=branch_name,
                    paths=", ".join(blockers),
                )
            try:
                porcelain.checkout(repo, branch_name)
            except (porcelain.CheckoutError, WorkingTreeModifiedError) as e:
                raise RepositoryOperationError(
                    FailureCategory.CHECKOUT_CONFLICT,
                    str(e),
                    branch=branch_name,
                    paths=str(e),
                ) from e
            return self._info(InfoMessage.CHECKED_OUT, branch=branch_name)

        return self._run("checkout_branch", action, OperationResult.failed)

    @staticmethod
    def _overwrite_blockers(
        repo: Repo, old_tree: bytes | None, new_tree: bytes | None
    ) -> list[str]:
        """Local paths that moving the working tree to ``new_tree`` would destroy.

        A path blocks when it differs between the two trees and either has
        uncommitted changes or exists untracked on disk. An untracked or
        modified file standing where the new tree needs a directory blocks
        too. Any unresolved conflict blocks everything.
        """
        index = repo.open_index()
        conflicts = conflicted_paths(index)
        if conflicts:
            return sorted(conflicts)

        view = collect_status(repo)
        changed = changed_paths(repo, old_tree, new_tree)
        dirty = set(view.staged | view.modified | view.deleted)
        dirty.update(e.renamed_from for e in view.entries if e.renamed_from)

        root = worktree_root(repo)
        blockers = changed & dirty
        for name in changed:
            if encode_path(name) not in index and os.path.lexists(root / name):
                blockers.add(name)
            for parent in _parent_names(name):
                local = root / parent
                if not os.path.lexists(local) or local.is_dir():
                    continue
                if encode_path(parent) not in index or parent in dirty:
                    blockers.add(parent)
        return sorted(blockers)
