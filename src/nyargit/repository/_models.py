# ruff: noqa: TC003  # datetime needed at runtime for dataclass fields
"""Repository gateway models.

This module defines the result envelopes returned by every gateway
operation, the read-only status view, commit signatures and pull options.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Self

from nyargit.repository._messages import FailureCategory


def _check_outcome(
    success: bool,  # noqa: FBT001
    message: str,
    category: FailureCategory | None,
) -> None:
    """Validate the success/message/category invariants shared by all results.

    Raises:
        ValueError: If a failed result has no message or category, or a
            successful result carries a failure category.
    """
    if success:
        if category is not None:
            msg = f"Successful result must not carry a failure category: {category}"
            raise ValueError(msg)
        return
    if category is None:
        msg = "Failed result requires a failure category"
        raise ValueError(msg)
    if not message.strip():
        msg = "Failed result requires a non-empty message"
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Outcome of a repository operation.

    Attributes:
        success: True if the operation completed.
        message: Human-readable text. Always non-empty on failure; on success
            either empty or an informational note.
        category: The failure category, None on success.
    """

    success: bool
    message: str = ""
    category: FailureCategory | None = None

    def __post_init__(self) -> None:
        _check_outcome(self.success, self.message, self.category)

    @classmethod
    def succeeded(cls, message: str = "") -> Self:
        """Create a successful result with an optional informational note."""
        return cls(success=True, message=message)

    @classmethod
    def failed(cls, category: FailureCategory, message: str) -> Self:
        """Create a failed result."""
        return cls(success=False, message=message, category=category)


class FileState(StrEnum):
    """Per-path states reported in a status view."""

    UNTRACKED = "untracked"
    MODIFIED = "modified"
    STAGED = "staged"
    DELETED = "deleted"
    RENAMED = "renamed"
    IGNORED = "ignored"
    CONFLICTED = "conflicted"


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """Status of a single repository-relative path.

    Attributes:
        path: Repository-relative path using forward slashes.
        states: All states that apply to the path.
        renamed_from: Previous path when the entry is a staged rename.
    """

    path: str
    states: frozenset[FileState]
    renamed_from: str | None = None


@dataclass(frozen=True, slots=True)
class RepositoryStatusView:
    """Read-only snapshot of working tree and index state.

    Attributes:
        entries: Status entries sorted by path. Clean paths have no entry.
        branch: Checked-out branch name, or None when HEAD is detached.
        head: HEAD commit SHA as hex, or None for an empty repository.
    """

    entries: tuple[StatusEntry, ...] = ()
    branch: str | None = None
    head: str | None = None

    def paths_with(self, state: FileState) -> frozenset[str]:
        """Return all paths that have the given state."""
        return frozenset(entry.path for entry in self.entries if state in entry.states)

    def state_of(self, path: str) -> frozenset[FileState]:
        """Return the states of a path (empty if the path is clean or unknown)."""
        for entry in self.entries:
            if entry.path == path:
                return entry.states
        return frozenset()

    @property
    def staged(self) -> frozenset[str]:
        return self.paths_with(FileState.STAGED)

    @property
    def modified(self) -> frozenset[str]:
        return self.paths_with(FileState.MODIFIED)

    @property
    def untracked(self) -> frozenset[str]:
        return self.paths_with(FileState.UNTRACKED)

    @property
    def deleted(self) -> frozenset[str]:
        return self.paths_with(FileState.DELETED)

    @property
    def renamed(self) -> frozenset[str]:
        return self.paths_with(FileState.RENAMED)

    @property
    def ignored(self) -> frozenset[str]:
        return self.paths_with(FileState.IGNORED)

    @property
    def conflicted(self) -> frozenset[str]:
        return self.paths_with(FileState.CONFLICTED)

    @property
    def has_conflicts(self) -> bool:
        return any(FileState.CONFLICTED in entry.states for entry in self.entries)

    @property
    def is_clean(self) -> bool:
        """True if nothing other than ignored files is reported."""
        return all(entry.states == {FileState.IGNORED} for entry in self.entries)


@dataclass(frozen=True, slots=True)
class StatusSnapshot:
    """Outcome of a status query.

    Attributes:
        success: True if the status was retrieved.
        status: The status view. Present if and only if ``success`` is True.
        message: Human-readable text, non-empty on failure.
        category: The failure category, None on success.
    """

    success: bool
    status: RepositoryStatusView | None = None
    message: str = ""
    category: FailureCategory | None = None

    def __post_init__(self) -> None:
        _check_outcome(self.success, self.message, self.category)
        if self.success != (self.status is not None):
            msg = "Status must be present if and only if the query succeeded"
            raise ValueError(msg)

    @classmethod
    def succeeded(cls, status: RepositoryStatusView, message: str = "") -> Self:
        """Create a successful snapshot."""
        return cls(success=True, status=status, message=message)

    @classmethod
    def failed(cls, category: FailureCategory, message: str) -> Self:
        """Create a failed snapshot with no status."""
        return cls(success=False, message=message, category=category)


@dataclass(frozen=True, slots=True)
class StagedPathsResult:
    """Outcome of listing index entries.

    Attributes:
        success: True if the index was read.
        paths: Index entry paths, sorted. Empty on failure.
        message: Human-readable text, non-empty on failure.
        category: The failure category, None on success.
    """

    success: bool
    paths: tuple[str, ...] = ()
    message: str = ""
    category: FailureCategory | None = None

    def __post_init__(self) -> None:
        _check_outcome(self.success, self.message, self.category)

    @classmethod
    def succeeded(cls, paths: tuple[str, ...], message: str = "") -> Self:
        """Create a successful listing."""
        return cls(success=True, paths=paths, message=message)

    @classmethod
    def failed(cls, category: FailureCategory, message: str) -> Self:
        """Create a failed listing."""
        return cls(success=False, message=message, category=category)


@dataclass(frozen=True, slots=True)
class Signature:
    """Identity used for commit authorship.

    Built fresh for every commit or merge, never persisted by the gateway.

    Attributes:
        name: Author name.
        email: Author email.
        timestamp: Timezone-aware time of the signature.
    """

    name: str
    email: str
    timestamp: datetime

    @classmethod
    def now(cls, name: str, email: str) -> Self:
        """Create a signature stamped with the current local time."""
        return cls(name=name, email=email, timestamp=datetime.now().astimezone())

    @property
    def identity(self) -> bytes:
        """Identity line as used in git objects, e.g. ``b"A <a@x.com>"``."""
        return f"{self.name} <{self.email}>".encode()

    @property
    def utc_offset(self) -> int:
        """Offset from UTC in seconds (positive east of UTC)."""
        offset = self.timestamp.utcoffset()
        return int(offset.total_seconds()) if offset is not None else 0


class FastForwardPolicy(StrEnum):
    """How pull integrates when a fast-forward is possible."""

    ALLOW = "allow"
    ONLY = "only"
    NEVER = "never"


class MergeStrategy(StrEnum):
    """How pull records a non-fast-forward integration."""

    MERGE = "merge"
    STAGE_ONLY = "stage-only"


@dataclass(frozen=True, slots=True)
class PullOptions:
    """Options recognised by pull.

    Attributes:
        fast_forward: ALLOW fast-forwards when possible, ONLY refuses anything
            else, NEVER always records a merge commit.
        strategy: MERGE records a merge commit; STAGE_ONLY applies the merged
            tree to the index and working tree and leaves the commit pending.
        message: Optional merge commit message.
    """

    fast_forward: FastForwardPolicy = FastForwardPolicy.ALLOW
    strategy: MergeStrategy = MergeStrategy.MERGE
    message: str | None = field(default=None)
