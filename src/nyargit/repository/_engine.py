"""Thin adapters over dulwich used by the repository gateway.

Every function here works on an open ``dulwich.repo.Repo`` and assumes the
caller holds the gateway lock. Nothing in this module returns results or
logs: dulwich exceptions propagate and are classified by the gateway.
"""

# ruff: noqa: TC002  # Repo needed at runtime
import os
from collections import defaultdict
from pathlib import Path
from typing import TYPE_CHECKING, Final

from dulwich import porcelain
from dulwich.diff_tree import tree_changes
from dulwich.errors import NotGitRepository
from dulwich.index import ConflictedIndexEntry, IndexEntry, get_unstaged_changes
from dulwich.ignore import IgnoreFilterManager
from dulwich.object_store import iter_tree_contents, tree_lookup_path
from dulwich.repo import Repo

from nyargit.repository._models import FileState, RepositoryStatusView, StatusEntry

if TYPE_CHECKING:
    from collections.abc import Iterable

    from dulwich.index import Index

_REFS_HEADS: Final = b"refs/heads/"
_MERGE_HEAD: Final = "MERGE_HEAD"


def decode_path(value: bytes | str) -> str:
    """Decode a tree path to a string."""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="surrogateescape")
    return value


def encode_path(value: str) -> bytes:
    """Encode a repository-relative path to a tree path."""
    return value.encode("utf-8", errors="surrogateescape")


def branch_ref(name: str) -> bytes:
    """Return the full local branch ref for a branch name."""
    return _REFS_HEADS + name.encode()


# =============================================================================
# Repository discovery
# =============================================================================


def is_valid_repository(path: Path) -> bool:
    """Check whether a usable, non-bare repository exists at path.

    The directory must exist, dulwich must be able to open it, and its control
    directory must contain ``HEAD``, ``objects/`` and ``refs/``.

    Args:
        path: Candidate working tree root.

    Returns:
        True if a repository is present.
    """
    if not path.is_dir():
        return False
    try:
        repo = Repo(str(path))
    except NotGitRepository:
        return False
    try:
        controldir = Path(repo.controldir())
        return (
            (controldir / "HEAD").is_file()
            and (controldir / "objects").is_dir()
            and (controldir / "refs").is_dir()
        )
    finally:
        repo.close()


def worktree_root(repo: Repo) -> Path:
    """Return the working tree root of an open repository."""
    return Path(decode_path(repo.path))


# =============================================================================
# Refs
# =============================================================================


def current_branch(repo: Repo) -> str | None:
    """Get the checked-out branch name.

    An unborn branch (no commits yet) still reports its name.

    Returns:
        Branch name without ``refs/heads/``, or None if HEAD is detached.
    """
    head_ref = repo.refs.get_symrefs().get(b"HEAD")
    if head_ref is None or not head_ref.startswith(_REFS_HEADS):
        return None
    return decode_path(head_ref[len(_REFS_HEADS) :])


def head_sha(repo: Repo) -> bytes | None:
    """Get the HEAD commit id as hex bytes, or None for an unborn HEAD."""
    try:
        return repo.head()
    except KeyError:
        return None


def commit_tree(repo: Repo, commit_sha: bytes | None) -> bytes | None:
    """Get the tree id of a commit, or None if there is no commit."""
    if commit_sha is None:
        return None
    tree: bytes | None = getattr(repo[commit_sha], "tree", None)
    return tree


def local_branch_sha(repo: Repo, name: str) -> bytes | None:
    """Resolve a local branch to its tip, or None if it does not exist."""
    try:
        return repo.refs[branch_ref(name)]
    except KeyError:
        return None


# =============================================================================
# Config
# =============================================================================


def _config_value(repo: Repo, section: tuple[bytes, ...], name: bytes) -> bytes | None:
    try:
        value = repo.get_config().get(section, name)
    except KeyError:
        return None
    return value or None


def branch_upstream(repo: Repo, branch: str) -> tuple[bytes, bytes] | None:
    """Read ``branch.<name>.remote`` and ``branch.<name>.merge``.

    Returns:
        Tuple of (remote name, merge ref), or None if either is unset.
    """
    section = (b"branch", branch.encode())
    remote = _config_value(repo, section, b"remote")
    merge = _config_value(repo, section, b"merge")
    if remote is None or merge is None:
        return None
    return remote, merge


def remote_url(repo: Repo, remote: str) -> bytes | None:
    """Read ``remote.<name>.url``, or None if the remote is not configured."""
    return _config_value(repo, (b"remote", remote.encode()), b"url")


# =============================================================================
# Trees and index
# =============================================================================


def tree_blobs(repo: Repo, tree_sha: bytes | None) -> dict[bytes, bytes]:
    """Map every file path in a tree to its blob id."""
    if tree_sha is None:
        return {}
    return {
        entry.path: entry.sha
        for entry in iter_tree_contents(repo.object_store, tree_sha)
        if entry.path is not None and entry.sha is not None
    }


def changed_paths(
    repo: Repo, old_tree: bytes | None, new_tree: bytes | None
) -> set[str]:
    """Paths that differ between two trees (either side may be None)."""
    paths: set[str] = set()
    for change in tree_changes(repo.object_store, old_tree, new_tree):
        for side in (change.old, change.new):
            if side is not None and side.path is not None:
                paths.add(decode_path(side.path))
    return paths


def conflicted_paths(index: Index) -> set[str]:
    """Paths that carry unmerged stages in the index."""
    return {
        decode_path(path)
        for path, entry in index.items()
        if isinstance(entry, ConflictedIndexEntry)
    }


def _stage_entry(repo: Repo, tree_sha: bytes | None, path: bytes) -> IndexEntry | None:
    if tree_sha is None:
        return None
    try:
        mode, sha = tree_lookup_path(repo.__getitem__, tree_sha, path)
    except KeyError:
        return None
    size = len(getattr(repo[sha], "data", b""))
    return IndexEntry(
        ctime=(0, 0),
        mtime=(0, 0),
        dev=0,
        ino=0,
        mode=mode,
        uid=0,
        gid=0,
        size=size,
        sha=sha,
        flags=0,
    )


def record_conflicts(
    repo: Repo,
    paths: Iterable[bytes],
    *,
    base_tree: bytes | None,
    ours_tree: bytes | None,
    theirs_tree: bytes | None,
) -> None:
    """Write unmerged stages (base, ours, theirs) for the given paths."""
    index = repo.open_index()
    for path in paths:
        index[path] = ConflictedIndexEntry(
            ancestor=_stage_entry(repo, base_tree, path),
            this=_stage_entry(repo, ours_tree, path),
            other=_stage_entry(repo, theirs_tree, path),
        )
    index.write()


def remove_from_index(repo: Repo, paths: Iterable[str]) -> None:
    """Stage deletions by dropping index entries."""
    index = repo.open_index()
    for path in paths:
        tree_path = encode_path(path)
        if tree_path in index:
            del index[tree_path]
    index.write()


def ignored_untracked(repo: Repo, names: Iterable[str]) -> list[str]:
    """Names absent from the index that an ignore rule excludes.

    ``porcelain.add`` silently skips such paths, so callers that stage
    explicit paths check them first. Directories are matched with a
    trailing slash, the way git matches them.
    """
    index = repo.open_index()
    root = worktree_root(repo)
    manager = IgnoreFilterManager.from_repo(repo)
    found: list[str] = []
    for name in names:
        if name == "." or encode_path(name) in index:
            continue
        candidate = f"{name}/" if (root / name).is_dir() else name
        if manager.is_ignored(candidate):
            found.append(name)
    return sorted(found)


# =============================================================================
# Merge state
# =============================================================================


def write_merge_head(repo: Repo, sha: bytes) -> None:
    """Record a pending merge so the next commit gets two parents."""
    _ = (Path(repo.controldir()) / _MERGE_HEAD).write_bytes(sha + b"\n")


def merge_in_progress(repo: Repo) -> bool:
    return (Path(repo.controldir()) / _MERGE_HEAD).is_file()


def clear_merge_head(repo: Repo) -> None:
    (Path(repo.controldir()) / _MERGE_HEAD).unlink(missing_ok=True)


# =============================================================================
# Status
# =============================================================================


def _pair_renames(
    added: dict[bytes, bytes], removed: dict[bytes, bytes]
) -> dict[bytes, bytes]:
    """Match staged additions to staged deletions with the same blob.

    Returns:
        Mapping of new path to old path.
    """
    by_sha: dict[bytes, list[bytes]] = defaultdict(list)
    for path in sorted(removed):
        by_sha[removed[path]].append(path)
    renames: dict[bytes, bytes] = {}
    for path in sorted(added):
        candidates = by_sha.get(added[path])
        if candidates:
            renames[path] = candidates.pop(0)
    return renames


def collect_status(
    repo: Repo, *, include_ignored: bool = False
) -> RepositoryStatusView:
    """Build a status view of index and working tree against HEAD.

    porcelain.status refuses to run on an index with unmerged entries, so
    the comparison is done here from the index, the HEAD tree and the
    working tree directly.

    Args:
        repo: Open repository.
        include_ignored: Also report ignored files.

    Returns:
        A RepositoryStatusView sorted by path.
    """
    index = repo.open_index()
    head = head_sha(repo)
    head_blobs = tree_blobs(repo, commit_tree(repo, head))

    states: dict[str, set[FileState]] = defaultdict(set)
    renamed_from: dict[str, str] = {}

    conflicted: set[bytes] = set()
    index_blobs: dict[bytes, bytes] = {}
    for path, entry in index.items():
        if isinstance(entry, ConflictedIndexEntry):
            conflicted.add(path)
        else:
            index_blobs[path] = entry.sha

    added = {p: sha for p, sha in index_blobs.items() if p not in head_blobs}
    removed = {
        p: sha
        for p, sha in head_blobs.items()
        if p not in index_blobs and p not in conflicted
    }
    renames = _pair_renames(added, removed)

    for path in conflicted:
        states[decode_path(path)].add(FileState.CONFLICTED)
    for path, sha in index_blobs.items():
        if path in renames:
            new_path = decode_path(path)
            states[new_path].update((FileState.STAGED, FileState.RENAMED))
            renamed_from[new_path] = decode_path(renames[path])
        elif path in added or head_blobs[path] != sha:
            states[decode_path(path)].add(FileState.STAGED)
    renamed_sources = set(renames.values())
    for path in removed:
        if path not in renamed_sources:
            states[decode_path(path)].update((FileState.STAGED, FileState.DELETED))

    root = worktree_root(repo)
    for path in get_unstaged_changes(index, str(root)):
        if path in conflicted:
            continue
        name = decode_path(path)
        if os.path.lexists(root / name):
            states[name].add(FileState.MODIFIED)
        else:
            states[name].add(FileState.DELETED)

    untracked = {
        Path(p).as_posix()
        for p in porcelain.get_untracked_paths(
            str(root), str(root), index, exclude_ignored=True
        )
    }
    for name in untracked:
        states[name].add(FileState.UNTRACKED)

    if include_ignored:
        for p in porcelain.get_untracked_paths(
            str(root), str(root), index, exclude_ignored=False
        ):
            name = Path(p).as_posix()
            if name not in untracked:
                states[name].add(FileState.IGNORED)

    entries = tuple(
        StatusEntry(
            path=name,
            states=frozenset(path_states),
            renamed_from=renamed_from.get(name),
        )
        for name, path_states in sorted(states.items())
    )
    return RepositoryStatusView(
        entries=entries,
        branch=current_branch(repo),
        head=decode_path(head) if head is not None else None,
    )
