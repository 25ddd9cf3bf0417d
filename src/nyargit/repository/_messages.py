"""Failure categories and the user-facing message resource table.

The gateway never writes failure prose inline. It raises or returns a
``FailureCategory`` and looks the text up here, so message wording can
change (or be localized through configuration) without touching gateway
logic, and tests can assert on the category instead of exact prose.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Final, Self


class FailureCategory(StrEnum):
    """Failure categories reported by the repository gateway."""

    NOT_A_REPOSITORY = "not_a_repository"
    ALREADY_EXISTS = "already_exists"
    PATH_NOT_FOUND = "path_not_found"
    INVALID_AUTHOR = "invalid_author"
    COMMIT_FAILED = "commit_failed"
    NO_CURRENT_BRANCH = "no_current_branch"
    NO_UPSTREAM = "no_upstream"
    PUSH_REJECTED = "push_rejected"
    MERGE_CONFLICT = "merge_conflict"
    BRANCH_NOT_FOUND = "branch_not_found"
    CHECKOUT_CONFLICT = "checkout_conflict"
    CLONE_FAILED = "clone_failed"
    FETCH_FAILED = "fetch_failed"
    CANCELLED = "cancelled"
    DISPOSED = "disposed"
    ENGINE_FAULT = "engine_fault"


class InfoMessage(StrEnum):
    """Informational notes attached to successful results."""

    OPENED = "opened"
    CLONED = "cloned"
    STAGED = "staged"
    NOTHING_TO_STAGE = "nothing_to_stage"
    COMMITTED = "committed"
    PUSHED = "pushed"
    PULLED = "pulled"
    PULLED_UNCOMMITTED = "pulled_uncommitted"
    UP_TO_DATE = "up_to_date"
    CHECKED_OUT = "checked_out"
    ALREADY_ON_BRANCH = "already_on_branch"


DEFAULT_FAILURE_MESSAGES: Final[Mapping[FailureCategory, str]] = MappingProxyType(
    {
        FailureCategory.NOT_A_REPOSITORY: "No Git repository found at {path}.",
        FailureCategory.ALREADY_EXISTS: "Repository already exists at {path}.",
        FailureCategory.PATH_NOT_FOUND: "Path not found or ignored: {paths}.",
        FailureCategory.INVALID_AUTHOR: "Author name and email must not be empty.",
        FailureCategory.COMMIT_FAILED: "Failed to commit changes.",
        FailureCategory.NO_CURRENT_BRANCH: "No branch is currently checked out.",
        FailureCategory.NO_UPSTREAM: "No upstream is configured for branch {branch}.",
        FailureCategory.PUSH_REJECTED: "Failed to push changes: the remote rejected the update.",  # noqa: E501
        FailureCategory.MERGE_CONFLICT: "Failed to pull changes: automatic merge did not complete.",  # noqa: E501
        FailureCategory.BRANCH_NOT_FOUND: "Branch {branch} does not exist.",
        FailureCategory.CHECKOUT_CONFLICT: "Checkout would overwrite local changes: {paths}.",  # noqa: E501
        FailureCategory.CLONE_FAILED: "Failed to clone repository from {remote}.",
        FailureCategory.FETCH_FAILED: "Failed to fetch changes from {remote}.",
        FailureCategory.CANCELLED: "The operation was cancelled.",
        FailureCategory.DISPOSED: "The repository has been closed.",
        FailureCategory.ENGINE_FAULT: "Unexpected version-control engine failure.",
    }
)

DEFAULT_INFO_MESSAGES: Final[Mapping[InfoMessage, str]] = MappingProxyType(
    {
        InfoMessage.OPENED: "",
        InfoMessage.CLONED: "Repository cloned successfully.",
        InfoMessage.STAGED: "",
        InfoMessage.NOTHING_TO_STAGE: "Nothing to stage.",
        InfoMessage.COMMITTED: "Committed {sha}.",
        InfoMessage.PUSHED: "",
        InfoMessage.PULLED: "",
        InfoMessage.PULLED_UNCOMMITTED: "Merged changes are staged but not committed.",
        InfoMessage.UP_TO_DATE: "Already up to date.",
        InfoMessage.CHECKED_OUT: "Switched to branch {branch}.",
        InfoMessage.ALREADY_ON_BRANCH: "Already on {branch}.",
    }
)


_FAILURE_KEYS: Final = frozenset(category.value for category in FailureCategory)
_INFO_KEYS: Final = frozenset(info.value for info in InfoMessage)


class _TemplateParams(dict[str, object]):
    """Format mapping that renders unknown placeholders literally."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def _render(template: str, params: Mapping[str, object]) -> str:
    return template.format_map(_TemplateParams(params))


@dataclass(frozen=True, slots=True)
class MessageTable:
    """Lookup table from failure categories and info notes to message text.

    Templates use ``str.format`` placeholders. Placeholders with no matching
    parameter are left as-is rather than raising.

    Example:
        >>> table = MessageTable()
        >>> table.failure(FailureCategory.BRANCH_NOT_FOUND, branch="dev")
        'Branch dev does not exist.'
    """

    failures: Mapping[FailureCategory, str] = field(
        default_factory=lambda: DEFAULT_FAILURE_MESSAGES
    )
    infos: Mapping[InfoMessage, str] = field(
        default_factory=lambda: DEFAULT_INFO_MESSAGES
    )

    def failure(self, category: FailureCategory, **params: object) -> str:
        """Render the message for a failure category.

        Args:
            category: The failure category.
            **params: Template parameters.

        Returns:
            The rendered, non-empty message.
        """
        template = self.failures.get(category) or DEFAULT_FAILURE_MESSAGES[category]
        return _render(template, params)

    def info(self, key: InfoMessage, **params: object) -> str:
        """Render an informational note (may be empty)."""
        return _render(self.infos.get(key, DEFAULT_INFO_MESSAGES[key]), params)

    def with_overrides(self, overrides: Mapping[str, str]) -> Self:
        """Return a copy with some messages replaced.

        Args:
            overrides: Mapping of category or info key (e.g. ``"push_rejected"``,
                ``"cloned"``) to replacement text.

        Returns:
            A new MessageTable.

        Raises:
            ValueError: If a key is unknown, or a failure message is blank.
        """
        failures = dict(self.failures)
        infos = dict(self.infos)
        for key, text in overrides.items():
            if key in _FAILURE_KEYS:
                if not text.strip():
                    msg = f"Failure message for {key!r} must not be empty"
                    raise ValueError(msg)
                failures[FailureCategory(key)] = text
            elif key in _INFO_KEYS:
                infos[InfoMessage(key)] = text
            else:
                msg = f"Unknown message key: {key!r}"
                raise ValueError(msg)
        return type(self)(
            failures=MappingProxyType(failures), infos=MappingProxyType(infos)
        )


DEFAULT_MESSAGES: Final = MessageTable()
