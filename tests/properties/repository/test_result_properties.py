"""Property-based tests for result envelopes and message rendering.

- Failed results always carry a category and a non-empty message
- Successful results never carry a category
- Status views partition paths by state consistently
- Message templates never raise, whatever parameters are supplied
"""

import pytest
from hypothesis import given, strategies as st

from nyargit.repository import (
    DEFAULT_MESSAGES,
    FailureCategory,
    FileState,
    InfoMessage,
    OperationResult,
    RepositoryStatusView,
    StagedPathsResult,
    StatusEntry,
    StatusSnapshot,
)

# =============================================================================
# Strategies
# =============================================================================

categories = st.sampled_from(list(FailureCategory))
non_blank_text = st.text(min_size=1).filter(lambda s: s.strip() != "")
plain_text = st.text(
    alphabet=st.characters(exclude_characters="{}"), min_size=1
).filter(lambda s: s.strip() != "")
blank_text = st.sampled_from(["", " ", "\t", "\n  "])

path_names = st.text(alphabet="abcdefghij/._-", min_size=1, max_size=12)
state_sets = st.frozensets(st.sampled_from(list(FileState)), min_size=1)
status_views = st.dictionaries(path_names, state_sets, max_size=8).map(
    lambda states: RepositoryStatusView(
        entries=tuple(
            StatusEntry(path, path_states)
            for path, path_states in sorted(states.items())
        )
    )
)

# Values substituted into message templates
template_params = st.dictionaries(
    st.sampled_from(["path", "paths", "branch", "remote", "sha", "other"]),
    st.one_of(st.text(), st.integers(), st.none()),
)


# =============================================================================
# Result envelopes
# =============================================================================


@given(category=categories, message=non_blank_text)
def test_failed_result_keeps_category_and_message(
    category: FailureCategory, message: str
) -> None:
    for factory in (OperationResult.failed, StatusSnapshot.failed):
        result = factory(category, message)

        assert result.success is False
        assert result.category is category
        assert result.message == message


@given(category=categories, message=blank_text)
def test_failed_result_rejects_blank_message(
    category: FailureCategory, message: str
) -> None:
    with pytest.raises(ValueError, match="non-empty message"):
        _ = OperationResult.failed(category, message)


@given(category=categories, message=st.text())
def test_success_rejects_category(category: FailureCategory, message: str) -> None:
    with pytest.raises(ValueError, match="must not carry"):
        _ = StagedPathsResult(success=True, message=message, category=category)


@given(category=categories, message=non_blank_text)
def test_failed_listing_has_no_paths(category: FailureCategory, message: str) -> None:
    assert StagedPathsResult.failed(category, message).paths == ()


# =============================================================================
# Status views
# =============================================================================


@given(view=status_views)
def test_state_sets_match_entries(view: RepositoryStatusView) -> None:
    for entry in view.entries:
        assert view.state_of(entry.path) == entry.states
        for state in FileState:
            assert (entry.path in view.paths_with(state)) == (state in entry.states)


@given(view=status_views)
def test_clean_means_only_ignored(view: RepositoryStatusView) -> None:
    reported = (
        view.staged
        | view.modified
        | view.untracked
        | view.deleted
        | view.renamed
        | view.conflicted
    )

    assert view.is_clean == (not reported)
    assert view.has_conflicts == bool(view.conflicted)


# =============================================================================
# Message rendering
# =============================================================================


@given(category=categories, params=template_params)
def test_failure_messages_render_non_empty(
    category: FailureCategory, params: dict[str, object]
) -> None:
    assert DEFAULT_MESSAGES.failure(category, **params).strip()


@given(key=st.sampled_from(list(InfoMessage)), params=template_params)
def test_info_messages_never_raise(
    key: InfoMessage, params: dict[str, object]
) -> None:
    assert isinstance(DEFAULT_MESSAGES.info(key, **params), str)


@given(category=categories, text=plain_text)
def test_override_replaces_only_its_category(
    category: FailureCategory, text: str
) -> None:
    table = DEFAULT_MESSAGES.with_overrides({category.value: text})

    assert table.failure(category) == text

    for other in FailureCategory:
        if other is not category:
            assert table.failure(other) == DEFAULT_MESSAGES.failure(other)
