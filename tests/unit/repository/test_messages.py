"""Unit tests for the message resource table."""

import pytest

from nyargit.repository import (
    DEFAULT_MESSAGES,
    FailureCategory,
    InfoMessage,
    MessageTable,
)


class TestDefaultMessages:
    @pytest.mark.parametrize("category", list(FailureCategory))
    def test_every_category_has_non_empty_text(
        self, category: FailureCategory
    ) -> None:
        assert DEFAULT_MESSAGES.failure(category).strip()

    def test_every_info_key_has_an_entry(self) -> None:
        for key in InfoMessage:
            assert isinstance(DEFAULT_MESSAGES.info(key), str)

    def test_renders_parameters(self) -> None:
        message = DEFAULT_MESSAGES.failure(
            FailureCategory.BRANCH_NOT_FOUND, branch="feature"
        )

        assert message == "Branch feature does not exist."

    def test_missing_parameter_is_left_literal(self) -> None:
        message = DEFAULT_MESSAGES.failure(FailureCategory.BRANCH_NOT_FOUND)

        assert message == "Branch {branch} does not exist."

    def test_committed_note_carries_sha(self) -> None:
        assert DEFAULT_MESSAGES.info(InfoMessage.COMMITTED, sha="abc1234") == (
            "Committed abc1234."
        )

    def test_up_to_date_note(self) -> None:
        assert DEFAULT_MESSAGES.info(InfoMessage.UP_TO_DATE) == "Already up to date."


class TestWithOverrides:
    def test_overrides_failure_text(self) -> None:
        table = DEFAULT_MESSAGES.with_overrides({"push_rejected": "Nope: {branch}"})

        assert table.failure(FailureCategory.PUSH_REJECTED, branch="main") == (
            "Nope: main"
        )

    def test_overrides_info_text(self) -> None:
        table = DEFAULT_MESSAGES.with_overrides({"staged": "Staged."})

        assert table.info(InfoMessage.STAGED) == "Staged."

    def test_does_not_modify_original(self) -> None:
        _ = DEFAULT_MESSAGES.with_overrides({"cancelled": "Stopped."})

        assert DEFAULT_MESSAGES.failure(FailureCategory.CANCELLED) == (
            "The operation was cancelled."
        )

    def test_unknown_key_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown message key"):
            _ = DEFAULT_MESSAGES.with_overrides({"no_such_key": "text"})

    def test_blank_failure_text_raises(self) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            _ = DEFAULT_MESSAGES.with_overrides({"merge_conflict": "  "})

    def test_blank_info_text_is_allowed(self) -> None:
        table = DEFAULT_MESSAGES.with_overrides({"cloned": ""})

        assert table.info(InfoMessage.CLONED) == ""

    def test_empty_table_falls_back_to_defaults(self) -> None:
        table = MessageTable(failures={}, infos={})

        assert table.failure(FailureCategory.DISPOSED) == (
            DEFAULT_MESSAGES.failure(FailureCategory.DISPOSED)
        )
        assert table.info(InfoMessage.UP_TO_DATE) == "Already up to date."
