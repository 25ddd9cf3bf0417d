"""Unit tests for cancellation tokens and progress streams."""

import io
import threading

import pytest

from nyargit.exceptions import OperationCancelledError
from nyargit.repository import CancellationToken, ProgressStream


class TestCancellationToken:
    def test_starts_uncancelled(self) -> None:
        token = CancellationToken()

        assert token.cancelled is False
        token.raise_if_cancelled()

    def test_cancel_is_idempotent(self) -> None:
        token = CancellationToken()

        token.cancel()
        token.cancel()

        assert token.cancelled is True

    def test_raise_if_cancelled(self) -> None:
        token = CancellationToken()
        token.cancel()

        with pytest.raises(OperationCancelledError):
            token.raise_if_cancelled()

    def test_cancel_from_another_thread(self) -> None:
        token = CancellationToken()

        thread = threading.Thread(target=token.cancel)
        thread.start()
        thread.join()

        assert token.cancelled is True

    def test_repr(self) -> None:
        assert repr(CancellationToken()) == "CancellationToken(cancelled=False)"


class TestProgressStream:
    def test_discards_without_sink(self) -> None:
        stream = ProgressStream()

        assert stream.write(b"Counting objects") == 16
        stream.flush()

    def test_forwards_bytes_to_sink(self) -> None:
        sink = io.BytesIO()
        stream = ProgressStream(sink=sink)

        _ = stream.write(b"abc")
        _ = stream.write("def")

        assert sink.getvalue() == b"abcdef"

    def test_write_raises_once_cancelled(self) -> None:
        token = CancellationToken()
        stream = ProgressStream(token)
        _ = stream.write(b"before")

        token.cancel()

        with pytest.raises(OperationCancelledError):
            _ = stream.write(b"after")

    def test_flush_raises_once_cancelled(self) -> None:
        token = CancellationToken()
        token.cancel()

        with pytest.raises(OperationCancelledError):
            ProgressStream(token).flush()
