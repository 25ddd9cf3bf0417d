"""Cooperative cancellation for network operations.

dulwich gives no way to interrupt a running fetch or push, but it reports
progress by writing to a caller-supplied byte stream. ``ProgressStream`` is
that stream: once its token is cancelled, the next progress write raises
``OperationCancelledError`` and unwinds the engine call.
"""

import threading
from typing import TYPE_CHECKING, Final, override

from nyargit.exceptions import OperationCancelledError

if TYPE_CHECKING:
    from typing import BinaryIO


class CancellationToken:
    """Thread-safe cancellation flag shared between a caller and the gateway.

    Example:
        >>> token = CancellationToken()
        >>> token.cancelled
        False
        >>> token.cancel()
        >>> token.cancelled
        True
    """

    __slots__: Final = ("_event",)

    def __init__(self) -> None:
        self._event: threading.Event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation. Safe to call from any thread, more than once."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise OperationCancelledError if cancellation was requested."""
        if self._event.is_set():
            msg = "Operation cancelled"
            raise OperationCancelledError(msg)

    @override
    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled})"


class ProgressStream:
    """Progress sink that aborts the engine call once cancelled.

    Some dulwich calls write text to their output stream, so both bytes and
    str are accepted. Progress is forwarded to ``sink`` when one is given,
    otherwise discarded.
    """

    def __init__(
        self,
        token: CancellationToken | None = None,
        sink: BinaryIO | None = None,
    ) -> None:
        self._token: CancellationToken | None = token
        self._sink: BinaryIO | None = sink

    def write(self, data: bytes | str) -> int:
        if self._token is not None:
            self._token.raise_if_cancelled()
        if self._sink is not None:
            _ = self._sink.write(data.encode() if isinstance(data, str) else data)
        return len(data)

    def flush(self) -> None:
        if self._token is not None:
            self._token.raise_if_cancelled()
        if self._sink is not None:
            self._sink.flush()
