"""NyarGit exceptions."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

    from nyargit.repository._messages import FailureCategory


class NyarGitError(Exception):
    """Base exception for NyarGit errors."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(NyarGitError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source


# =============================================================================
# Repository Exceptions
# =============================================================================


class RepositoryError(NyarGitError):
    """Base exception for repository gateway errors."""


class RepositoryOperationError(RepositoryError):
    """Raised inside the gateway for an expected, recoverable failure.

    These never escape the gateway: they are converted into a failed
    result at the operation boundary.

    Attributes:
        category: The failure category used to look up the user-facing message.
        detail: Underlying diagnostic text (logged, not shown to callers).
        params: Values substituted into the message template.
    """

    def __init__(
        self,
        category: FailureCategory,
        detail: str = "",
        **params: object,
    ) -> None:
        """Initialize with failure category and diagnostic context.

        Args:
            category: The failure category.
            detail: Underlying diagnostic text.
            **params: Values substituted into the message template.
        """
        super().__init__(detail or str(category))
        self.category: FailureCategory = category
        self.detail: str = detail
        self.params: dict[str, object] = params


class OperationCancelledError(RepositoryError):
    """Raised when a cancellation token fires during a network operation."""


class EngineFaultError(RepositoryError):
    """Raised when the version-control engine fails unexpectedly.

    This is the only failure that crosses the client interface as an
    exception. The original engine exception is chained as ``__cause__``.

    Attributes:
        operation: Name of the gateway operation that failed.
        path: Repository path the gateway is bound to.
        category: Always ``FailureCategory.ENGINE_FAULT``.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        path: Path | None = None,
    ) -> None:
        """Initialize with error message and operation context.

        Args:
            message: Human-readable error message.
            operation: Name of the gateway operation that failed.
            path: Repository path the gateway is bound to.
        """
        # Deferred import to avoid circular dependency
        from nyargit.repository._messages import FailureCategory  # noqa: PLC0415

        super().__init__(message)
        self.operation: str = operation
        self.path: Path | None = path
        self.category: FailureCategory = FailureCategory.ENGINE_FAULT
