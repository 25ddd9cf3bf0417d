# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Configuration container with typed access.

This module provides the main Config class that serves as the primary
interface for accessing NyarGit configuration values.
"""

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar, overload

import tomli_w
from pydantic import BaseModel, ConfigDict, PrivateAttr

from nyargit.config._defaults import DEFAULT_CONFIG
from nyargit.config._loader import (
    copy_value,
    deep_merge,
    parse_env_vars,
    read_toml_file,
)
from nyargit.config._models._common import (
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LogLevel,
)
from nyargit.config._models._logging import LoggingConfig
from nyargit.config._models._repository import AuthorConfig, PullConfig, StatusConfig
from nyargit.repository._messages import DEFAULT_MESSAGES, MessageTable
from nyargit.repository._models import FastForwardPolicy, MergeStrategy

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path
    from typing import Self

T = TypeVar("T")
E = TypeVar("E", LogLevel, LogFormat, FastForwardPolicy, MergeStrategy)


def _parse_enum(enum_type: type[E], value: object, fallback: E) -> E:
    """Parse a string into an enum member, falling back on invalid values."""
    try:
        return enum_type(value)
    except ValueError:
        return fallback


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name, {})
    return value if isinstance(value, dict) else {}


def _parse_logging(data: dict[str, Any]) -> LoggingConfig:
    return LoggingConfig(
        level=_parse_enum(LogLevel, data.get("level", "info"), LogLevel.INFO),
        format=_parse_enum(LogFormat, data.get("format", "json"), LogFormat.JSON),
        file=str(data.get("file", "")),
    )


def _parse_author(data: dict[str, Any]) -> AuthorConfig:
    return AuthorConfig(
        name=str(data.get("name", "")),
        email=str(data.get("email", "")),
    )


def _parse_pull(data: dict[str, Any]) -> PullConfig:
    return PullConfig(
        remote=str(data.get("remote", "origin")),
        fast_forward=_parse_enum(
            FastForwardPolicy,
            data.get("fast_forward", "allow"),
            FastForwardPolicy.ALLOW,
        ),
        strategy=_parse_enum(
            MergeStrategy, data.get("strategy", "merge"), MergeStrategy.MERGE
        ),
    )


def _parse_status(data: dict[str, Any]) -> StatusConfig:
    return StatusConfig(include_ignored=bool(data.get("include_ignored", False)))


def _parse_messages(data: dict[str, Any]) -> dict[str, str]:
    return {str(key): str(value) for key, value in data.items()}


class Config(BaseModel):
    """Configuration container with typed access.

    This class provides immutable, type-safe access to NyarGit configuration.
    Use factory methods to create instances rather than the constructor.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    # Private attributes - not included in model fields
    _data: dict[str, Any] = PrivateAttr(default_factory=dict)
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())
    _logging: LoggingConfig = PrivateAttr(default_factory=LoggingConfig)
    _author: AuthorConfig = PrivateAttr(default_factory=AuthorConfig)
    _pull: PullConfig = PrivateAttr(default_factory=PullConfig)
    _status: StatusConfig = PrivateAttr(default_factory=StatusConfig)
    _messages: dict[str, str] = PrivateAttr(default_factory=dict)

    def __init__(
        self,
        *,
        _data: dict[str, Any] | None = None,
        _sources: tuple[ConfigSource, ...] = (),
    ) -> None:
        """Initialize configuration container.

        This constructor is intended for internal use. Use factory methods
        like from_dict(), from_file(), or load() to create Config instances.

        Args:
            _data: The complete merged configuration dictionary.
            _sources: Sources that contributed to this configuration.
        """
        super().__init__()
        data = _data if _data is not None else copy_value(DEFAULT_CONFIG)
        self._data = data
        self._sources = _sources
        self._logging = _parse_logging(_section(data, "logging"))
        self._author = _parse_author(_section(data, "author"))
        self._pull = _parse_pull(_section(data, "pull"))
        self._status = _parse_status(_section(data, "status"))
        self._messages = _parse_messages(_section(data, "messages"))

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        *,
        validate: bool = True,
    ) -> Self:
        """Create configuration from a dictionary.

        Args:
            data: Dictionary of configuration values.
            validate: Whether to validate the configuration.

        Returns:
            Configuration object from the dictionary.

        Raises:
            ConfigValidationError: If validation fails (when validate=True).
        """
        # Deferred import to avoid circular dependency
        from nyargit.config._validation import (  # noqa: PLC0415
            raise_if_validation_errors,
            validate_config,
        )

        merged = deep_merge(DEFAULT_CONFIG, data)
        if validate:
            raise_if_validation_errors(validate_config(merged))
        return cls(_data=merged)

    @classmethod
    def from_file(
        cls,
        path: Path,
        *,
        validate: bool = True,
    ) -> Self:
        """Load configuration from a specific file.

        Args:
            path: Path to the TOML config file.
            validate: Whether to validate the loaded config.

        Returns:
            Configuration object from the specified file only.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        # Deferred import to avoid circular dependency
        from nyargit.config._validation import (  # noqa: PLC0415
            raise_if_validation_errors,
            validate_config,
        )

        data = read_toml_file(path)
        source = ConfigSource(
            name=ConfigSourceName.REPOSITORY,  # Treat single file as repository source
            path=path,
            exists=True,
            values=data,
        )

        merged = deep_merge(DEFAULT_CONFIG, data)
        if validate:
            raise_if_validation_errors(validate_config(merged), source=str(path))
        return cls(_data=merged, _sources=(source,))

    @classmethod
    def load(
        cls,
        *,
        repo_root: Path | None = None,
        include_env: bool = True,
        include_cli: bool = False,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load merged configuration from all sources.

        Discovers all configuration sources and merges them in precedence order
        (defaults -> user -> repository -> env -> cli).

        Args:
            repo_root: Working tree root. If None, auto-detect by searching
                upward for a `.git` entry.
            include_env: Include environment variables as a source.
            include_cli: Include CLI overrides.
            cli_overrides: Dict of CLI argument overrides. Only used if
                include_cli is True.

        Returns:
            Merged configuration object.

        Raises:
            ConfigLoadError: If config files cannot be loaded.
            ConfigValidationError: If merged config fails validation.
        """
        # Deferred imports to avoid circular dependency
        from nyargit.config._discovery import discover_sources  # noqa: PLC0415
        from nyargit.config._validation import (  # noqa: PLC0415
            raise_if_validation_errors,
            validate_config,
            validate_source,
        )

        sources = discover_sources(
            repo_root=repo_root,
            include_env=include_env,
            include_cli=include_cli,
            cli_overrides=cli_overrides,
        )

        # Sources are discovered highest-to-lowest, so reverse for merging
        merged: dict[str, Any] = {}
        loaded_sources: list[ConfigSource] = []

        for source in reversed(sources):
            values: dict[str, Any] = {}

            if source.name in (ConfigSourceName.DEFAULT, ConfigSourceName.CLI):
                values = source.values
            elif source.name == ConfigSourceName.ENV:
                values = parse_env_vars()
            elif source.path and source.exists:
                values = read_toml_file(source.path)

            loaded_source = ConfigSource(
                name=source.name,
                path=source.path,
                exists=source.exists,
                values=values,
            )
            # Report the offending source rather than the merged result
            raise_if_validation_errors(validate_source(loaded_source))
            loaded_sources.append(loaded_source)

            if values:
                merged = deep_merge(merged, values)

        raise_if_validation_errors(validate_config(merged))

        return cls(_data=merged, _sources=tuple(reversed(loaded_sources)))

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed to this configuration.

        Returns:
            List of ConfigSource objects in precedence order.
        """
        return list(self._sources)

    @property
    def logging(self) -> LoggingConfig:
        """Return the logging configuration section."""
        return self._logging

    @property
    def author(self) -> AuthorConfig:
        """Return the author configuration section."""
        return self._author

    @property
    def pull(self) -> PullConfig:
        """Return the pull configuration section."""
        return self._pull

    @property
    def status(self) -> StatusConfig:
        """Return the status configuration section."""
        return self._status

    @property
    def messages(self) -> Mapping[str, str]:
        """Return the message overrides keyed by category or note name."""
        return MappingProxyType(self._messages)

    def message_table(self) -> MessageTable:
        """Build the message table with this configuration's overrides applied.

        Raises:
            ValueError: If an override names an unknown key or blanks a
                failure message.
        """
        if not self._messages:
            return DEFAULT_MESSAGES
        return DEFAULT_MESSAGES.with_overrides(self._messages)

    @overload
    def get(self, key: str) -> Any: ...

    @overload
    def get(self, key: str, default: T) -> T: ...

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Examples:
            >>> config.get("pull.remote")
            'origin'
            >>> config.get("nonexistent", "fallback")
            'fallback'
        """
        current: Any = self._data

        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current

    def to_dict(self, *, include_defaults: bool = True) -> dict[str, Any]:
        """Convert configuration to a dictionary.

        Args:
            include_defaults: Whether to include default values. If False,
                only values that differ from defaults are included.

        Returns:
            Dictionary representation of the configuration.
        """
        if include_defaults:
            return copy_value(self._data)
        return _diff_from_defaults(self._data, DEFAULT_CONFIG)

    def to_toml(self, *, include_defaults: bool = False) -> str:
        """Convert configuration to a TOML string."""
        return tomli_w.dumps(self.to_dict(include_defaults=include_defaults))


def _diff_from_defaults(
    data: dict[str, Any],
    defaults: dict[str, Any],
) -> dict[str, Any]:
    """Extract values that differ from defaults."""
    result: dict[str, Any] = {}

    for key, value in data.items():
        if key not in defaults:
            result[key] = copy_value(value)
        elif isinstance(value, dict) and isinstance(defaults[key], dict):
            nested_diff = _diff_from_defaults(value, defaults[key])
            if nested_diff:
                result[key] = nested_diff
        elif value != defaults[key]:
            result[key] = copy_value(value)

    return result
