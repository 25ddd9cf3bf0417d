"""Configuration management for NyarGit.

Configuration is merged from several sources, highest precedence first:

1. CLI overrides
2. Environment variables (``NYARGIT_<SECTION>__<KEY>``)
3. Repository file (``<worktree>/.nyargit.toml``)
4. User file (``config.toml`` in the platform config directory)
5. Built-in defaults

Example:
    >>> from nyargit.config import Config
    >>> config = Config.load()
    >>> config.pull.remote
    'origin'
"""

from ._defaults import DEFAULT_CONFIG
from ._discovery import discover_sources, find_repository_root
from ._load import safe_load_config
from ._loader import (
    ENV_PREFIX,
    copy_value,
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    AuthorConfig,
    Config,
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LoggingConfig,
    LogLevel,
    PullConfig,
    StatusConfig,
)
from ._validation import (
    ConfigSchema,
    ConfigSchemaStrict,
    ValidationIssue,
    get_config_schema,
    raise_if_validation_errors,
    validate_config,
    validate_source,
)

__all__ = [
    "DEFAULT_CONFIG",
    "ENV_PREFIX",
    "AuthorConfig",
    "Config",
    "ConfigSchema",
    "ConfigSchemaStrict",
    "ConfigSource",
    "ConfigSourceName",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "PullConfig",
    "StatusConfig",
    "ValidationIssue",
    "copy_value",
    "deep_merge",
    "discover_sources",
    "find_repository_root",
    "get_config_schema",
    "parse_env_vars",
    "parse_string_value",
    "raise_if_validation_errors",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
    "validate_config",
    "validate_source",
]
