"""Configuration models.

This module provides Pydantic models for NyarGit configuration sections
and the main Config container class.
"""

from nyargit.config._models._common import (
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LogLevel,
)
from nyargit.config._models._config import Config
from nyargit.config._models._logging import LoggingConfig
from nyargit.config._models._repository import AuthorConfig, PullConfig, StatusConfig

__all__ = [
    "AuthorConfig",
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "PullConfig",
    "StatusConfig",
]
