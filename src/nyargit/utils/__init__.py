"""Shared utilities: logging, author resolution and well-known paths."""

from ._author import AuthorInfo, get_author_info
from ._logging import LogFormatType, create_cli_logger, create_repository_logger
from ._paths import (
    get_nyargit_cli_log_file,
    get_nyargit_home,
    get_nyargit_log_dir,
    get_repository_config_path,
    get_user_config_path,
)

__all__ = [
    "AuthorInfo",
    "LogFormatType",
    "create_cli_logger",
    "create_repository_logger",
    "get_author_info",
    "get_nyargit_cli_log_file",
    "get_nyargit_home",
    "get_nyargit_log_dir",
    "get_repository_config_path",
    "get_user_config_path",
]
