"""The ``[logging]`` section: where and how NyarGit writes its log events."""

from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, field_validator

from nyargit.config._models._common import LogFormat, LogLevel


class LoggingConfig(BaseModel):
    """Logging settings shared by the CLI and the gateway it drives.

    Level and format names are case-insensitive, so ``NYARGIT_LOGGING__LEVEL=DEBUG``
    works. A leading ``~`` in ``file`` is expanded.

    Attributes:
        level: Lowest level that is written.
        format: JSON lines or human-readable text.
        file: Log file path. Empty means ``$NYARGIT_HOME/logs/cli.log``.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str = ""

    @field_validator("level", "format", mode="before")
    @classmethod
    def _fold_case(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("file")
    @classmethod
    def _expand_home(cls, value: str) -> str:
        if not value:
            return value
        return str(Path(value).expanduser())
