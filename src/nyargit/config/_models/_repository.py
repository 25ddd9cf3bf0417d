"""Repository operation configuration models.

This module provides the Pydantic models for the ``author``, ``pull`` and
``status`` configuration sections.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from nyargit.repository._models import FastForwardPolicy, MergeStrategy, PullOptions


class AuthorConfig(BaseModel):
    """Default commit identity.

    Empty values fall back to ``NYARGIT_AUTHOR_NAME``/``NYARGIT_AUTHOR_EMAIL``
    and then to ``git config user.name``/``user.email``.

    Attributes:
        name: Author name.
        email: Author email.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    email: str = ""


class PullConfig(BaseModel):
    """Defaults for ``nyargit repo pull``.

    Attributes:
        remote: Remote to fetch from.
        fast_forward: Fast-forward policy.
        strategy: Merge strategy.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    remote: str = "origin"
    fast_forward: FastForwardPolicy = FastForwardPolicy.ALLOW
    strategy: MergeStrategy = MergeStrategy.MERGE

    def to_options(self) -> PullOptions:
        return PullOptions(fast_forward=self.fast_forward, strategy=self.strategy)


class StatusConfig(BaseModel):
    """Status reporting settings.

    Attributes:
        include_ignored: Report ignored files in status output.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    include_ignored: bool = False
