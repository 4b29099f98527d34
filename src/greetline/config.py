"""Settings for one greetline run."""

from __future__ import annotations

import os
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .collector import DEFAULT_MAX_LENGTH, DEFAULT_PROMPT
from .core import check_template, default_template

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def env_log_level() -> str:
    """Log level taken from ``GREETLINE_LOG_LEVEL`` (default ``WARNING``)."""

    return os.getenv("GREETLINE_LOG_LEVEL", "WARNING").strip().upper()


class GreetConfig(BaseModel):
    """Validated settings for collecting entries and rendering the greeting."""

    model_config = ConfigDict(validate_default=True)

    count: int = Field(2, ge=1)
    prompt: str = DEFAULT_PROMPT
    max_length: Optional[int] = Field(DEFAULT_MAX_LENGTH, ge=1)
    template: Optional[str] = None
    log_level: LogLevel = Field(default_factory=env_log_level)

    @model_validator(mode="after")
    def _template_fits_count(self) -> "GreetConfig":
        if self.template is not None:
            check_template(self.template, self.count)
        return self

    @property
    def resolved_template(self) -> str:
        return self.template if self.template is not None else default_template(self.count)
