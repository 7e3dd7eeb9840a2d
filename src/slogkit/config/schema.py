"""Pydantic model for the ``[logging]`` table of a config file."""

from pydantic import BaseModel, ConfigDict, field_validator

from slogkit.config.models import VALID_FORMATS
from slogkit.level import LEVELS_BY_NAME


class LoggingFileModel(BaseModel):
    """Pydantic model for the logging section of a config file.

    Every field is optional; unset fields fall through to lower-precedence
    sources.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    level: str | None = None
    format: str | None = None
    file: str | None = None
    include_stderr: bool | None = None
    add_source: bool | None = None
    color: bool | None = None
    time_layout: str | None = None
    separator: str | None = None
    safe: bool | None = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str | None) -> str | None:
        """Normalize and validate the level name."""
        if v is None:
            return None
        v = v.casefold()
        if v not in LEVELS_BY_NAME:
            raise ValueError(f"must be one of {sorted(LEVELS_BY_NAME)}")
        return v

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str | None) -> str | None:
        """Normalize and validate the output format."""
        if v is None:
            return None
        v = v.casefold()
        if v not in VALID_FORMATS:
            raise ValueError(f"must be one of {sorted(VALID_FORMATS)}")
        return v

    @field_validator("time_layout", "separator")
    @classmethod
    def validate_not_empty(cls, v: str | None) -> str | None:
        if v is not None and not v:
            raise ValueError("must not be empty")
        return v
