"""Data models for timestamp conversion results."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class InputFormat(str, Enum):
    """The textual formats an input string can be classified as."""

    UNIX = "unix"
    ISO = "iso"
    RELATIVE = "relative"
    DATETIME = "datetime"


class NormalizedMoment(BaseModel):
    """A single instant in the three canonical forms."""

    model_config = ConfigDict(frozen=True)

    epoch_seconds: int
    epoch_milliseconds: int
    utc_iso: str


class ConversionResult(BaseModel):
    """Everything shown to the user for one conversion."""

    model_config = ConfigDict(frozen=True)

    timezone: str
    local_time: str = Field(serialization_alias="localTime")
    unix_seconds: int = Field(serialization_alias="unixSeconds")
    unix_milliseconds: int = Field(serialization_alias="unixMilliseconds")
    utc_iso: str = Field(serialization_alias="utcISO")
    relative: str
    input_format: InputFormat | None = Field(default=None, serialization_alias="format")
