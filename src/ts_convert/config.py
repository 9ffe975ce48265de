"""Application settings via pydantic-settings."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TS_")

    timezone: str | None = Field(
        default=None,
        description=(
            "Timezone used when none is given on the command line. "
            "Accepts anything the resolver does (aliases, IANA names, fragments). "
            "Defaults to the host timezone."
        ),
    )
    output_format: Literal["table", "json"] = Field(
        default="table", description="Output format: table or json"
    )
    log_level: str = Field(default="warning", description="Logging level")

    @field_validator("timezone")
    @classmethod
    def _blank_is_unset(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()
