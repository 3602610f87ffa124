from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

PositiveInt = Annotated[int, Field(ge=1)]
NonNegativeFloat = Annotated[float, Field(ge=0.0)]


def _strip_required(value: str) -> str:
    s = (value or "").strip()
    if not s:
        raise ValueError("must be a non-empty string")
    return s


class FetchConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    user_agent: str = DEFAULT_USER_AGENT
    # The community tab title is localized, so ask for the locale we match on.
    accept_language: str = "es-ES,es;q=0.9"
    timeout_seconds: float = Field(20.0, gt=0.0)
    max_attempts: PositiveInt = 3
    base_delay_seconds: NonNegativeFloat = 1.0
    max_delay_seconds: NonNegativeFloat = 10.0

    @field_validator("user_agent")
    @classmethod
    def _user_agent_required(cls, v: str) -> str:
        return _strip_required(v)

    @model_validator(mode="after")
    def _max_delay_covers_base(self) -> "FetchConfig":
        if self.max_delay_seconds < self.base_delay_seconds:
            raise ValueError("max_delay_seconds must be >= base_delay_seconds")
        return self


class ExtractionConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    community_tab_title: str = "Comunidad"

    @field_validator("community_tab_title")
    @classmethod
    def _title_required(cls, v: str) -> str:
        return _strip_required(v)


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    fetch: FetchConfig = Field(default_factory=FetchConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
