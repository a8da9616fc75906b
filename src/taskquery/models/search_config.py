"""Search behaviour configuration loaded from taskquery.yml."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

WeekStart = Literal["Monday", "Sunday"]


class SearchConfig(BaseModel):
    """Options that influence query evaluation."""

    case_sensitive: bool = Field(default=False, description="Match text case-sensitively")
    week_starts_on: WeekStart = Field(
        default="Monday",
        description="First day of the week for 'this week' / 'next week'",
    )
    cache_size: int = Field(default=50, ge=1, description="Parsed query cache capacity")

    @field_validator("week_starts_on", mode="before")
    @classmethod
    def normalize_week_start(cls, v: object) -> object:
        """Accept any capitalization of the weekday name."""
        if isinstance(v, str):
            return v.strip().capitalize()
        return v

    @classmethod
    def default(cls) -> "SearchConfig":
        """Create the default configuration."""
        return cls()
