"""Configuration schema models using Pydantic."""

from datetime import date, datetime
from pathlib import Path
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from podgrab.output.naming import DEFAULT_FILENAME_TEMPLATE


def parse_since(value: str) -> datetime:
    """Parse an RFC 3339 cutoff timestamp.

    Raises:
        ValueError: If the string is not RFC 3339 or has no UTC offset
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    if "T" not in text.upper():
        raise ValueError(f"not an RFC 3339 timestamp: {value!r}")

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise ValueError(f"not an RFC 3339 timestamp: {value!r}") from e
    if parsed.tzinfo is None:
        raise ValueError(f"RFC 3339 timestamp needs a UTC offset: {value!r}")
    return parsed


class Task(BaseModel):
    """One feed-to-destination download job."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., min_length=1)
    destination: Path = Path(".")
    since: datetime | None = None
    format: str = DEFAULT_FILENAME_TEMPLATE

    @field_validator("destination", "format", mode="before")
    @classmethod
    def _blank_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        # YAML entries may spell "use the default" as an empty string
        if value is None or value == "":
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("since", mode="before")
    @classmethod
    def _parse_since(cls, value: Any) -> Any:
        if value is None or value == "":
            return None
        if isinstance(value, str):
            return parse_since(value)
        if not isinstance(value, datetime):
            if isinstance(value, date):
                raise ValueError("since needs a time of day and a UTC offset")
            return value
        if value.tzinfo is None:
            raise ValueError("since needs a UTC offset")
        return value


class BatchConfig(BaseModel):
    """Batch-mode configuration file."""

    SUPPORTED_VERSION: ClassVar[str] = "v1"

    model_config = ConfigDict(populate_by_name=True)

    api_version: str | None = Field(default=None, alias="apiVersion")
    tasks: list[Task] = Field(default_factory=list)
