from datetime import datetime, timezone
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class StringProperties(BaseModel):
    """Properties derived from a string value; a pure function of the value."""

    model_config = ConfigDict(frozen=True)

    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class StringRecord(BaseModel):
    """Stored analysis of one value, keyed by its SHA-256 hash"""

    model_config = ConfigDict(frozen=True)

    id: str
    value: str
    properties: StringProperties
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
