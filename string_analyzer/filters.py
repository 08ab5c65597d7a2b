"""Filter model and its evaluation against stored records.

A FilterModel holds up to five optional predicates. Absent fields place no
constraint; present fields combine with AND. Both the structured query
parameters and the natural-language translator produce FilterModel
instances, so the same validators guard both paths.
"""

import re
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from string_analyzer.errors import InvalidFilterParameterError
from string_analyzer.models import StringRecord

_NON_NEGATIVE_INT = re.compile(r"\d+", re.ASCII)


class FilterModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = Field(None, ge=0)
    max_length: Optional[int] = Field(None, ge=0)
    word_count: Optional[int] = Field(None, ge=0)
    contains_character: Optional[str] = None

    @field_validator("contains_character")
    @classmethod
    def validate_contains_character(cls, v):
        """Exactly one code point"""
        if v is not None and len(v) != 1:
            raise ValueError("contains_character must be a single character")
        return v

    def applied(self) -> Dict[str, Any]:
        """Only the fields that actually constrain the result"""
        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.applied()


def build_filter(**values) -> FilterModel:
    """Construct a FilterModel, reporting the first invalid field."""
    try:
        return FilterModel(**values)
    except ValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else "filter"
        message = error["msg"]
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        raise InvalidFilterParameterError(field, f"invalid {field}: {message}") from e


def _parse_bool(field: str, raw: str) -> bool:
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise InvalidFilterParameterError(field, f"invalid {field} value")


def _parse_non_negative_int(field: str, raw: str) -> int:
    if not _NON_NEGATIVE_INT.fullmatch(raw):
        raise InvalidFilterParameterError(field, f"invalid {field}")
    return int(raw)


def parse_filter_params(
    is_palindrome: Optional[str] = None,
    min_length: Optional[str] = None,
    max_length: Optional[str] = None,
    word_count: Optional[str] = None,
    contains_character: Optional[str] = None,
) -> FilterModel:
    """
    Decode raw query-string values into a FilterModel.
    Empty strings count as absent. Any invalid value raises
    InvalidFilterParameterError before a filter is built.
    """
    values: Dict[str, Any] = {}

    if is_palindrome:
        values["is_palindrome"] = _parse_bool("is_palindrome", is_palindrome)

    for field, raw in (
        ("min_length", min_length),
        ("max_length", max_length),
        ("word_count", word_count),
    ):
        if raw:
            values[field] = _parse_non_negative_int(field, raw)

    if contains_character:
        if len(contains_character) != 1:
            raise InvalidFilterParameterError(
                "contains_character", "contains_character must be a single character"
            )
        values["contains_character"] = contains_character

    return build_filter(**values)


def _has_character(frequency: Dict[str, int], character: str) -> bool:
    wanted = character.casefold()
    return any(
        count >= 1 and key.casefold() == wanted
        for key, count in frequency.items()
    )


def matches(record: StringRecord, filters: FilterModel) -> bool:
    """True iff every present predicate holds for the record's properties"""
    props = record.properties

    if filters.is_palindrome is not None and props.is_palindrome != filters.is_palindrome:
        return False

    if filters.min_length is not None and props.length < filters.min_length:
        return False

    if filters.max_length is not None and props.length > filters.max_length:
        return False

    if filters.word_count is not None and props.word_count != filters.word_count:
        return False

    if filters.contains_character is not None:
        if not _has_character(props.character_frequency_map, filters.contains_character):
            return False

    return True
