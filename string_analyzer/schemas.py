from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional

from pydantic import BaseModel, Field

from string_analyzer.errors import (
    InvalidValueEncodingError,
    InvalidValueTypeError,
    MissingValueError,
)
from string_analyzer.models import StringRecord


class ValueKind(str, Enum):
    STRING = "string"
    INVALID_TYPE = "invalid_type"
    INVALID_ENCODING = "invalid_encoding"
    MISSING = "missing"


class CreateValue(NamedTuple):
    kind: ValueKind
    value: Optional[str] = None


class StringCreate(BaseModel):
    # Any JSON type is accepted here; decode() sorts out what we got
    value: Any = Field(None, description="String to analyze")

    def decode(self) -> CreateValue:
        if self.value is None:
            return CreateValue(ValueKind.MISSING)
        if not isinstance(self.value, str):
            return CreateValue(ValueKind.INVALID_TYPE)
        # JSON escapes can smuggle in lone surrogates, which have no UTF-8 form
        try:
            self.value.encode("utf-8")
        except UnicodeEncodeError:
            return CreateValue(ValueKind.INVALID_ENCODING)
        return CreateValue(ValueKind.STRING, self.value)

    def validated_value(self) -> str:
        """The submitted string, or the matching InvalidInputError"""
        decoded = self.decode()
        if decoded.kind is ValueKind.MISSING:
            raise MissingValueError()
        if decoded.kind is ValueKind.INVALID_TYPE:
            raise InvalidValueTypeError()
        if decoded.kind is ValueKind.INVALID_ENCODING:
            raise InvalidValueEncodingError()
        return decoded.value


class StringProperties(BaseModel):
    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class StringResponse(BaseModel):
    id: str
    value: str
    properties: StringProperties
    created_at: datetime

    @classmethod
    def from_record(cls, record: StringRecord) -> "StringResponse":
        return cls(**record.model_dump())


class StringListResponse(BaseModel):
    data: List[StringResponse]
    count: int
    filters_applied: Dict[str, Any]


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class NaturalLanguageResponse(BaseModel):
    data: List[StringResponse]
    count: int
    interpreted_query: InterpretedQuery
