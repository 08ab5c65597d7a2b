"""Error hierarchy for the string analyzer core.

Every error carries a human readable message and a stable machine code.
Status codes are chosen by the transport layer (see main.py), never here.
"""

from typing import Optional


class StringAnalyzerError(Exception):
    """Base exception for all expected, recoverable failures."""

    code = "STRING_ANALYZER_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code}


# ─── Input ──────────────────────────────────────────────────────

class InvalidInputError(StringAnalyzerError):
    """Submitted value is malformed."""
    code = "INVALID_INPUT"


class MissingValueError(InvalidInputError):
    code = "MISSING_VALUE"

    def __init__(self, message: str = 'missing "value" field'):
        super().__init__(message)


class InvalidValueTypeError(InvalidInputError):
    code = "INVALID_VALUE_TYPE"

    def __init__(self, message: str = '"value" must be a string'):
        super().__init__(message)


class InvalidValueEncodingError(InvalidInputError):
    code = "INVALID_VALUE_ENCODING"

    def __init__(self, message: str = '"value" must be valid Unicode text'):
        super().__init__(message)


# ─── Store ──────────────────────────────────────────────────────

class AlreadyExistsError(StringAnalyzerError):
    """Content-addressing conflict on create."""
    code = "ALREADY_EXISTS"

    def __init__(self, record_id: str):
        super().__init__("string already exists in the system")
        self.record_id = record_id


class NotFoundError(StringAnalyzerError):
    code = "NOT_FOUND"

    def __init__(self, message: str = "string does not exist in the system"):
        super().__init__(message)


# ─── Filters ────────────────────────────────────────────────────

class InvalidFilterParameterError(StringAnalyzerError):
    """A structured filter parameter failed its own validity constraint."""
    code = "INVALID_FILTER_PARAMETER"

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class TranslationError(StringAnalyzerError):
    """Natural-language query could not be turned into a filter."""
    code = "TRANSLATION_ERROR"


class EmptyQueryError(TranslationError):
    code = "EMPTY_QUERY"

    def __init__(self):
        super().__init__("empty query")


class UnparseableQueryError(TranslationError):
    code = "UNPARSEABLE_QUERY"

    def __init__(self, query: str):
        super().__init__("unable to parse natural language query")
        self.query = query


class ConflictingFiltersError(TranslationError):
    code = "CONFLICTING_FILTERS"

    def __init__(self, message: str = "query parsed but resulted in conflicting filters"):
        super().__init__(message)
