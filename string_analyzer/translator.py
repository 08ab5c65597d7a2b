"""
Natural-language query translator.

A fixed, ordered list of pattern rules over the lowercased, trimmed query.
Each rule is an independent matcher returning a partial filter (or None);
contributions are merged left to right, later rules overwriting earlier
ones for the same field unless the rule only fills unset fields.

Examples:
- "all single word palindromic strings" -> {word_count: 1, is_palindrome: true}
- "strings longer than 10 characters" -> {min_length: 11}
- "strings containing the letter z" -> {contains_character: "z"}
"""

import logging
import re
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence

from string_analyzer.errors import (
    ConflictingFiltersError,
    EmptyQueryError,
    InvalidFilterParameterError,
    UnparseableQueryError,
)
from string_analyzer.filters import FilterModel, build_filter

logger = logging.getLogger(__name__)

Contribution = Optional[Dict[str, Any]]

_SINGLE_WORD_PHRASES = ("single word", "single-word", "one word")
_LONGER_THAN = re.compile(r"longer than\s+(\d+)", re.ASCII)
# A bare letter must stand alone; after "the letter" the first one is taken
_CONTAINS_LETTER = re.compile(
    r"contain(?:ing)?\s+(?:the letter\s+([a-z])|([a-z])\b)"
)
_N_WORDS = re.compile(r"\b(\d+)\s+word", re.ASCII)


class Rule(NamedTuple):
    name: str
    match: Callable[[str], Contribution]
    only_if_unset: bool = False


def match_single_word(query: str) -> Contribution:
    if any(phrase in query for phrase in _SINGLE_WORD_PHRASES):
        return {"word_count": 1}
    return None


def match_palindrome(query: str) -> Contribution:
    if "palindrom" in query:
        return {"is_palindrome": True}
    return None


def match_longer_than(query: str) -> Contribution:
    """'longer than N' is strict, so the inclusive minimum is N + 1"""
    m = _LONGER_THAN.search(query)
    if m:
        return {"min_length": int(m.group(1)) + 1}
    return None


def match_contains_letter(query: str) -> Contribution:
    m = _CONTAINS_LETTER.search(query)
    if m:
        letter = m.group(1) or m.group(2)
        return {"contains_character": letter.casefold()}
    return None


def match_first_vowel(query: str) -> Contribution:
    if "first vowel" in query:
        return {"contains_character": "a"}
    return None


def match_word_count(query: str) -> Contribution:
    m = _N_WORDS.search(query)
    if m:
        return {"word_count": int(m.group(1))}
    return None


DEFAULT_RULES: List[Rule] = [
    Rule("single_word", match_single_word),
    Rule("palindrome", match_palindrome),
    Rule("longer_than", match_longer_than),
    Rule("contains_letter", match_contains_letter),
    Rule("first_vowel", match_first_vowel),
    Rule("word_count", match_word_count, only_if_unset=True),
]


class Translator:
    """Turns free text into a FilterModel using an ordered rule list."""

    def __init__(self, rules: Sequence[Rule] = DEFAULT_RULES):
        self.rules = list(rules)

    def parse(self, query: str) -> Dict[str, Any]:
        """Run every rule and merge contributions. Raises on empty/unmatched text."""
        text = (query or "").strip().lower()
        if not text:
            raise EmptyQueryError()

        parsed: Dict[str, Any] = {}
        for rule in self.rules:
            contribution = rule.match(text)
            if not contribution:
                continue
            for field, value in contribution.items():
                if rule.only_if_unset and field in parsed:
                    continue
                parsed[field] = value
            logger.debug(f"Rule '{rule.name}' matched: {contribution}")

        if not parsed:
            raise UnparseableQueryError(query)

        min_length = parsed.get("min_length")
        max_length = parsed.get("max_length")
        if min_length is not None and max_length is not None and min_length > max_length:
            raise ConflictingFiltersError(
                f"min_length ({min_length}) is greater than max_length ({max_length})"
            )

        return parsed

    def translate(self, query: str) -> FilterModel:
        parsed = self.parse(query)
        try:
            return build_filter(**parsed)
        except InvalidFilterParameterError as e:
            raise ConflictingFiltersError(e.message) from e


_default_translator = Translator()


def translate(query: str) -> FilterModel:
    """Translate a natural-language query with the default rule set"""
    return _default_translator.translate(query)
