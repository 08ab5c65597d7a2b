import hashlib
from collections import Counter
from typing import Dict

from string_analyzer.models import StringProperties, StringRecord


def compute_sha256(text: str) -> str:
    """Compute SHA-256 hash of a string (UTF-8, lowercase hex)"""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def is_palindrome(text: str) -> bool:
    """Check if string reads the same both ways, ignoring case only"""
    folded = text.casefold()
    return folded == folded[::-1]


def count_words(text: str) -> int:
    """Count whitespace-delimited tokens"""
    return len(text.split())


def get_character_frequency(text: str) -> Dict[str, int]:
    """Get frequency map of each code point"""
    return dict(Counter(text))


def analyze_string(value: str) -> StringProperties:
    """Analyze a string and return all computed properties"""
    frequency = get_character_frequency(value)

    return StringProperties(
        length=len(value),
        is_palindrome=is_palindrome(value),
        unique_characters=len(frequency),
        word_count=count_words(value),
        sha256_hash=compute_sha256(value),
        character_frequency_map=frequency,
    )


def build_record(value: str) -> StringRecord:
    """Analyze a value and wrap it as a new record stamped with the current UTC time"""
    properties = analyze_string(value)
    return StringRecord(id=properties.sha256_hash, value=value, properties=properties)
