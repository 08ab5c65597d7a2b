"""Core operations exposed to the transport layer."""

import logging
from typing import List, NamedTuple, Optional

from string_analyzer.analyzer import build_record, compute_sha256
from string_analyzer.errors import AlreadyExistsError
from string_analyzer.filters import FilterModel
from string_analyzer.models import StringRecord
from string_analyzer.query import QueryResult, run_query
from string_analyzer.store import StringStore
from string_analyzer.translator import Translator, translate

logger = logging.getLogger(__name__)


class InterpretedQueryResult(NamedTuple):
    results: List[StringRecord]
    filters_applied: dict
    original_query: str


def create_record(store: StringStore, value: str) -> StringRecord:
    """Analyze and store a new string. Raises AlreadyExistsError on duplicates."""
    record = build_record(value)

    if not store.insert_if_absent(record):
        logger.info(f"Duplicate create rejected for {record.id}")
        raise AlreadyExistsError(record.id)

    logger.info(f"Stored string {record.id} (length={record.properties.length})")
    return record


def get_record(store: StringStore, value: str) -> Optional[StringRecord]:
    """Get string analysis by original value"""
    return store.get(compute_sha256(value))


def delete_record(store: StringStore, value: str) -> bool:
    """Delete string analysis by original value"""
    record_id = compute_sha256(value)
    deleted = store.delete(record_id)
    if deleted:
        logger.info(f"Deleted string {record_id}")
    return deleted


def list_records(store: StringStore, filters: FilterModel) -> QueryResult:
    """Get all strings matching a structured filter"""
    return run_query(store, filters)


def translate_and_query(
    store: StringStore,
    query: str,
    translator: Optional[Translator] = None,
) -> InterpretedQueryResult:
    """
    Translate free text into a filter and apply it.
    Translation errors propagate untouched; no records are returned
    when the query cannot be understood.
    """
    filters = translator.translate(query) if translator else translate(query)
    results, filters_applied = run_query(store, filters)
    return InterpretedQueryResult(
        results=results,
        filters_applied=filters_applied,
        original_query=query,
    )
