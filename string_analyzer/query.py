from typing import Any, Dict, List, NamedTuple

from string_analyzer.filters import FilterModel, matches
from string_analyzer.models import StringRecord
from string_analyzer.store import StringStore


class QueryResult(NamedTuple):
    results: List[StringRecord]
    filters_applied: Dict[str, Any]


def run_query(store: StringStore, filters: FilterModel) -> QueryResult:
    """
    Apply a filter to a snapshot of the store.
    Evaluation happens after the snapshot is taken, so no lock is held
    while filtering. Results keep snapshot order.
    """
    records = store.snapshot()
    results = [record for record in records if matches(record, filters)]
    return QueryResult(results=results, filters_applied=filters.applied())
