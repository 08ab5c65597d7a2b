import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from string_analyzer import crud, schemas
from string_analyzer.errors import InvalidInputError, NotFoundError
from string_analyzer.filters import parse_filter_params
from string_analyzer.store import StringStore, get_store

router = APIRouter()
logger = logging.getLogger(__name__)


def _require_path_value(string_value: str) -> str:
    if not string_value:
        raise InvalidInputError("missing string value in path")
    return string_value


@router.post("/strings", response_model=schemas.StringResponse, status_code=status.HTTP_201_CREATED)
def create_string(
    string_data: schemas.StringCreate,
    store: StringStore = Depends(get_store),
):
    """
    Analyze and store a string.
    Returns 409 if string already exists.
    """
    value = string_data.validated_value()
    record = crud.create_record(store, value)
    return schemas.StringResponse.from_record(record)


@router.get("/strings", response_model=schemas.StringListResponse)
def get_all_strings(
    is_palindrome: Optional[str] = Query(None),
    min_length: Optional[str] = Query(None),
    max_length: Optional[str] = Query(None),
    word_count: Optional[str] = Query(None),
    contains_character: Optional[str] = Query(None),
    store: StringStore = Depends(get_store),
):
    """
    Get all strings with optional filtering.
    """
    filters = parse_filter_params(
        is_palindrome=is_palindrome,
        min_length=min_length,
        max_length=max_length,
        word_count=word_count,
        contains_character=contains_character,
    )
    results, filters_applied = crud.list_records(store, filters)

    data = [schemas.StringResponse.from_record(r) for r in results]
    return schemas.StringListResponse(
        data=data,
        count=len(data),
        filters_applied=filters_applied,
    )


# Registered before /strings/{string_value} so it is not captured as a value
@router.get("/strings/filter-by-natural-language", response_model=schemas.NaturalLanguageResponse)
def filter_by_natural_language(
    query: Optional[str] = Query(None, description="Natural language query"),
    store: StringStore = Depends(get_store),
):
    """
    Filter strings using natural language queries.
    Example: "all single word palindromic strings"
    """
    outcome = crud.translate_and_query(store, query or "")

    data = [schemas.StringResponse.from_record(r) for r in outcome.results]
    return schemas.NaturalLanguageResponse(
        data=data,
        count=len(data),
        interpreted_query=schemas.InterpretedQuery(
            original=outcome.original_query,
            parsed_filters=outcome.filters_applied,
        ),
    )


@router.get("/strings/{string_value:path}", response_model=schemas.StringResponse)
def get_string(
    string_value: str,
    store: StringStore = Depends(get_store),
):
    """
    Get analysis for a specific string.
    Returns 404 if string doesn't exist.
    """
    record = crud.get_record(store, _require_path_value(string_value))
    if record is None:
        raise NotFoundError()
    return schemas.StringResponse.from_record(record)


@router.delete("/strings/{string_value:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_string(
    string_value: str,
    store: StringStore = Depends(get_store),
):
    """
    Delete a string from the system.
    Returns 404 if string doesn't exist.
    """
    if not crud.delete_record(store, _require_path_value(string_value)):
        raise NotFoundError()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
