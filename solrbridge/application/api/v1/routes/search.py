"""Search API routes."""

from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query
from pydantic import BaseModel

from solrbridge.domain.index.model.registry import IndexRegistry
from solrbridge.domain.search.model.query import StructuredQuery, Term
from solrbridge.domain.search.service.search import SearchExecutor

router = APIRouter(
    prefix="/search",
    tags=["search"],
    route_class=DishkaRoute,
)


class SearchResponse(BaseModel):
    """Search response model."""

    index: str
    total: int
    start: int
    rows: int
    query_terms: list[str]
    spellcheck: str | None
    is_retry: bool
    results: list[dict[str, Any]]
    facets: dict[str, dict[str, int]]
    highlights: dict[str, dict[str, list[str]]]


@router.get("/")
async def list_indexes(
    indexes: FromDishka[IndexRegistry],
) -> dict[str, list[str]]:
    """List available search indexes."""
    return {"indexes": indexes.names()}


@router.get("/{index_name}")
async def search_index(
    index_name: str,
    indexes: FromDishka[IndexRegistry],
    executor: FromDishka[SearchExecutor],
    q: str = Query("", description="Search terms, space separated"),
    fuzzy: int | None = Query(None, ge=0, le=2, description="Edit distance applied to each term"),
    spellcheck: bool = Query(True, description="Ask Solr for a collated suggestion"),
    follow_spellcheck: bool = Query(False, description="Retry with the suggestion even when hits exist"),
    start: int = Query(0, ge=0, description="Number of results to skip"),
    rows: int = Query(10, ge=1, le=100, description="Maximum number of results"),
) -> SearchResponse:
    """Search a specific index by name."""
    index = indexes.require(index_name)

    query = StructuredQuery(
        terms=[Term(text=word, fuzzy=fuzzy) for word in q.split()],
        spellcheck=spellcheck,
        follow_spellcheck=follow_spellcheck,
        start=start,
        rows=rows,
    )
    result = await executor.execute(query, index)

    return SearchResponse(
        index=index_name,
        total=result.total,
        start=start,
        rows=rows,
        query_terms=result.query_terms,
        spellcheck=result.collated_spellcheck,
        is_retry=result.is_retry,
        results=result.documents,
        facets=result.facets,
        highlights=result.highlights,
    )
