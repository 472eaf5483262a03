"""
Course search service - runs searches and suggestions against Elasticsearch.
Challenge: Keep endpoints thin; turn engine failures into one domain error.
Design: Client is injected, so tests pass a fake or mock.
"""

import logging
from typing import Any

from elasticsearch import ApiError, AsyncElasticsearch, TransportError
from prometheus_client import Histogram
from pydantic import ValidationError

from coursesearch.exceptions import SearchBackendError
from coursesearch.schemas.course import CourseDocument
from coursesearch.schemas.search import SearchRequest, SearchResponse
from coursesearch.search.query_builder import build_search_query, build_suggest_query, resolve_sort

logger = logging.getLogger(__name__)

SUGGESTION_LIMIT = 10

SEARCH_LATENCY = Histogram(
    "course_search_request_seconds",
    "Elasticsearch round-trip time for course search operations",
    ["operation"],
)


def _response_body(response: Any) -> dict:
    # Response may be ObjectApiResponse; support both .body and dict access
    return getattr(response, "body", response)


def _total_hits(hits: dict) -> int:
    total = hits.get("total")
    if isinstance(total, dict):
        return int(total["value"])
    if total is None:
        return len(hits["hits"])
    return int(total)


def dedupe_titles(titles: list[str | None], limit: int = SUGGESTION_LIMIT) -> list[str]:
    """Distinct non-empty titles in first-seen order, at most `limit`."""
    distinct = dict.fromkeys(t for t in titles if t)
    return list(distinct)[:limit]


class CourseSearchService:
    """Search and autocomplete over the courses index. No caching, no retries."""

    def __init__(self, es: AsyncElasticsearch, index: str):
        self.es = es
        self.index = index

    async def search(self, request: SearchRequest) -> SearchResponse:
        """One page of courses matching the request, plus the total match count."""
        logger.info("Searching courses with request: %s", request)
        try:
            with SEARCH_LATENCY.labels(operation="search").time():
                response = await self.es.search(
                    index=self.index,
                    query=build_search_query(request),
                    sort=resolve_sort(request.sort),
                    from_=request.offset,
                    size=request.size,
                    track_total_hits=True,
                )
        except (ApiError, TransportError) as exc:
            raise SearchBackendError(f"Course search failed on index {self.index!r}") from exc

        try:
            hits = _response_body(response)["hits"]
            total = _total_hits(hits)
            courses = [CourseDocument.model_validate(hit["_source"]) for hit in hits["hits"]]
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            raise SearchBackendError("Malformed search response from Elasticsearch") from exc

        logger.info("Search completed - found %d total results, returning %d courses", total, len(courses))
        return SearchResponse(total=total, courses=courses)

    async def suggest(self, text: str | None) -> list[str]:
        """Autocomplete: distinct course titles matching the typed fragment. Blank input never hits ES."""
        query = (text or "").strip()
        if not query:
            return []
        try:
            with SEARCH_LATENCY.labels(operation="suggest").time():
                response = await self.es.search(
                    index=self.index,
                    query=build_suggest_query(query),
                    size=SUGGESTION_LIMIT,
                    source_includes=["title"],
                )
        except (ApiError, TransportError) as exc:
            raise SearchBackendError(f"Suggestion lookup failed on index {self.index!r}") from exc

        try:
            hits = _response_body(response)["hits"]["hits"]
            titles = [hit["_source"].get("title") for hit in hits]
        except (KeyError, TypeError, AttributeError) as exc:
            raise SearchBackendError("Malformed suggestion response from Elasticsearch") from exc

        suggestions = dedupe_titles(titles)
        logger.info("Found %d suggestions for query: %r", len(suggestions), query)
        return suggestions
