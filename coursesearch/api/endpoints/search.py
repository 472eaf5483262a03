"""
Search endpoints - filtered course search and title autocomplete over Elasticsearch.
Design: Thin controller; parsing in dependencies, query logic in the service.
"""

import logging

from fastapi import APIRouter, Query

from coursesearch.api.dependencies import ParsedSearchRequest, SearchService
from coursesearch.schemas.search import SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=SearchResponse)
async def search_courses(request: ParsedSearchRequest, service: SearchService):
    """
    Search courses. Query parameters: q, minAge, maxAge, category, type (ONE_TIME|COURSE|CLUB),
    minPrice, maxPrice, startDate (ISO-8601), sort (upcoming|priceAsc|priceDesc), page, size.
    """
    response = await service.search(request)
    logger.info(
        "Search returned %d of %d courses (page=%d size=%d)",
        len(response.courses), response.total, request.page, request.size,
    )
    return response


@router.get("/suggest", response_model=list[str])
async def suggest_titles(service: SearchService, q: str = Query(...)):
    """Autocomplete: up to 10 distinct course titles for a partial query."""
    logger.info("Received suggestion request for query: %r", q)
    return await service.suggest(q)
