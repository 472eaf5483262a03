"""
FastAPI dependencies - search client, service and parsed request (Dependency Inversion).
"""

from typing import Annotated

from elasticsearch import AsyncElasticsearch
from fastapi import Depends, Request

from coursesearch.api.params import parse_search_request
from coursesearch.config import Settings, get_settings
from coursesearch.schemas.search import SearchRequest
from coursesearch.search.elasticsearch_client import get_elasticsearch
from coursesearch.services.course_search_service import CourseSearchService

SearchClient = Annotated[AsyncElasticsearch, Depends(get_elasticsearch)]
AppSettings = Annotated[Settings, Depends(get_settings)]


def get_course_search_service(es: SearchClient, settings: AppSettings) -> CourseSearchService:
    """Factory for service with client injection."""
    return CourseSearchService(es, settings.courses_index)


def get_search_request(request: Request, settings: AppSettings) -> SearchRequest:
    """Parse /api/search query parameters; failures surface as 400 via InvalidSearchParameter."""
    return parse_search_request(
        request.query_params,
        max_page_size=settings.max_page_size,
        max_result_window=settings.max_result_window,
    )


SearchService = Annotated[CourseSearchService, Depends(get_course_search_service)]
ParsedSearchRequest = Annotated[SearchRequest, Depends(get_search_request)]
