"""
API router - aggregates all endpoint modules (RESTful structure).
"""

from fastapi import APIRouter

from coursesearch.api.endpoints import health, search

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(search.router, prefix="/search", tags=["search"])
