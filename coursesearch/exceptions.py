"""
Domain exceptions. Mapped to HTTP error responses in coursesearch.api.errors.
"""

from typing import Any


class CourseSearchError(Exception):
    """Base class for errors raised by the course search service."""


class InvalidSearchParameter(CourseSearchError):
    """A query parameter could not be parsed or is out of range (client error)."""

    def __init__(self, name: str, value: Any, reason: str):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Parameter '{name}' has invalid value: {value} ({reason})")


class SearchBackendError(CourseSearchError):
    """Elasticsearch failed or returned a response we could not read."""
