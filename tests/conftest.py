"""
Pytest fixtures - in-memory Elasticsearch fake, HTTP client, seed courses.
Challenge: Isolated tests; no real Elasticsearch in unit tests.
"""

import re
from datetime import datetime
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from coursesearch.config import get_settings
from coursesearch.main import app
from coursesearch.search.elasticsearch_client import get_elasticsearch
from coursesearch.services.data_loader import read_sample_courses

SEED_COURSES = [
    {
        "id": "test-001",
        "title": "Advanced Mathematics",
        "description": "Learn advanced math concepts",
        "category": "Math",
        "type": "COURSE",
        "gradeRange": "4th-6th",
        "minAge": 9,
        "maxAge": 12,
        "price": 150.0,
        "nextSessionDate": "2025-08-15T10:00:00Z",
        "titleSuggest": "Advanced Mathematics",
    },
    {
        "id": "test-002",
        "title": "Basic Physics",
        "description": "Introduction to physics principles",
        "category": "Science",
        "type": "COURSE",
        "gradeRange": "7th-9th",
        "minAge": 12,
        "maxAge": 15,
        "price": 200.0,
        "nextSessionDate": "2025-08-20T14:00:00Z",
        "titleSuggest": "Basic Physics",
    },
    {
        "id": "test-003",
        "title": "Art Workshop",
        "description": "Creative art activities",
        "category": "Art",
        "type": "ONE_TIME",
        "gradeRange": "1st-3rd",
        "minAge": 6,
        "maxAge": 9,
        "price": 75.0,
        "nextSessionDate": "2025-08-10T11:00:00Z",
        "titleSuggest": "Art Workshop",
    },
]


def _tokens(text: Any) -> list[str]:
    return re.findall(r"\w+", str(text or "").lower())


def _coerce(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return value


def _field(doc: dict, field: str) -> Any:
    # "title^2" -> title, "titleSuggest._2gram" -> titleSuggest
    return doc.get(field.split("^")[0].split(".")[0])


def _matches(query: dict | None, doc: dict) -> bool:
    """Evaluate the subset of the query DSL the service emits."""
    if not query or "match_all" in query:
        return True
    if "bool" in query:
        clauses = query["bool"].get("must", []) + query["bool"].get("filter", [])
        return all(_matches(clause, doc) for clause in clauses)
    if "multi_match" in query:
        spec = query["multi_match"]
        terms = _tokens(spec["query"])
        prefix = terms.pop() if spec.get("type") == "bool_prefix" and terms else None
        for field in spec["fields"]:
            doc_tokens = _tokens(_field(doc, field))
            if any(t in doc_tokens for t in terms):
                return True
            if prefix and any(t.startswith(prefix) for t in doc_tokens):
                return True
        return False
    if "term" in query:
        field, value = next(iter(query["term"].items()))
        if isinstance(value, dict):
            value = value["value"]
        return doc.get(field) == value
    if "range" in query:
        field, bounds = next(iter(query["range"].items()))
        value = doc.get(field)
        if value is None:
            return False
        value = _coerce(value)
        checks = {
            "gte": lambda b: value >= b,
            "gt": lambda b: value > b,
            "lte": lambda b: value <= b,
            "lt": lambda b: value < b,
        }
        return all(checks[op](_coerce(bound)) for op, bound in bounds.items())
    raise AssertionError(f"Unsupported query clause: {query}")


class FakeElasticsearch:
    """Async stand-in for AsyncElasticsearch backed by a list of documents."""

    def __init__(self, docs: list[dict]):
        self.docs = [dict(d) for d in docs]
        self.search_calls: list[dict] = []
        self.error: Exception | None = None
        self.available = True

    async def search(self, *, index: str, query: dict | None = None, sort: list | None = None,
                     from_: int = 0, size: int = 10, **kwargs) -> dict:
        self.search_calls.append({"index": index, "query": query, "sort": sort, "from_": from_, "size": size, **kwargs})
        if self.error is not None:
            raise self.error
        matched = [d for d in self.docs if _matches(query, d)]
        for spec in reversed(sort or []):
            field, opts = next(iter(spec.items()))
            order = opts["order"] if isinstance(opts, dict) else opts
            matched.sort(key=lambda d: _coerce(d.get(field)), reverse=order == "desc")
        page = matched[from_:from_ + size]
        return {
            "hits": {
                "total": {"value": len(matched), "relation": "eq"},
                "hits": [{"_index": index, "_id": d["id"], "_source": d} for d in page],
            }
        }

    async def ping(self) -> bool:
        return self.available

    async def close(self) -> None:
        pass


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def fake_es() -> FakeElasticsearch:
    return FakeElasticsearch(SEED_COURSES)


@pytest.fixture
def catalog_es(settings) -> FakeElasticsearch:
    """Fake loaded with the packaged sample catalogue (15 courses)."""
    return FakeElasticsearch(read_sample_courses(settings.sample_data_path))


def _client_for(es: FakeElasticsearch, **transport_kwargs) -> AsyncClient:
    app.dependency_overrides[get_elasticsearch] = lambda: es
    return AsyncClient(transport=ASGITransport(app=app, **transport_kwargs), base_url="http://test")


@pytest_asyncio.fixture
async def client(fake_es: FakeElasticsearch):
    async with _client_for(fake_es) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def catalog_client(catalog_es: FakeElasticsearch):
    async with _client_for(catalog_es) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def lenient_client(fake_es: FakeElasticsearch):
    """Client that returns 500 responses instead of re-raising unhandled app exceptions."""
    async with _client_for(fake_es, raise_app_exceptions=False) as ac:
        yield ac
    app.dependency_overrides.clear()
