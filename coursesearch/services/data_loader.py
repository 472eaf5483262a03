"""
Sample data loader - one-shot bulk load of courses into an empty index.
Runs at startup (lifespan) and from scripts/load_sample_data.py.
"""

import json
import logging
from pathlib import Path

from elasticsearch import AsyncElasticsearch

from coursesearch.schemas.course import CourseDocument
from coursesearch.search.elasticsearch_client import bulk_index_courses, count_courses

logger = logging.getLogger(__name__)


def read_sample_courses(path: Path) -> list[dict]:
    """Read and validate the JSON course list; titleSuggest is copied from title for autocomplete."""
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    docs = []
    for item in raw:
        course = CourseDocument.model_validate(item)
        course = course.model_copy(update={"title_suggest": course.title})
        docs.append(course.model_dump(mode="json", by_alias=True, exclude_none=True))
    return docs


async def load_sample_courses(es: AsyncElasticsearch, index: str, path: Path) -> int:
    """Bulk load sample courses unless the index already has data. Returns number of documents loaded."""
    logger.info("Loading sample course data...")
    existing = await count_courses(es, index)
    if existing > 0:
        logger.info("Sample data already loaded. Found %d courses in index.", existing)
        return 0

    docs = read_sample_courses(path)
    loaded = await bulk_index_courses(es, index, docs)
    logger.info("Successfully loaded %d courses into Elasticsearch", loaded)
    return loaded
