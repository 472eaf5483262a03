#!/usr/bin/env python3
"""
Bulk load sample courses into Elasticsearch (same loader the API runs at startup).
Skips loading when the index already has documents; use --reset-index to start over.

  python scripts/load_sample_data.py
  python scripts/load_sample_data.py --reset-index
  python scripts/load_sample_data.py --file my_courses.json

Reads ELASTICSEARCH_URL and COURSES_INDEX from .env (default http://localhost:9200, "courses").
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from coursesearch.config import get_settings
from coursesearch.search.elasticsearch_client import (
    create_elasticsearch,
    delete_courses_index,
    ensure_courses_index,
)
from coursesearch.services.data_loader import load_sample_courses


async def run(file: Path, reset_index: bool) -> int:
    settings = get_settings()
    es = create_elasticsearch(settings)
    try:
        if reset_index:
            if await delete_courses_index(es, settings.courses_index):
                print(f"Deleted index '{settings.courses_index}'.")
            else:
                print(f"Index '{settings.courses_index}' does not exist (already deleted or never created).")
        if await ensure_courses_index(es, settings.courses_index):
            print(f"Created index '{settings.courses_index}' with number_of_replicas=0.")
        return await load_sample_courses(es, settings.courses_index, file)
    finally:
        await es.close()


def main():
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Bulk load sample courses into Elasticsearch")
    ap.add_argument("--file", type=Path, default=settings.sample_data_path, help="JSON list of courses")
    ap.add_argument("--reset-index", action="store_true", help="Delete the courses index first, then recreate and load")
    args = ap.parse_args()

    loaded = asyncio.run(run(args.file, args.reset_index))
    if loaded:
        print(f"Loaded {loaded} courses into '{settings.courses_index}'.")
    else:
        print("Index already has data; nothing loaded. Use --reset-index to reload.")
    print("Try: curl -s 'http://localhost:8000/api/search?q=math&size=3'")


if __name__ == "__main__":
    main()
