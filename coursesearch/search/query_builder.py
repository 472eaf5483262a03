"""
Query DSL construction for course search.
Challenge: Map optional request filters onto one bool query; every filter narrows, full text must match.
"""

from typing import Any

from coursesearch.schemas.search import SearchRequest

# Title matches count twice as much as description matches
FULL_TEXT_FIELDS = ["title^2", "description"]

SUGGEST_FIELD = "titleSuggest"
# Shingle subfields created by the search_as_you_type mapping
SUGGEST_FIELDS = [SUGGEST_FIELD, f"{SUGGEST_FIELD}._2gram", f"{SUGGEST_FIELD}._3gram"]

SORT_FIELD_PRICE = "price"
SORT_FIELD_UPCOMING = "nextSessionDate"
# Tiebreaker so equal prices/dates page deterministically
SORT_TIEBREAKER_FIELD = "id"

_SORTS = {
    "priceasc": (SORT_FIELD_PRICE, "asc"),
    "pricedesc": (SORT_FIELD_PRICE, "desc"),
}
_DEFAULT_SORT = (SORT_FIELD_UPCOMING, "asc")


def build_search_query(request: SearchRequest) -> dict[str, Any]:
    """Build the bool query for a search request. No constraints -> empty bool (matches all)."""
    must: list[dict[str, Any]] = []
    filters: list[dict[str, Any]] = []

    if request.q and request.q.strip():
        must.append(
            {
                "multi_match": {
                    "query": request.q.strip(),
                    "fields": FULL_TEXT_FIELDS,
                    "fuzziness": "AUTO",
                }
            }
        )

    # Age window overlap, not containment: course.maxAge >= minAge and course.minAge <= maxAge
    if request.min_age is not None:
        filters.append({"range": {"maxAge": {"gte": request.min_age}}})
    if request.max_age is not None:
        filters.append({"range": {"minAge": {"lte": request.max_age}}})

    if request.category and request.category.strip():
        filters.append({"term": {"category": request.category}})

    if request.course_type is not None:
        filters.append({"term": {"type": request.course_type.value}})

    price_range: dict[str, float] = {}
    if request.min_price is not None:
        price_range["gte"] = request.min_price
    if request.max_price is not None:
        price_range["lte"] = request.max_price
    if price_range:
        filters.append({"range": {"price": price_range}})

    if request.start_date is not None:
        filters.append({"range": {"nextSessionDate": {"gte": request.start_date.isoformat()}}})

    bool_query: dict[str, Any] = {}
    if must:
        bool_query["must"] = must
    if filters:
        bool_query["filter"] = filters
    return {"bool": bool_query}


def resolve_sort(keyword: str | None) -> list[dict[str, Any]]:
    """Map a sort keyword (case-insensitive) to an ES sort. Unknown or empty -> upcoming sessions first."""
    field, order = _SORTS.get((keyword or "").strip().lower(), _DEFAULT_SORT)
    return [{field: {"order": order}}, {SORT_TIEBREAKER_FIELD: {"order": "asc"}}]


def build_suggest_query(text: str) -> dict[str, Any]:
    """Prefix-aware match on the search_as_you_type title copy."""
    return {
        "multi_match": {
            "query": text,
            "type": "bool_prefix",
            "fields": SUGGEST_FIELDS,
        }
    }
