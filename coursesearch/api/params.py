"""
Query-string parsing for /api/search.
Challenge: Report exactly which parameter failed instead of a generic validation blob.
"""

from collections.abc import Mapping

from pydantic import ValidationError

from coursesearch.exceptions import InvalidSearchParameter
from coursesearch.schemas.search import SearchRequest

# camelCase names only; snake_case field names are not part of the HTTP surface
QUERY_PARAMETERS = frozenset(field.alias or name for name, field in SearchRequest.model_fields.items())


def parse_search_request(
    params: Mapping[str, str],
    max_page_size: int,
    max_result_window: int,
) -> SearchRequest:
    """
    Build a SearchRequest from raw query parameters.

    Unknown names and blank values are treated as absent. Sizes above max_page_size are clamped.
    Raises InvalidSearchParameter for unparsable values or a page beyond the result window.
    """
    raw = {
        name: value.strip()
        for name, value in params.items()
        if name in QUERY_PARAMETERS and value is not None and value.strip()
    }
    try:
        request = SearchRequest.model_validate(raw)
    except ValidationError as exc:
        error = exc.errors()[0]
        name = str(error["loc"][0]) if error["loc"] else "request"
        raise InvalidSearchParameter(name, raw.get(name), error["msg"]) from exc

    if request.size > max_page_size:
        request = request.model_copy(update={"size": max_page_size})
    if request.offset + request.size > max_result_window:
        raise InvalidSearchParameter(
            "page",
            request.page,
            f"page * size + size must not exceed {max_result_window}",
        )
    return request
