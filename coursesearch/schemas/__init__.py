from coursesearch.schemas.course import CourseDocument, CourseType
from coursesearch.schemas.search import SearchRequest, SearchResponse

__all__ = ["CourseDocument", "CourseType", "SearchRequest", "SearchResponse"]
