"""Course document schema - shape of a course as stored in the search index and returned by the API."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CourseType(str, Enum):
    ONE_TIME = "ONE_TIME"
    COURSE = "COURSE"
    CLUB = "CLUB"


class CourseDocument(BaseModel):
    """Course as indexed in Elasticsearch. Field names on the wire and in the index are camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str
    title: str
    description: str | None = None
    category: str | None = None
    course_type: CourseType | None = Field(None, alias="type")
    grade_range: str | None = None
    min_age: int | None = None
    max_age: int | None = None
    price: float | None = None
    next_session_date: datetime | None = None
    title_suggest: str | None = None  # search_as_you_type copy of title, filled by the loader
