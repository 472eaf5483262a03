"""Search request/response schemas - REST API contract for course search."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from coursesearch.schemas.course import CourseDocument, CourseType

DEFAULT_SORT = "upcoming"
DEFAULT_PAGE_SIZE = 10


class SearchRequest(BaseModel):
    """
    Parsed course search parameters. Every field is optional; None means no constraint.
    Built from the raw query string by coursesearch.api.params.parse_search_request.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    q: str | None = None
    min_age: int | None = None
    max_age: int | None = None
    category: str | None = None
    course_type: CourseType | None = Field(None, alias="type")
    # NaN and Infinity have no JSON encoding in the engine request
    min_price: float | None = Field(None, allow_inf_nan=False)
    max_price: float | None = Field(None, allow_inf_nan=False)
    start_date: datetime | None = None
    sort: str = DEFAULT_SORT
    page: int = Field(0, ge=0)
    size: int = Field(DEFAULT_PAGE_SIZE, ge=0)

    @field_validator("start_date", mode="before")
    @classmethod
    def _require_iso_date(cls, value):
        # Lax datetime parsing would read numeric strings as Unix timestamps
        if isinstance(value, str):
            try:
                float(value)
            except ValueError:
                return value
            raise ValueError("expected an ISO-8601 date-time")
        return value

    @field_validator("start_date")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        # Local date-times (no offset) are session times in UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def offset(self) -> int:
        return self.page * self.size


class SearchResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: int
    courses: list[CourseDocument]
