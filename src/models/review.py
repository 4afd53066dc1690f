from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_AUTHOR_NAME = "Anonymous"
DEFAULT_REVIEW_TEXT = "No review text"
DEFAULT_REVIEW_DATE = "Unknown date"


def _blank_to_default(value: object, default: str) -> str:
    if value is None:
        return default
    cleaned = " ".join(str(value).split())
    return cleaned or default


class ScrapeRequest(BaseModel):
    link: str | None = None
    place_id: str | None = Field(default=None, alias="placeId")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("link", "place_id", mode="before")
    @classmethod
    def strip_blank(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip() or None
        return value

    def resolve_target_url(self, place_url_template: str) -> str:
        if self.link:
            return self.link
        if self.place_id:
            return place_url_template.format(place_id=self.place_id)
        raise ValueError("Either link or placeId is required")


class ReviewRecord(BaseModel):
    name: str = DEFAULT_AUTHOR_NAME
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    text: str = DEFAULT_REVIEW_TEXT
    date: str = DEFAULT_REVIEW_DATE
    photo_url: str | None = Field(default=None, alias="photoUrl")
    synthetic: bool = False

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, value: object) -> str:
        return _blank_to_default(value, DEFAULT_AUTHOR_NAME)

    @field_validator("text", mode="before")
    @classmethod
    def default_text(cls, value: object) -> str:
        return _blank_to_default(value, DEFAULT_REVIEW_TEXT)

    @field_validator("date", mode="before")
    @classmethod
    def default_date(cls, value: object) -> str:
        return _blank_to_default(value, DEFAULT_REVIEW_DATE)

    @field_validator("rating", mode="before")
    @classmethod
    def default_rating(cls, value: object) -> object:
        return 0.0 if value is None else value

    @field_validator("photo_url", mode="before")
    @classmethod
    def blank_photo_url(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip() or None
        return value


class ExtractionResult(BaseModel):
    strategy: str | None = None
    reviews: list[ReviewRecord] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.reviews


class ScrapeResult(BaseModel):
    target_url: str
    reviews: list[ReviewRecord] = Field(default_factory=list)
    synthetic: bool = False
    strategy: str | None = None
    states: list[str] = Field(default_factory=list)

    def reviews_payload(self) -> list[dict]:
        return [review.model_dump(mode="json", by_alias=True) for review in self.reviews]
