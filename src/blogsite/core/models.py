"""Data models for the article index."""

from datetime import date, datetime, timezone

from pydantic import BaseModel, Field, field_validator

# Non-ISO formats accepted in front matter, tried in order.
DATE_FORMATS = [
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M",
    "%m/%d/%Y",
]


def parse_date(value: str) -> datetime:
    """Parse a front-matter date string.

    Aware timestamps are normalised to naive UTC so every parsed value
    compares with every other.

    Raises:
        ValueError: If the string matches no accepted format.
    """
    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        for fmt in DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
        else:
            raise ValueError(f"unrecognised date {value!r}") from None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class ArticleMetadata(BaseModel):
    """Metadata extracted from article frontmatter."""

    title: str = Field(min_length=1)
    date: str
    tags: list[str] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def _title_to_string(cls, value):
        # unquoted numeric titles such as "title: 2023"; YAML booleans stay invalid
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _date_to_string(cls, value):
        # YAML loads unquoted dates as date/datetime objects
        if isinstance(value, (date, datetime)):
            return value.isoformat()
        return value

    @field_validator("date")
    @classmethod
    def _date_parses(cls, value: str) -> str:
        parse_date(value)
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_default(cls, value):
        return [] if value is None else value

    @property
    def published(self) -> datetime:
        """Parsed publication date used for ordering."""
        return parse_date(self.date)


class ArticleEntry(BaseModel):
    """One entry of the article index."""

    meta: ArticleMetadata
    path: str


class Article(ArticleEntry):
    """An article with its markdown body, used for page rendering."""

    content: str = ""

    @property
    def title(self) -> str:
        return self.meta.title
