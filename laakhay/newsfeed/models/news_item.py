"""News item data model."""

from pydantic import BaseModel, ConfigDict, Field


class NewsItem(BaseModel):
    """A single news-like text sample.

    Identity is ``id``; it is assigned by the fetcher when the upstream
    response is mapped and never reassigned.
    """

    id: str = Field(..., min_length=1)
    timestamp: str
    text: str
    source: str = ""
    scope: str

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)
