"""Catalog data model parsed from OMDb JSON payloads.

Field aliases follow the upstream wire names (``imdbID``, ``Title``, ...) so
payloads validate directly; Python code uses the snake_case names.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# OMDb fills unknown optional fields with this marker instead of omitting them.
_NOT_AVAILABLE = "N/A"


def _drop_not_available(value: Any) -> Any:
    if isinstance(value, str) and value.strip() in ("", _NOT_AVAILABLE):
        return None
    return value


class _Model(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class CatalogItem(_Model):
    """One search hit. Identity is ``id``; every other field is content."""

    id: str = Field(alias="imdbID", min_length=1)
    title: str = Field(alias="Title")
    year: str = Field(default="", alias="Year")
    poster_url: str | None = Field(default=None, alias="Poster")
    kind: str = Field(default="movie", alias="Type")

    normalize_poster = field_validator("poster_url", mode="before")(
        _drop_not_available
    )


class CatalogPayload(_Model):
    """Ordered search results. Empty is a valid success."""

    items: tuple[CatalogItem, ...] = Field(default=(), alias="Search")
    total_results: int = Field(default=0, alias="totalResults")

    @field_validator("items", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return () if value is None else value

    @field_validator("total_results", mode="before")
    @classmethod
    def _parse_total(cls, value: Any) -> Any:
        value = _drop_not_available(value)
        return 0 if value is None else value


class Rating(_Model):
    """A third-party rating shown on the detail screen."""

    source: str = Field(alias="Source")
    value: str = Field(alias="Value")


class DetailRecord(_Model):
    """Full record for one title, fetched by id."""

    id: str = Field(alias="imdbID", min_length=1)
    title: str = Field(alias="Title")
    plot: str = Field(default="", alias="Plot")
    year: str = Field(default="", alias="Year")
    rated: str | None = Field(default=None, alias="Rated")
    released: str | None = Field(default=None, alias="Released")
    runtime: str | None = Field(default=None, alias="Runtime")
    genre: str | None = Field(default=None, alias="Genre")
    director: str | None = Field(default=None, alias="Director")
    writer: str | None = Field(default=None, alias="Writer")
    actors: str | None = Field(default=None, alias="Actors")
    language: str | None = Field(default=None, alias="Language")
    country: str | None = Field(default=None, alias="Country")
    poster_url: str | None = Field(default=None, alias="Poster")
    imdb_rating: str | None = Field(default=None, alias="imdbRating")
    ratings: tuple[Rating, ...] = Field(default=(), alias="Ratings")

    normalize_optional = field_validator(
        "rated",
        "released",
        "runtime",
        "genre",
        "director",
        "writer",
        "actors",
        "language",
        "country",
        "poster_url",
        "imdb_rating",
        mode="before",
    )(_drop_not_available)

    @field_validator("plot", mode="before")
    @classmethod
    def _plot_not_available(cls, value: Any) -> Any:
        value = _drop_not_available(value)
        return "" if value is None else value
