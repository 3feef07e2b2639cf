"""Pydantic schemas for the media search proxy."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class SearchType(str, Enum):
    MOVIE = "movie"
    SERIES = "series"
    EPISODE = "episode"


class CatalogType(str, Enum):
    MOVIE = "movie"
    SERIES = "series"


class MediaResult(BaseModel):
    imdb_id: str
    title: str
    year: Optional[str] = None
    media_type: Optional[str] = None
    poster: Optional[str] = None
    genre: list[str] = []
    rating: Optional[float] = None
    plot: Optional[str] = None


class MediaDetailResponse(MediaResult):
    runtime: Optional[str] = None
    director: Optional[str] = None
    actors: list[str] = []
    language: Optional[str] = None
    country: Optional[str] = None
    awards: Optional[str] = None
    metascore: Optional[str] = None
    total_seasons: Optional[str] = None
    box_office: Optional[str] = None


class MediaSearchResponse(BaseModel):
    results: list[MediaResult]
    page: int
    total_pages: int
    total_results: int


class GenreListResponse(BaseModel):
    media_type: CatalogType
    genres: list[str]
