"""Client for the OMDb metadata API.

Every failure to get a usable answer from OMDb surfaces as
``UpstreamUnavailable``; nothing is retried or served from a cache.
"Not found" answers are not failures: searches return an empty page and
lookups raise ``NotFound``.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

import httpx

from bingekaro.config import OMDB_PAGE_SIZE
from bingekaro.errors import NotFound, UpstreamUnavailable
from bingekaro.settings import Settings

logger = logging.getLogger(__name__)

# OMDb replies with Response=False for both "no match" and real errors
NOT_FOUND_ERRORS = {"movie not found!", "series not found!", "episode not found!", "incorrect imdb id."}

GENRES = [
    "Action", "Adventure", "Animation", "Biography", "Comedy", "Crime",
    "Documentary", "Drama", "Family", "Fantasy", "Game-Show", "History",
    "Horror", "Music", "Musical", "Mystery", "News", "Reality-TV", "Romance",
    "Sci-Fi", "Sport", "Talk-Show", "Thriller", "War", "Western",
]
MOVIE_ONLY_GENRES = {"Film-Noir"}


@dataclass(slots=True)
class MediaSummary:
    """Normalized view of one OMDb search hit or detail record."""

    imdb_id: str
    title: str
    year: str | None
    media_type: str | None
    poster: str | None
    genre: list[str] = field(default_factory=list)
    rating: float | None = None
    plot: str | None = None


@dataclass(slots=True)
class MediaDetail(MediaSummary):
    """Full OMDb record for a single title."""

    runtime: str | None = None
    director: str | None = None
    actors: list[str] = field(default_factory=list)
    language: str | None = None
    country: str | None = None
    awards: str | None = None
    metascore: str | None = None
    total_seasons: str | None = None
    box_office: str | None = None


@dataclass(slots=True)
class SearchPage:
    results: list[MediaSummary]
    page: int
    total_results: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_results / OMDB_PAGE_SIZE)


def _clean(value: Any) -> str | None:
    """OMDb uses the literal "N/A" for missing values."""
    if value is None:
        return None
    text = str(value).strip()
    if not text or text == "N/A":
        return None
    return text


def _split(value: Any) -> list[str]:
    text = _clean(value)
    if not text:
        return []
    return [part.strip() for part in text.split(",") if part.strip()]


def _rating(value: Any) -> float | None:
    text = _clean(value)
    if text is None:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _summary_fields(data: dict[str, Any]) -> dict[str, Any]:
    return {
        "imdb_id": data.get("imdbID", ""),
        "title": data.get("Title", ""),
        "year": _clean(data.get("Year")),
        "media_type": _clean(data.get("Type")),
        "poster": _clean(data.get("Poster")),
        "genre": _split(data.get("Genre")),
        "rating": _rating(data.get("imdbRating")),
        "plot": _clean(data.get("Plot")),
    }


class OMDbClient:
    """Thin async wrapper over the OMDb query API."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self._settings = settings
        self._client = http_client

    @property
    def configured(self) -> bool:
        return bool(self._settings.omdb_api_key)

    async def _request(self, params: dict[str, Any]) -> dict[str, Any]:
        """Call OMDb and return the decoded JSON payload."""
        if not self.configured:
            logger.error("OMDb request attempted without OMDB_API_KEY")
            raise UpstreamUnavailable()

        query = {key: value for key, value in params.items() if value not in (None, "")}
        query["apikey"] = self._settings.omdb_api_key

        try:
            response = await self._client.get(
                self._settings.omdb_base_url + "/",
                params=query,
                timeout=self._settings.omdb_timeout_seconds,
            )
        except httpx.HTTPError as exc:
            logger.warning(f"OMDb request failed: {exc.__class__.__name__}")
            raise UpstreamUnavailable() from exc

        if response.status_code >= 400:
            logger.warning(f"OMDb responded with HTTP {response.status_code}")
            raise UpstreamUnavailable()

        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("OMDb returned a non-JSON body")
            raise UpstreamUnavailable() from exc

        if not isinstance(data, dict):
            raise UpstreamUnavailable()
        return data

    @staticmethod
    def _is_not_found(data: dict[str, Any]) -> bool:
        return (
            str(data.get("Response", "")).lower() == "false"
            and str(data.get("Error", "")).strip().lower() in NOT_FOUND_ERRORS
        )

    @staticmethod
    def _raise_for_error(data: dict[str, Any]) -> None:
        if str(data.get("Response", "")).lower() == "false":
            logger.warning(f"OMDb error: {data.get('Error', 'unknown')}")
            raise UpstreamUnavailable()

    async def search_by_title(self, query: str, type_filter: str | None = None, page: int = 1) -> SearchPage:
        """One page (10 hits) of title search results."""
        data = await self._request({"s": query, "type": type_filter, "page": page})
        if self._is_not_found(data):
            return SearchPage(results=[], page=page, total_results=0)
        self._raise_for_error(data)

        results = [MediaSummary(**_summary_fields(hit)) for hit in data.get("Search") or []]
        try:
            total = int(data.get("totalResults") or 0)
        except (TypeError, ValueError):
            total = len(results)
        return SearchPage(results=results, page=page, total_results=total)

    async def get_by_id(self, imdb_id: str) -> MediaDetail:
        """Full record for one title."""
        data = await self._request({"i": imdb_id, "plot": "full"})
        if self._is_not_found(data):
            raise NotFound("Title not found")
        self._raise_for_error(data)

        return MediaDetail(
            **_summary_fields(data),
            runtime=_clean(data.get("Runtime")),
            director=_clean(data.get("Director")),
            actors=_split(data.get("Actors")),
            language=_clean(data.get("Language")),
            country=_clean(data.get("Country")),
            awards=_clean(data.get("Awards")),
            metascore=_clean(data.get("Metascore")),
            total_seasons=_clean(data.get("totalSeasons")),
            box_office=_clean(data.get("BoxOffice")),
        )

    # OMDb has no popularity or trending endpoints; these are canned searches
    async def popular(self, media_type: str, page: int = 1) -> SearchPage:
        return await self.search_by_title(media_type, media_type, page)

    async def anime(self, page: int = 1) -> SearchPage:
        return await self.search_by_title("anime", "series", page)

    async def trending(self) -> SearchPage:
        return await self.search_by_title("popular", None, 1)

    async def recommendations_for(self, media_type: str, imdb_id: str, page: int = 1) -> SearchPage:
        """Titles sharing the first genre of ``imdb_id``; a stand-in, not a recommender."""
        detail = await self.get_by_id(imdb_id)
        if not detail.genre:
            return SearchPage(results=[], page=page, total_results=0)
        page_result = await self.search_by_title(detail.genre[0], media_type, page)
        page_result.results = [hit for hit in page_result.results if hit.imdb_id != imdb_id]
        return page_result

    @staticmethod
    def genres(media_type: str) -> list[str]:
        if media_type == "movie":
            return sorted(GENRES + list(MOVIE_ONLY_GENRES))
        return list(GENRES)
