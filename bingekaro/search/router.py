"""Media search endpoints proxying OMDb."""
import logging
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from bingekaro.app_state import get_omdb_client
from bingekaro.config import OMDB_MAX_PAGE
from bingekaro.errors import ValidationError
from bingekaro.rate_limit import limiter
from bingekaro.search.omdb import OMDbClient, SearchPage
from bingekaro.search.schemas import (
    CatalogType,
    GenreListResponse,
    MediaDetailResponse,
    MediaResult,
    MediaSearchResponse,
    SearchType,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/search", tags=["Search"])


def _to_response(page: SearchPage) -> MediaSearchResponse:
    return MediaSearchResponse(
        results=[MediaResult(**asdict(hit)) for hit in page.results],
        page=page.page,
        total_pages=page.total_pages,
        total_results=page.total_results,
    )


@router.get("", response_model=MediaSearchResponse)
@limiter.limit("60/minute")
async def search_media(
    request: Request,
    q: str = Query(""),
    type: Optional[SearchType] = Query(None),
    page: int = Query(1, ge=1, le=OMDB_MAX_PAGE),
    omdb: OMDbClient = Depends(get_omdb_client)
):
    """Search movies, series and episodes by title."""
    query = q.strip()
    if not query:
        raise ValidationError("q", "Search query is required")

    result = await omdb.search_by_title(query, type.value if type else None, page)
    return _to_response(result)


@router.get("/title/{imdb_id}", response_model=MediaDetailResponse)
@limiter.limit("60/minute")
async def get_title(
    request: Request,
    imdb_id: str,
    omdb: OMDbClient = Depends(get_omdb_client)
):
    """Full details for one title by IMDb id."""
    detail = await omdb.get_by_id(imdb_id)
    return MediaDetailResponse(**asdict(detail))


@router.get("/popular/{media_type}", response_model=MediaSearchResponse)
@limiter.limit("60/minute")
async def popular(
    request: Request,
    media_type: CatalogType,
    page: int = Query(1, ge=1, le=OMDB_MAX_PAGE),
    omdb: OMDbClient = Depends(get_omdb_client)
):
    return _to_response(await omdb.popular(media_type.value, page))


@router.get("/anime", response_model=MediaSearchResponse)
@limiter.limit("60/minute")
async def anime(
    request: Request,
    page: int = Query(1, ge=1, le=OMDB_MAX_PAGE),
    omdb: OMDbClient = Depends(get_omdb_client)
):
    return _to_response(await omdb.anime(page))


@router.get("/trending", response_model=MediaSearchResponse)
@limiter.limit("60/minute")
async def trending(
    request: Request,
    omdb: OMDbClient = Depends(get_omdb_client)
):
    return _to_response(await omdb.trending())


@router.get("/genres/{media_type}", response_model=GenreListResponse)
async def genres(media_type: CatalogType):
    """Static genre list; OMDb has no genre endpoint."""
    return GenreListResponse(media_type=media_type, genres=OMDbClient.genres(media_type.value))


@router.get("/recommendations/{media_type}/{imdb_id}", response_model=MediaSearchResponse)
@limiter.limit("30/minute")
async def recommendations(
    request: Request,
    media_type: CatalogType,
    imdb_id: str,
    page: int = Query(1, ge=1, le=OMDB_MAX_PAGE),
    omdb: OMDbClient = Depends(get_omdb_client)
):
    """Titles sharing the first genre of the given one."""
    return _to_response(await omdb.recommendations_for(media_type.value, imdb_id, page))
