"""Tests for the OMDb client and the search endpoints."""
import asyncio

import httpx
import pytest

from bingekaro.app_state import get_omdb_client
from bingekaro.errors import NotFound, UpstreamUnavailable
from bingekaro.search.omdb import OMDbClient
from bingekaro.settings import Settings

SEARCH = "/api/v1/search"

INCEPTION_DETAIL = {
    "Title": "Inception",
    "Year": "2010",
    "Type": "movie",
    "Poster": "https://example.com/inception.jpg",
    "Genre": "Action, Adventure, Sci-Fi",
    "Director": "Christopher Nolan",
    "Actors": "Leonardo DiCaprio, Joseph Gordon-Levitt",
    "Plot": "A thief who steals corporate secrets.",
    "Runtime": "148 min",
    "imdbRating": "8.8",
    "imdbID": "tt1375666",
    "BoxOffice": "N/A",
    "Response": "True",
}

SEARCH_HITS = {
    "Search": [
        {"Title": "Inception", "Year": "2010", "imdbID": "tt1375666", "Type": "movie", "Poster": "N/A"},
        {"Title": "Mad Max: Fury Road", "Year": "2015", "imdbID": "tt1392190", "Type": "movie", "Poster": "N/A"},
    ],
    "totalResults": "23",
    "Response": "True",
}


def fake_omdb(request: httpx.Request) -> httpx.Response:
    """Minimal stand-in for the OMDb query API."""
    params = request.url.params
    if params.get("apikey") != "test-key":
        return httpx.Response(401, json={"Response": "False", "Error": "Invalid API key!"})
    if "i" in params:
        if params["i"] == "tt1375666":
            return httpx.Response(200, json=INCEPTION_DETAIL)
        return httpx.Response(200, json={"Response": "False", "Error": "Incorrect IMDb ID."})
    if params.get("s") == "zzzz":
        return httpx.Response(200, json={"Response": "False", "Error": "Movie not found!"})
    if params.get("s") == "broken":
        return httpx.Response(200, text="<html>oops</html>")
    if params.get("s") == "many":
        return httpx.Response(200, json={"Response": "False", "Error": "Too many results."})
    return httpx.Response(200, json=SEARCH_HITS)


def make_client(handler=fake_omdb, api_key="test-key") -> OMDbClient:
    settings = Settings(
        _env_file=None,
        jwt_secret_key="test-secret-key-for-testing-only",
        omdb_api_key=api_key,
        omdb_base_url="https://omdb.test/",
    )
    return OMDbClient(settings, httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def run(coro):
    return asyncio.run(coro)


class TestOMDbClient:

    def test_search_maps_results(self):
        page = run(make_client().search_by_title("inception", "movie", 1))
        assert page.total_results == 23
        assert page.total_pages == 3
        assert [hit.imdb_id for hit in page.results] == ["tt1375666", "tt1392190"]
        assert page.results[0].poster is None

    def test_search_sends_type_and_page(self):
        seen = {}

        def handler(request):
            seen.update(request.url.params)
            return httpx.Response(200, json=SEARCH_HITS)

        run(make_client(handler).search_by_title("inception", "series", 2))
        assert seen["s"] == "inception"
        assert seen["type"] == "series"
        assert seen["page"] == "2"
        assert seen["apikey"] == "test-key"

    def test_search_not_found_is_empty_page(self):
        page = run(make_client().search_by_title("zzzz"))
        assert page.results == []
        assert page.total_results == 0

    def test_search_other_error_is_upstream(self):
        with pytest.raises(UpstreamUnavailable):
            run(make_client().search_by_title("many"))

    def test_get_by_id(self):
        detail = run(make_client().get_by_id("tt1375666"))
        assert detail.title == "Inception"
        assert detail.genre == ["Action", "Adventure", "Sci-Fi"]
        assert detail.rating == 8.8
        assert detail.actors == ["Leonardo DiCaprio", "Joseph Gordon-Levitt"]
        assert detail.box_office is None

    def test_get_by_id_not_found(self):
        with pytest.raises(NotFound):
            run(make_client().get_by_id("tt0000000"))

    def test_http_error_status(self):
        with pytest.raises(UpstreamUnavailable):
            run(make_client(api_key="wrong-key").search_by_title("inception"))

    def test_non_json_body(self):
        with pytest.raises(UpstreamUnavailable):
            run(make_client().search_by_title("broken"))

    def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UpstreamUnavailable):
            run(make_client(handler).search_by_title("inception"))

    def test_missing_api_key(self):
        client = make_client(api_key=None)
        assert client.configured is False
        with pytest.raises(UpstreamUnavailable):
            run(client.search_by_title("inception"))

    def test_recommendations_use_first_genre_and_skip_source(self):
        searched = []

        def handler(request):
            if "i" in request.url.params:
                return fake_omdb(request)
            searched.append(request.url.params["s"])
            return httpx.Response(200, json=SEARCH_HITS)

        page = run(make_client(handler).recommendations_for("movie", "tt1375666"))
        assert searched == ["Action"]
        assert [hit.imdb_id for hit in page.results] == ["tt1392190"]

    def test_genres(self):
        assert "Film-Noir" in OMDbClient.genres("movie")
        assert "Film-Noir" not in OMDbClient.genres("series")


@pytest.fixture
def omdb_client(client):
    from bingekaro.main import app

    app.dependency_overrides[get_omdb_client] = lambda: make_client()
    yield client


class TestSearchEndpoints:

    def test_search(self, omdb_client):
        response = omdb_client.get(SEARCH, params={"q": "inception", "type": "movie"})
        assert response.status_code == 200
        data = response.json()
        assert data["total_results"] == 23
        assert data["results"][0]["title"] == "Inception"

    def test_search_blank_query(self, omdb_client):
        assert omdb_client.get(SEARCH, params={"q": " "}).status_code == 400

    def test_search_page_out_of_range(self, omdb_client):
        assert omdb_client.get(SEARCH, params={"q": "x", "page": 0}).status_code == 422

    def test_title_detail(self, omdb_client):
        response = omdb_client.get(f"{SEARCH}/title/tt1375666")
        assert response.status_code == 200
        assert response.json()["director"] == "Christopher Nolan"

    def test_title_not_found(self, omdb_client):
        assert omdb_client.get(f"{SEARCH}/title/tt0000000").status_code == 404

    def test_upstream_failure_is_503(self, omdb_client):
        response = omdb_client.get(SEARCH, params={"q": "broken"})
        assert response.status_code == 503

    def test_popular(self, omdb_client):
        assert omdb_client.get(f"{SEARCH}/popular/series").status_code == 200
        assert omdb_client.get(f"{SEARCH}/popular/anime").status_code == 422

    def test_genres(self, omdb_client):
        response = omdb_client.get(f"{SEARCH}/genres/movie")
        assert response.status_code == 200
        assert "Drama" in response.json()["genres"]

    def test_recommendations(self, omdb_client):
        response = omdb_client.get(f"{SEARCH}/recommendations/movie/tt1375666")
        assert response.status_code == 200
        assert [hit["imdb_id"] for hit in response.json()["results"]] == ["tt1392190"]
