import pytest
import requests

from core.errors import TransportError
from core.models.record import CandidateResult
from tmdb import client as tmdb_client
from tmdb.client import normalize_title, title_similarity


class _Response:
    def __init__(self, payload=None, status_code: int = 200, bad_json: bool = False) -> None:
        self._payload = payload
        self.status_code = status_code
        self._bad_json = bad_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def json(self):
        if self._bad_json:
            raise ValueError("not json")
        return self._payload


class _Session:
    def __init__(self, response=None, exc: Exception | None = None) -> None:
        self.response = response
        self.exc = exc
        self.calls = []

    def get(self, url, params, timeout):
        self.calls.append((url, params, timeout))
        if self.exc:
            raise self.exc
        return self.response


def test_title_similarity_prefers_closer_match() -> None:
    assert normalize_title("Top Gun") == "top gun"
    assert title_similarity("Top Gun", "Top Gun Maverick") > title_similarity(
        "Top Gun", "The Berlin Wall Escape to Freedom"
    )


def test_title_similarity_handles_accents() -> None:
    assert title_similarity("Amélie", "Amelie") > 0.7
    assert title_similarity("", "Amelie") == 0.0


def test_tmdb_request_passes_api_key_and_timeout() -> None:
    session = _Session(_Response({"results": []}))
    data = tmdb_client.tmdb_request(session, "key", "/search/movie", {"query": "x"}, timeout=5)
    assert data == {"results": []}
    url, params, timeout = session.calls[0]
    assert url == "https://api.themoviedb.org/3/search/movie"
    assert params == {"query": "x", "api_key": "key"}
    assert timeout == 5


@pytest.mark.parametrize(
    "session",
    [
        _Session(_Response({}, status_code=401)),
        _Session(exc=requests.ConnectionError("offline")),
        _Session(exc=requests.Timeout("slow")),
        _Session(_Response(bad_json=True)),
        _Session(_Response(["not", "an", "object"])),
    ],
)
def test_tmdb_request_failures_raise_transport_error(session) -> None:
    with pytest.raises(TransportError):
        tmdb_client.tmdb_request(session, "key", "/movie/1", {})


def test_tmdb_search_movie_preserves_order_and_skips_bad_rows() -> None:
    payload = {
        "results": [
            {"id": 264660, "title": "Ex Machina", "release_date": "2015-01-21"},
            {"title": "no id"},
            "garbage",
            {"id": 1, "title": "Ex Machina Too", "release_date": ""},
        ]
    }
    session = _Session(_Response(payload))
    results = tmdb_client.tmdb_search_movie(session, "key", "Ex Machina", "en-US")
    assert results == [
        CandidateResult(264660, "2015-01-21", "Ex Machina"),
        CandidateResult(1, None, "Ex Machina Too"),
    ]
    params = session.calls[0][1]
    assert params["query"] == "Ex Machina"
    assert params["language"] == "en-US"


def test_tmdb_movie_credits_normalizes_lists() -> None:
    session = _Session(_Response({"id": 1, "cast": None}))
    credits = tmdb_client.tmdb_movie_credits(session, "key", 1, "en-US")
    assert credits["cast"] == []
    assert credits["crew"] == []
    assert session.calls[0][0].endswith("/movie/1/credits")


def test_tmdb_movie_details_endpoint() -> None:
    session = _Session(_Response({"id": 1, "imdb_id": "tt1"}))
    assert tmdb_client.tmdb_movie_details(session, "key", 1, "en-US")["imdb_id"] == "tt1"
    assert session.calls[0][0].endswith("/movie/1")
