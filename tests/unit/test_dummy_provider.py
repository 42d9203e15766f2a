import pytest

from core.errors import TransportError
from core.models.record import CandidateResult
from core.providers.dummy.adapter import DummyCatalogProvider


def test_dummy_provider_serves_canned_payloads() -> None:
    provider = DummyCatalogProvider(
        searches={"Heat": [{"id": 949, "title": "Heat", "release_date": "1995-12-15"}]},
        details={949: {"imdb_id": "tt0113277"}},
        credits={949: {"cast": [], "crew": []}},
    )
    assert provider.search_movie("Heat") == [CandidateResult(949, "1995-12-15", "Heat")]
    assert provider.search_movie("Cold") == []
    assert provider.movie_details(949)["imdb_id"] == "tt0113277"
    assert provider.movie_credits(949) == {"cast": [], "crew": []}
    assert provider.calls == [
        ("search_movie", "Heat"),
        ("search_movie", "Cold"),
        ("movie_details", 949),
        ("movie_credits", 949),
    ]


def test_dummy_provider_raises_configured_failures() -> None:
    provider = DummyCatalogProvider(searches={"Heat": TransportError("down")})
    with pytest.raises(TransportError):
        provider.search_movie("Heat")
    with pytest.raises(TransportError):
        provider.movie_details(1)
