import pytest

from core.errors import TransportError
from core.movie_metadata import FieldLimits, aggregate_metadata
from core.providers.dummy.adapter import DummyCatalogProvider

MOVIE_ID = 264660

DETAIL = {
    "id": MOVIE_ID,
    "imdb_id": "tt0470752",
    "title": "Ex Machina",
    "release_date": "2015-01-21",
    "budget": 15000000,
    "revenue": 36869414,
    "runtime": 108,
    "tagline": "",
    "video": False,
    "genres": [{"id": 18, "name": "Drama"}, {"id": 878, "name": "Science Fiction"}],
    "production_companies": [{"id": 1, "name": "DNA Films"}, {"id": 2, "name": "Film4 Productions"}],
    "belongs_to_collection": None,
    "spoken_languages": [{"english_name": "English", "iso_639_1": "en", "name": "English"}],
}

CREDITS = {
    "cast": [
        {"name": "Domhnall Gleeson"},
        {"name": "Alicia Vikander"},
        {"name": "Oscar Isaac"},
        {"name": "Sonoya Mizuno"},
        {"name": "Oscar Isaac"},
        {"name": "Corey Johnson"},
        {"name": "Claire Selby"},
    ],
    "crew": [
        {"name": "Alex Garland", "department": "Directing", "job": "Director"},
        {"name": "Alex Garland", "department": "Writing", "job": "Writer"},
        {"name": "Alex Garland", "department": "Writing", "job": "Writer"},
        {"name": "Someone Else", "department": "Directing", "job": "Script Supervisor"},
    ],
}


def _provider(**overrides) -> DummyCatalogProvider:
    details = {MOVIE_ID: overrides.get("detail", DETAIL)}
    credits = {MOVIE_ID: overrides.get("credits", CREDITS)}
    return DummyCatalogProvider(details=details, credits=credits)


def test_builtin_fields_in_order() -> None:
    record = aggregate_metadata(_provider(), MOVIE_ID)
    assert record.keys() == ["TMDB", "IMDb", "Cast", "Written By", "Directed By"]
    assert record.get("TMDB") == f"movie/{MOVIE_ID}"
    assert record.get("IMDb") == "tt0470752"
    assert record.get("Cast") == [
        "Domhnall Gleeson",
        "Alicia Vikander",
        "Oscar Isaac",
        "Sonoya Mizuno",
        "Corey Johnson",
    ]
    assert record.get("Written By") == ["Alex Garland (Writer)"]
    assert record.get("Directed By") == ["Alex Garland"]


def test_skip_removes_categories_and_keeps_order() -> None:
    record = aggregate_metadata(_provider(), MOVIE_ID, skip=["Cast", "IMDbID"])
    assert record.keys() == ["TMDB", "Written By", "Directed By"]


def test_skip_all_credit_categories_avoids_credits_call() -> None:
    provider = _provider()
    record = aggregate_metadata(provider, MOVIE_ID, skip=["cast", "writers", "directors"])
    assert record.keys() == ["TMDB", "IMDb"]
    assert ("movie_credits", MOVIE_ID) not in provider.calls


def test_only_tmdb_id_needs_no_remote_calls() -> None:
    provider = DummyCatalogProvider()
    record = aggregate_metadata(provider, 7, skip=["IMDbID", "Cast", "Writers", "Directors"])
    assert record.items() == [("TMDB", "movie/7")]
    assert provider.calls == []


def test_missing_imdb_id_is_omitted_with_warning(capsys) -> None:
    detail = dict(DETAIL, imdb_id=None)
    record = aggregate_metadata(_provider(detail=detail), MOVIE_ID)
    assert "IMDb" not in record
    assert record.keys() == ["TMDB", "Cast", "Written By", "Directed By"]
    assert "Skipping IMDb" in capsys.readouterr().out


def test_extra_fields_are_formatted_by_shape() -> None:
    record = aggregate_metadata(
        _provider(),
        MOVIE_ID,
        extra_fields=["budget", "genres", "release_date", "runtime", "production_companies", "spoken_languages"],
    )
    assert record.keys()[5:] == [
        "Budget",
        "Genres",
        "Release Date",
        "Runtime",
        "Production Companies",
        "Spoken Languages",
    ]
    assert record.get("Budget") == "$15,000,000"
    assert record.get("Genres") == ["Drama", "Science Fiction"]
    assert record.get("Release Date") == "2015-01-21"
    assert record.get("Runtime") == "108"
    assert record.get("Spoken Languages") == ["English"]


def test_generic_extra_field_falls_back_to_payload_key() -> None:
    record = aggregate_metadata(_provider(), MOVIE_ID, skip=["Cast"], extra_fields=["video"])
    assert record.get("Video") == "No"


def test_missing_or_empty_extra_fields_are_skipped(capsys) -> None:
    detail = dict(DETAIL, revenue=0)
    record = aggregate_metadata(
        _provider(detail=detail),
        MOVIE_ID,
        extra_fields=["tagline", "belongs_to_collection", "revenue", "not_a_field"],
    )
    assert record.keys() == ["TMDB", "IMDb", "Cast", "Written By", "Directed By"]
    out = capsys.readouterr().out
    assert "Field 'tagline' is empty or missing" in out
    assert "Field 'not_a_field' is empty or missing" in out


def test_malformed_extra_field_is_partial_failure(capsys) -> None:
    detail = dict(DETAIL, budget="unknown")
    record = aggregate_metadata(_provider(detail=detail), MOVIE_ID, extra_fields=["budget", "genres"])
    assert "Budget" not in record
    assert record.get("Genres") == ["Drama", "Science Fiction"]
    assert "Skipping Budget" in capsys.readouterr().out


def test_duplicate_extra_fields_first_wins(capsys) -> None:
    record = aggregate_metadata(
        _provider(),
        MOVIE_ID,
        skip=["IMDbID"],
        extra_fields=["cast", "budget", "Budget", "genres"],
    )
    assert record.keys() == ["TMDB", "Cast", "Written By", "Directed By", "Budget", "Genres"]
    assert record.get("Cast")[0] == "Domhnall Gleeson"
    out = capsys.readouterr().out
    assert "Extra field 'cast' duplicates 'Cast'" in out
    assert "Extra field 'Budget' duplicates 'Budget'" in out


def test_credits_failure_keeps_detail_fields(capsys) -> None:
    provider = DummyCatalogProvider(details={MOVIE_ID: DETAIL})
    record = aggregate_metadata(provider, MOVIE_ID, extra_fields=["budget"])
    assert record.keys() == ["TMDB", "IMDb", "Budget"]
    assert "credits unavailable" in capsys.readouterr().out


def test_detail_failure_keeps_credit_fields() -> None:
    provider = DummyCatalogProvider(details={MOVIE_ID: TransportError("500")}, credits={MOVIE_ID: CREDITS})
    record = aggregate_metadata(provider, MOVIE_ID, extra_fields=["budget"])
    assert record.keys() == ["TMDB", "Cast", "Written By", "Directed By"]


def test_both_fetches_failing_raises_transport_error() -> None:
    with pytest.raises(TransportError):
        aggregate_metadata(DummyCatalogProvider(), MOVIE_ID)


def test_detail_only_failure_still_yields_tmdb_entry(capsys) -> None:
    provider = DummyCatalogProvider(details={MOVIE_ID: TransportError("500")}, credits={MOVIE_ID: CREDITS})
    record = aggregate_metadata(provider, MOVIE_ID, skip=["Cast", "Writers", "Directors"])
    assert record.keys() == ["TMDB"]
    assert provider.calls == [("movie_details", MOVIE_ID)]
    assert "Skipping IMDb" in capsys.readouterr().out


def test_infinite_budget_is_skipped(capsys) -> None:
    detail = dict(DETAIL, budget=float("inf"))
    record = aggregate_metadata(_provider(detail=detail), MOVIE_ID, extra_fields=["budget"])
    assert "Budget" not in record
    assert "Skipping Budget" in capsys.readouterr().out


def test_limits_are_configurable() -> None:
    record = aggregate_metadata(_provider(), MOVIE_ID, limits=FieldLimits(cast=2))
    assert record.get("Cast") == ["Domhnall Gleeson", "Alicia Vikander"]
