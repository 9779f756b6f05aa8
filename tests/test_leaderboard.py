import datetime
import json

import pytest

from griftline.errors import InvalidQuery
from griftline.models.leaderboard_model import DateRange
from griftline.services.cache import LEADERBOARD_SOURCE_KEY
from griftline.services.leaderboard import get_entries_for_leaderboard, sort_entries

from conftest import make_entry, scam_entry


@pytest.fixture
def leaderboard_db(seed_db):
    entries = [
        scam_entry("2021-03-01-0", 500),
        scam_entry("2021-06-15-0", 100),
        scam_entry("2021-06-15-1", 100),
        scam_entry("2022-02-01-0", 2_000),
        scam_entry("2022-11-11-0", 50),
        scam_entry("2023-01-05-0", 750, scamAmountDetails={
            "total": 750, "hasScamAmount": True, "textOverride": "at least $750",
        }),
        make_entry("2022-05-05-0"),
        make_entry("2022-05-06-0", scamAmountDetails={"total": 9_999, "hasScamAmount": False}),
    ]
    return seed_db(entries, metadata={"griftTotal": 3_500, "collections": {}})


def test_amount_desc_is_non_increasing_and_capped(leaderboard_db, cache):
    result = get_entries_for_leaderboard(
        leaderboard_db, cache, date_range="all", sort_by="amount", sort_dir="desc", page=1, page_size=10
    )
    assert len(result.entries) <= 10
    totals = [e.scamAmountDetails.total for e in result.entries]
    assert totals == sorted(totals, reverse=True)
    assert all(e.scamAmountDetails.hasScamAmount for e in result.entries)
    assert result.totalCount == 6


def test_equal_amounts_fall_back_to_id(leaderboard_db, cache):
    result = get_entries_for_leaderboard(leaderboard_db, cache, sort_by="amount", sort_dir="desc")
    tied = [e.id for e in result.entries if e.scamAmountDetails.total == 100]
    assert tied == ["2021-06-15-0", "2021-06-15-1"]


def test_all_range_reports_grift_total(leaderboard_db, cache):
    result = get_entries_for_leaderboard(leaderboard_db, cache)
    assert result.scamTotal == 3_500


def test_all_range_without_metadata_sums_entries(seed_db, cache):
    db = seed_db([scam_entry("2021-01-01-0", 10), scam_entry("2021-01-02-0", 15)])
    assert get_entries_for_leaderboard(db, cache).scamTotal == 25


def test_year_range_sums_only_filtered_entries(seed_db, cache):
    db = seed_db(
        [scam_entry("2021-01-01-0", 100), scam_entry("2022-01-01-0", 200)],
        metadata={"griftTotal": 300},
    )
    result = get_entries_for_leaderboard(db, cache, date_range="2021")
    assert [e.id for e in result.entries] == ["2021-01-01-0"]
    assert result.scamTotal == 100
    assert result.totalCount == 1


def test_explicit_range_is_inclusive(leaderboard_db, cache):
    result = get_entries_for_leaderboard(
        leaderboard_db, cache, date_range="2021-06-15:2022-02-01", sort_by="date", sort_dir="asc"
    )
    assert [e.id for e in result.entries] == ["2021-06-15-0", "2021-06-15-1", "2022-02-01-0"]
    assert result.scamTotal == 2_200


def test_open_ended_range(leaderboard_db, cache):
    result = get_entries_for_leaderboard(leaderboard_db, cache, date_range="2022-06-01:")
    assert {e.id for e in result.entries} == {"2022-11-11-0", "2023-01-05-0"}


def test_date_desc_sort(leaderboard_db, cache):
    result = get_entries_for_leaderboard(leaderboard_db, cache, sort_by="date", sort_dir="desc")
    dates = [e.date for e in result.entries]
    assert dates == sorted(dates, reverse=True)


def test_pages_slice_sorted_list(leaderboard_db, cache):
    first = get_entries_for_leaderboard(leaderboard_db, cache, page=1, page_size=4)
    second = get_entries_for_leaderboard(leaderboard_db, cache, page=2, page_size=4)
    assert len(first.entries) == 4
    assert len(second.entries) == 2
    assert not {e.id for e in first.entries} & {e.id for e in second.entries}


def test_page_past_the_end_is_empty(leaderboard_db, cache):
    result = get_entries_for_leaderboard(leaderboard_db, cache, page=5, page_size=10)
    assert result.entries == []
    assert result.totalCount == 6


def test_text_override_is_display_only(leaderboard_db, cache):
    result = get_entries_for_leaderboard(leaderboard_db, cache, sort_by="amount", sort_dir="desc")
    overridden = next(e for e in result.entries if e.id == "2023-01-05-0")
    assert overridden.scamAmountDetails.display_amount == "at least $750"
    assert [e.id for e in result.entries].index("2023-01-05-0") == 1


def test_source_list_is_served_from_cache(db, cache):
    cache.get.return_value = json.dumps([scam_entry("2020-01-01-0", 42)])
    result = get_entries_for_leaderboard(db, cache, date_range="2020")
    assert [e.id for e in result.entries] == ["2020-01-01-0"]
    cache.setex.assert_not_called()


def test_source_list_is_cached_on_miss(leaderboard_db, cache):
    get_entries_for_leaderboard(leaderboard_db, cache, date_range="2021")
    key, _ttl, payload = cache.setex.call_args_list[0].args
    assert key == LEADERBOARD_SOURCE_KEY
    assert len(json.loads(payload)) == 6


@pytest.mark.parametrize("kwargs", [
    {"page": 0},
    {"page_size": 0},
    {"sort_by": "title"},
    {"sort_dir": "sideways"},
    {"date_range": "last-week"},
])
def test_invalid_arguments(leaderboard_db, cache, kwargs):
    with pytest.raises(InvalidQuery):
        get_entries_for_leaderboard(leaderboard_db, cache, **kwargs)


class TestDateRange:

    def test_all(self):
        assert DateRange.parse("all").is_all
        assert DateRange.parse(None).is_all

    def test_year(self):
        rng = DateRange.parse("2022")
        assert rng.start == datetime.date(2022, 1, 1)
        assert rng.end == datetime.date(2022, 12, 31)
        assert rng.contains(datetime.date(2022, 12, 31))
        assert not rng.contains(datetime.date(2023, 1, 1))

    def test_reversed_range(self):
        with pytest.raises(InvalidQuery):
            DateRange.parse("2022-05-01:2022-01-01")

    def test_bad_date(self):
        with pytest.raises(InvalidQuery):
            DateRange.parse("2022-13-01:")


def test_sort_entries_keeps_id_order_on_date_ties():
    docs = [scam_entry("2021-01-01-2", 1), scam_entry("2021-01-01-0", 1), scam_entry("2021-01-01-1", 1)]
    ordered = sort_entries(docs, "date", "desc")
    assert [d["id"] for d in ordered] == ["2021-01-01-0", "2021-01-01-1", "2021-01-01-2"]
