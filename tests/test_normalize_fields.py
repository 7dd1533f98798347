import datetime as dt

from shark_attacks.processing.normalize_fields import (
    align_date_year,
    normalize_case_number,
    normalize_country,
    normalize_sex,
    run_normalization_passes,
    to_date,
    to_year,
)
from shark_attacks.processing.record_store import RecordStore
from shark_attacks.utils.text_utils import blank_to_none, canonicalize_alias, collapse_placeholder, trim


def test_text_utils():
    assert trim("  Australia ") == "Australia"
    assert trim(1945) == 1945
    assert trim(None) is None
    assert collapse_placeholder(" . ", ["", "."]) is None
    assert collapse_placeholder("Surfing", ["", "."]) == "Surfing"
    assert canonicalize_alias("Boat", {"Boat": "Boating"}) == "Boating"
    assert canonicalize_alias("Sea Disaster", {"Boat": "Boating"}) == "Sea Disaster"
    assert blank_to_none("   ") is None


def test_case_number_separators():
    assert normalize_case_number(" 2018-06-25 ") == "2018.06.25"
    assert normalize_case_number("1970/05/05.a") == "1970.05.05.a"
    assert normalize_case_number(None) is None


def test_dates_and_years():
    assert to_date("25-Jun-2018") == dt.date(2018, 6, 25)
    assert to_date("15-Jul-1894") == dt.date(1894, 7, 15)
    assert to_date("0077-01-01") == dt.date(77, 1, 1)
    assert to_date(dt.datetime(2018, 6, 25, 10, 30)) == dt.date(2018, 6, 25)
    assert to_date("no date") is None
    assert to_year("2018") == 2018
    assert to_year(1950.0) == 1950
    assert to_year("unknown") is None


def test_year_is_source_of_truth():
    assert align_date_year(dt.date(2029, 6, 3), 1929) == dt.date(1929, 6, 3)
    assert align_date_year(dt.date(2016, 2, 29), 2015) == dt.date(2015, 2, 28)
    assert align_date_year(dt.date(1845, 1, 1), 0) == dt.date(1845, 1, 1)
    assert align_date_year(None, 1929) is None


def test_country():
    aliases = {"United Arab Emirates (UAE)": "United Arab Emirates", "St. Maartin": "St. Maarten"}
    assert normalize_country("United Arab Emirates (UAE)", aliases) == "United Arab Emirates"
    assert normalize_country(" St. Maartin", aliases) == "St. Maarten"
    assert normalize_country("EGYPT ?", aliases) == "EGYPT (unconfirmed)"
    assert normalize_country("", aliases) is None


def test_sex():
    assert normalize_sex("M ") == "M"
    assert normalize_sex("f") == "F"
    assert normalize_sex("N") is None
    assert normalize_sex(".") is None
    assert normalize_sex("lli") is None


def test_passes_on_store(settings):
    store = RecordStore.load(
        [
            {"Type": "Boat", "Activity": ".", "Area": "  ", "Fatal (Y/N)": " y", "Date": "03-Jun-2029", "Year": "1929"},
            {"Type": "Unprovoked", "Activity": "Surfing", "Area": " Hawaii", "Fatal (Y/N)": "F", "Date": None, "Year": "2005"},
        ]
    )
    store = run_normalization_passes(store, settings)
    df = store.df
    assert df["type"].tolist() == ["Boating", "Unprovoked"]
    assert df["activity"].tolist() == [None, "Surfing"]
    assert df["area"].tolist() == [None, "Hawaii"]
    assert df["fatal"].tolist() == ["Y", "Y"]
    assert df["date"].tolist() == [dt.date(1929, 6, 3), None]
    assert df["year"].tolist() == [1929, 2005]


def test_checked_fatal_value_kept_as_non_fatal(settings):
    store = RecordStore.load([{"Fatal (Y/N)": "2017"}, {"Fatal (Y/N)": "2016"}, {"Fatal (Y/N)": "UNKNOWN"}])
    store = run_normalization_passes(store, settings)
    assert store.df["fatal"].tolist() == ["N", None, None]


def test_passes_skip_missing_columns(settings):
    store = RecordStore.load([{"Name": " Brian Kang "}])
    store = run_normalization_passes(store, settings)
    assert store.columns == ["name"]
    assert store.df.loc[0, "name"] == "Brian Kang"
