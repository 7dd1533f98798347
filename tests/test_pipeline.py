import datetime as dt

import pandas as pd
import pytest

from shark_attacks.incidents.schema import OUTPUT_COLUMNS
from shark_attacks.processing.clean_shark_attacks import clean_records


@pytest.fixture
def result(raw_rows, settings):
    return clean_records(raw_rows, settings)


def _by_case(table, case_number):
    rows = table[table["case_number"] == case_number]
    assert len(rows) == 1, case_number
    return rows.iloc[0]


def test_metrics(result):
    assert result.metrics == {
        "raw_rows": 14,
        "empty_rows_deleted": 1,
        "non_shark_rows_deleted": 3,
        "devoid_rows_deleted": 1,
        "clean_rows": 9,
        "duplicate_rows": 0,
    }


def test_output_schema(result):
    assert list(result.table.columns) == OUTPUT_COLUMNS


def test_incident_number_dense_and_ordered(result):
    table = result.table
    assert table["incident_number"].tolist() == list(range(1, 10))
    assert table["case_number"].tolist() == [
        "1894.07.15.R",
        "1950.01.05",
        "1960.07.04",
        "1970.05.05.a",
        "1970.05.05.b",
        "2005.08.13",
        "2018.06.09",
        "2018.06.18",
        "2018.06.25",
    ]


def test_example_scenarios(result):
    table = result.table
    assert _by_case(table, "2018.06.09")["time"] == "14:30"
    assert _by_case(table, "1894.07.15.R")["time"] == "Morning"
    assert _by_case(table, "2018.06.25")["body_part_injured"] == "No Injury"
    assert _by_case(table, "2018.06.09")["body_part_injured"] == "Multiple Body Parts Injured"
    assert _by_case(table, "2018.06.09")["species_identified"] == "Great White Shark"
    assert _by_case(table, "2018.06.09")["country"] == "United Arab Emirates"


def test_time_column(result):
    times = dict(zip(result.table["case_number"], result.table["time"]))
    assert times == {
        "1894.07.15.R": "Morning",
        "1950.01.05": "Evening",
        "1960.07.04": "12:00",
        "1970.05.05.a": "15:00",
        "1970.05.05.b": "05:00",
        "2005.08.13": "Afternoon",
        "2018.06.09": "14:30",
        "2018.06.18": "14:00",
        "2018.06.25": "18:00",
    }


def test_sex_and_fatal(result):
    table = result.table
    assert _by_case(table, "2018.06.09")["sex"] == "M"  # name "male"
    assert _by_case(table, "1960.07.04")["sex"] == "F"  # name "a girl"
    assert _by_case(table, "2005.08.13")["sex"] == "M"  # override, raw 'lli'
    assert _by_case(table, "1950.01.05")["sex"] is None

    assert _by_case(table, "1894.07.15.R")["fatal"] == "N"  # override
    assert _by_case(table, "1950.01.05")["fatal"] == "Y"  # remains recovered
    assert _by_case(table, "1960.07.04")["fatal"] == "N"
    assert _by_case(table, "2018.06.09")["fatal"] is None  # UNKNOWN, no evidence


def test_other_columns(result):
    table = result.table
    assert _by_case(table, "1950.01.05")["country"] == "St. Maarten"
    assert _by_case(table, "1960.07.04")["country"] == "EGYPT (unconfirmed)"
    assert _by_case(table, "2018.06.18")["name"] == "Adyson McNeely"
    assert _by_case(table, "2018.06.18")["species_identified"] == "Not Specified"
    assert _by_case(table, "2018.06.18")["body_part_injured"] == "Leg(s)"
    assert _by_case(table, "1894.07.15.R")["date"] == dt.date(1894, 7, 15)
    assert _by_case(table, "1894.07.15.R")["year"] == 1894


def test_overrides_reported(result):
    assert [e["field"] for e in result.overrides.applied] == ["fatal", "sex"]
    assert result.overrides.unmatched == []


def test_duplicated_original_order_is_a_finding(result):
    assert result.integrity.duplicate_order_values == [3000.0]
    assert [c["check"] for c in result.dq.failed] == ["unique_original_order"]


def test_no_injury_is_never_fatal(result):
    table = result.table
    no_injury = table[table["body_part_injured"] == "No Injury"]
    assert not (no_injury["fatal"] == "Y").any()


def test_idempotent(result, settings):
    again = clean_records(result.table, settings)
    pd.testing.assert_frame_equal(again.table, result.table)
    assert again.metrics["clean_rows"] == result.metrics["clean_rows"]
    assert again.metrics["non_shark_rows_deleted"] == 0
    assert again.dq.ok


def test_full_row_duplicates_are_reported_not_removed(raw_rows, settings):
    twin = dict(raw_rows[0])
    twin["original order"] = "7000"
    result = clean_records(raw_rows + [twin], settings)

    assert len(result.table) == 10
    assert result.integrity.duplicate_row_count == 1
    assert result.integrity.duplicate_rows["incident_number"].tolist() == [10]
    assert "no_duplicate_rows" in [c["check"] for c in result.dq.failed]
