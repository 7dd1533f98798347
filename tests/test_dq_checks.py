import datetime as dt

import pandas as pd

from shark_attacks.utils.dq_checks import (
    check_date_year,
    check_dense_key,
    check_min_rows,
    check_no_duplicate_rows,
    check_no_injury_not_fatal,
    check_time_format,
    check_unique_original_order,
    run_table_checks,
    summarize_results,
)


def _table():
    return pd.DataFrame(
        {
            "incident_number": [1, 2, 3],
            "date": [dt.date(1894, 7, 15), None, dt.date(2018, 6, 25)],
            "year": [1894, 1950, 2018],
            "sex": ["M", None, "F"],
            "fatal": ["N", "Y", None],
            "time": ["Morning", "23:59", None],
            "body_part_injured": ["No Injury", None, "Leg(s)"],
        }
    )


def test_clean_table_passes_every_check():
    result = summarize_results(run_table_checks(_table()))
    assert result.ok
    assert result.failed == []


def test_min_rows():
    assert check_min_rows(0)["ok"] is False
    assert check_min_rows(5, min_rows=5)["ok"] is True


def test_dense_key_detects_gap_and_duplicate():
    df = _table()
    df["incident_number"] = [1, 3, 4]
    assert check_dense_key(df)["ok"] is False
    df["incident_number"] = [1, 2, 2]
    assert check_dense_key(df)["ok"] is False
    assert check_dense_key(df.drop(columns=["incident_number"]))["ok"] is False


def test_time_format():
    df = _table()
    df.loc[1, "time"] = "24:10"
    check = check_time_format(df)
    assert check["ok"] is False
    assert check["value"] == ["24:10"]


def test_no_injury_not_fatal():
    df = _table()
    df.loc[0, "fatal"] = "Y"
    check = check_no_injury_not_fatal(df)
    assert check["ok"] is False
    assert check["value"] == [1]


def test_date_year_consistency():
    df = _table()
    df.loc[2, "year"] = 2017
    assert check_date_year(df)["ok"] is False


def test_duplicate_checks():
    dupes = pd.DataFrame({"incident_number": [7]})
    assert check_no_duplicate_rows(dupes)["ok"] is False
    assert check_no_duplicate_rows(dupes.iloc[0:0])["ok"] is True
    assert check_unique_original_order([3000.0])["ok"] is False
    assert check_unique_original_order([])["ok"] is True


def test_summarize_results():
    result = summarize_results([{"check": "a", "ok": True}, {"check": "b", "ok": False}])
    assert result.ok is False
    assert [c["check"] for c in result.failed] == ["b"]
