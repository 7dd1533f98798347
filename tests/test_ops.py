import duckdb
import pytest

from shark_attacks.ops.alerts import active_findings, record_dq_findings
from shark_attacks.ops.runs import end_run, get_run, start_run
from shark_attacks.utils.dq_checks import summarize_results


@pytest.fixture
def con():
    c = duckdb.connect(":memory:")
    yield c
    c.close()


def test_run_ledger(con):
    start_run(con, "r1", "shark_attacks_clean", params={"source": "attacks.csv"})
    assert get_run(con, "r1")["status"] == "RUNNING"

    end_run(con, "r1", status="SUCCESS", exit_code=0, metrics={"raw_rows": 14, "clean_rows": 9})
    run = get_run(con, "r1")
    assert run["status"] == "SUCCESS"
    assert run["exit_code"] == 0
    assert run["raw_rows"] == 14
    assert run["clean_rows"] == 9
    assert run["duplicate_rows"] is None
    assert run["ended_at"] is not None


def test_failed_run_keeps_missing_metrics(con):
    start_run(con, "r2", "shark_attacks_clean")
    end_run(con, "r2", status="FAILED", exit_code=1)
    run = get_run(con, "r2")
    assert run["status"] == "FAILED"
    assert run["raw_rows"] is None
    assert get_run(con, "missing") is None


def test_findings_one_per_failed_check(con):
    dq = summarize_results(
        [
            {"check": "min_rows", "value": 0, "ok": False},
            {"check": "unique_original_order", "value": [3000.0], "ok": False},
            {"check": "time_format", "value": [], "ok": True},
        ]
    )
    ids = record_dq_findings(con, "r1", dq)
    assert len(ids) == 2

    findings = active_findings(con, "r1")
    assert {f["check_name"]: f["severity"] for f in findings} == {
        "min_rows": "ERROR",
        "unique_original_order": "WARN",
    }

    # re-recording the run closes the previous findings
    record_dq_findings(con, "r1", summarize_results([{"check": "time_format", "ok": True}]))
    assert active_findings(con, "r1") == []
