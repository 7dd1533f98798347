from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import duckdb

from shark_attacks.db.schema import OPS_CLEANING_RUNS_DDL

RUN_METRICS = (
    "raw_rows",
    "empty_rows_deleted",
    "non_shark_rows_deleted",
    "devoid_rows_deleted",
    "clean_rows",
    "duplicate_rows",
)


def utcnow_naive() -> datetime:
    # DuckDB TIMESTAMP is naive: UTC without tzinfo
    return datetime.now(timezone.utc).replace(tzinfo=None)


def ensure_ops_tables(con: duckdb.DuckDBPyConnection) -> None:
    con.execute(OPS_CLEANING_RUNS_DDL)


def start_run(
    con: duckdb.DuckDBPyConnection,
    run_id: str,
    job_name: str,
    params: Optional[Dict[str, Any]] = None,
) -> None:
    ensure_ops_tables(con)
    con.execute(
        """
        INSERT INTO ops_cleaning_runs (
          run_id, job_name, started_at, status, params_json
        ) VALUES (?, ?, ?, ?, ?)
        """,
        [
            run_id,
            job_name,
            utcnow_naive(),
            "RUNNING",
            json.dumps(params or {}, ensure_ascii=False, default=str),
        ],
    )


def end_run(
    con: duckdb.DuckDBPyConnection,
    run_id: str,
    status: str,
    exit_code: int,
    metrics: Optional[Dict[str, Any]] = None,
) -> None:
    metrics = metrics or {}
    ensure_ops_tables(con)
    set_metrics = ",\n            ".join(f"{m} = COALESCE(?, {m})" for m in RUN_METRICS)
    con.execute(
        f"""
        UPDATE ops_cleaning_runs
        SET ended_at = ?,
            status = ?,
            exit_code = ?,
            {set_metrics}
        WHERE run_id = ?
        """,
        [utcnow_naive(), status, int(exit_code)]
        + [metrics.get(m) for m in RUN_METRICS]
        + [run_id],
    )


def get_run(con: duckdb.DuckDBPyConnection, run_id: str) -> Optional[Dict[str, Any]]:
    ensure_ops_tables(con)
    cur = con.execute("SELECT * FROM ops_cleaning_runs WHERE run_id = ?", [run_id])
    row = cur.fetchone()
    if row is None:
        return None
    return dict(zip([d[0] for d in cur.description], row))
