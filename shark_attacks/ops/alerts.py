from __future__ import annotations

import json
import uuid
from typing import Any, Dict, List, Optional

import duckdb
from loguru import logger

from shark_attacks.db.schema import OPS_DQ_FINDINGS_DDL
from shark_attacks.ops.runs import utcnow_naive
from shark_attacks.utils.dq_checks import DQResult

# Checks whose failure makes the table unusable as-is
ERROR_CHECKS = frozenset({"min_rows", "dense_key"})


def ensure_findings_table(con: duckdb.DuckDBPyConnection) -> None:
    con.execute(OPS_DQ_FINDINGS_DDL)


def create_finding(
    con: duckdb.DuckDBPyConnection,
    run_id: str,
    check_name: str,
    severity: str,
    message: str,
    context: Optional[Dict[str, Any]] = None,
) -> str:
    ensure_findings_table(con)
    finding_id = str(uuid.uuid4())
    con.execute(
        """
        INSERT INTO ops_dq_findings (
          finding_id, run_id, check_name, severity, message, created_at, context_json, is_active
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        [
            finding_id,
            run_id,
            check_name,
            severity,
            message,
            utcnow_naive(),
            json.dumps(context or {}, ensure_ascii=False, default=str),
            True,
        ],
    )
    return finding_id


def record_dq_findings(con: duckdb.DuckDBPyConnection, run_id: str, dq: DQResult) -> List[str]:
    """One active finding per failed check; previous findings of the run are closed."""
    close_findings_for_run(con, run_id)
    ids = []
    for check in dq.failed:
        name = check.get("check", "unknown")
        severity = "ERROR" if name in ERROR_CHECKS else "WARN"
        message = f"Data-quality check '{name}' failed for run {run_id}"
        ids.append(create_finding(con, run_id, name, severity, message, check))
        logger.warning(f"[OPS] Finding created: {message}")
    return ids


def close_findings_for_run(con: duckdb.DuckDBPyConnection, run_id: str) -> None:
    ensure_findings_table(con)
    con.execute("UPDATE ops_dq_findings SET is_active = FALSE WHERE run_id = ?", [run_id])


def active_findings(con: duckdb.DuckDBPyConnection, run_id: str) -> List[Dict[str, Any]]:
    ensure_findings_table(con)
    cur = con.execute(
        "SELECT * FROM ops_dq_findings WHERE run_id = ? AND is_active ORDER BY created_at",
        [run_id],
    )
    cols = [d[0] for d in cur.description]
    return [dict(zip(cols, r)) for r in cur.fetchall()]
