from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import duckdb
from loguru import logger

from shark_attacks.incidents.integrity import find_duplicate_rows
from shark_attacks.ops.alerts import record_dq_findings
from shark_attacks.processing.persist import read_clean_table
from shark_attacks.utils.config import load_config, resolve_path
from shark_attacks.utils.dq_checks import check_no_duplicate_rows, run_table_checks, summarize_results


def main():
    ap = argparse.ArgumentParser(description="Re-run the data-quality checks on the clean table")
    ap.add_argument("--db", help="DuckDB file. Default: db.duckdb_path")
    ap.add_argument("--run-id", help="Record failed checks as findings of this run")
    args = ap.parse_args()

    cfg = load_config()
    db_path = resolve_path(args.db or cfg["db"]["duckdb_path"])
    table = cfg["db"].get("clean_table", "shark_attacks")
    min_rows = int(cfg.get("ops", {}).get("alerts_min_rows", 1))

    con = duckdb.connect(str(db_path))
    df = read_clean_table(con, table)

    checks = run_table_checks(df, min_rows)
    checks.append(check_no_duplicate_rows(find_duplicate_rows(df)))
    dq = summarize_results(checks)

    if args.run_id:
        record_dq_findings(con, args.run_id, dq)
    con.close()

    for c in dq.checks:
        status = "OK" if c["ok"] else "FAIL"
        logger.info(f"[DQ] {status:<4} {c['check']}")

    if dq.ok:
        logger.success(f"[DQ] OK: {table} rows={len(df)}")
    else:
        logger.warning(f"[DQ] {len(dq.failed)} checks failed on {table}")
        sys.exit(2)


if __name__ == "__main__":
    main()
