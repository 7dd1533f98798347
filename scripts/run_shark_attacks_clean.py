#!/usr/bin/env python
"""
scripts/run_shark_attacks_clean.py - Runner for the cleaning job

Usage:
    python scripts/run_shark_attacks_clean.py
    python scripts/run_shark_attacks_clean.py --source data/raw/attacks.csv
    python scripts/run_shark_attacks_clean.py --source data/raw/attacks.xlsx --db data/test.duckdb --export-csv data/exports/shark_attacks.csv
    python scripts/run_shark_attacks_clean.py --run-id 20260101120000 --log-level DEBUG
    python scripts/run_shark_attacks_clean.py --from-raw-table

Steps:
- raw file -> shark_attacks_raw (untouched copy)
- cleaning pipeline -> shark_attacks (incident_number primary key)
- data-quality findings -> ops_dq_findings, run ledger -> ops_cleaning_runs
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import duckdb
from loguru import logger

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from shark_attacks.ops.alerts import record_dq_findings
from shark_attacks.ops.runs import end_run, start_run, utcnow_naive
from shark_attacks.processing.clean_shark_attacks import clean_records
from shark_attacks.processing.load_source import load_raw_table, read_raw_table, read_source
from shark_attacks.processing.persist import export_csv, write_clean_table
from shark_attacks.utils.config import cleaning_settings, load_config, resolve_path

JOB_NAME = "shark_attacks_clean"


def main():
    parser = argparse.ArgumentParser(description="Clean the shark attacks incident file into DuckDB")
    parser.add_argument("--source", help="Raw CSV/Excel file. Default: data_paths.raw_source")
    parser.add_argument("--db", help="DuckDB file. Default: db.duckdb_path")
    parser.add_argument("--export-csv", help="Also write the clean table to this CSV")
    parser.add_argument("--from-raw-table", action="store_true", help="Re-clean the stored raw copy instead of reading --source")
    parser.add_argument("--run-id", help="Run identifier. Default: UTC timestamp")
    parser.add_argument("--config", default="config/settings.yaml")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    # Configure logger
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=args.log_level.upper(),
    )

    cfg = load_config(args.config)
    db_cfg = cfg.get("db", {})
    source = resolve_path(args.source or cfg["data_paths"]["raw_source"])
    db_path = resolve_path(args.db or db_cfg["duckdb_path"])
    raw_table = db_cfg.get("raw_table", "shark_attacks_raw")
    clean_table = db_cfg.get("clean_table", "shark_attacks")
    min_rows = int(cfg.get("ops", {}).get("alerts_min_rows", 1))
    run_id = args.run_id or utcnow_naive().strftime("%Y%m%d%H%M%S")

    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"[JOB] run_id={run_id} source={source} db={db_path}")

    con = duckdb.connect(str(db_path))
    start_run(
        con,
        run_id,
        JOB_NAME,
        params={"source": raw_table if args.from_raw_table else str(source), "db": str(db_path), "export_csv": args.export_csv},
    )

    try:
        if args.from_raw_table:
            raw_df = read_raw_table(con, raw_table)
            logger.info(f"[LOAD] {raw_table}: {len(raw_df)} rows")
        else:
            raw_df = read_source(source)
            load_raw_table(con, raw_df, raw_table)

        result = clean_records(raw_df, cleaning_settings(cfg), min_rows=min_rows)
        write_clean_table(con, result.table, clean_table)
        record_dq_findings(con, run_id, result.dq)

        if args.export_csv:
            export_csv(result.table, resolve_path(args.export_csv))
    except Exception as ex:
        logger.exception(f"[JOB] Cleaning failed: {ex}")
        end_run(con, run_id, status="FAILED", exit_code=1)
        con.close()
        sys.exit(1)

    status = "SUCCESS" if result.dq.ok else "SUCCESS_WITH_FINDINGS"
    end_run(con, run_id, status=status, exit_code=0, metrics=result.metrics)
    con.close()

    logger.success(f"[JOB] {status} run_id={run_id} rows={result.metrics['clean_rows']}")
    print("EXIT_CODE=0")


if __name__ == "__main__":
    main()
