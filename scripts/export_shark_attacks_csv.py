"""
Export the clean shark attacks table to CSV (UTF-8 with BOM).

Usage:
    python scripts/export_shark_attacks_csv.py
    python scripts/export_shark_attacks_csv.py --out data/exports/attacks_clean.csv
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import duckdb
from loguru import logger

from shark_attacks.processing.persist import export_csv, read_clean_table
from shark_attacks.utils.config import load_config, resolve_path


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--db", help="DuckDB file. Default: db.duckdb_path")
    ap.add_argument("--out", help="Output CSV. Default: <data_paths.exports>/shark_attacks.csv")
    args = ap.parse_args()

    cfg = load_config()
    db_path = resolve_path(args.db or cfg["db"]["duckdb_path"])
    table = cfg["db"].get("clean_table", "shark_attacks")
    out = resolve_path(args.out) if args.out else resolve_path(cfg["data_paths"]["exports"]) / f"{table}.csv"

    if not db_path.exists():
        logger.error(f"DuckDB file not found: {db_path}")
        sys.exit(1)

    con = duckdb.connect(str(db_path), read_only=True)
    df = read_clean_table(con, table)
    con.close()

    export_csv(df, out)


if __name__ == "__main__":
    main()
