"""
shark_attacks/processing/persist.py - Clean table -> DuckDB / CSV

The clean table is replaced as a whole inside one transaction: readers
see either the previous run or the new one, never a partial load.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union

import duckdb
import pandas as pd
from loguru import logger

from shark_attacks.db.schema import SHARK_ATTACKS_DDL
from shark_attacks.incidents.schema import OUTPUT_COLUMNS
from shark_attacks.processing.normalize_fields import to_date, to_year
from shark_attacks.processing.record_store import none_for_missing

# Column -> SQL expression over the registered text frame
_TYPED_COLUMNS = {
    "incident_number": 'CAST("incident_number" AS INTEGER)',
    "date": 'TRY_CAST("date" AS DATE)',
    "year": 'TRY_CAST("year" AS INTEGER)',
}


def _text_value(value):
    if value is None:
        return None
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def to_output_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Output columns in table order; missing ones are added empty."""
    out = pd.DataFrame(index=df.index)
    for column in OUTPUT_COLUMNS:
        out[column] = df[column] if column in df.columns else None
    return out.reset_index(drop=True)


def write_clean_table(con: duckdb.DuckDBPyConnection, df: pd.DataFrame, table: str = "shark_attacks") -> int:
    frame = to_output_frame(df).astype(object)
    frame = frame.apply(lambda col: col.map(_text_value))

    cols_sql = ", ".join(OUTPUT_COLUMNS)
    select_sql = ", ".join(
        _TYPED_COLUMNS.get(c, f'CAST("{c}" AS VARCHAR)') for c in OUTPUT_COLUMNS
    )

    con.register("clean_df", frame)
    try:
        con.execute("BEGIN TRANSACTION")
        try:
            con.execute(f"DROP TABLE IF EXISTS {table}")
            con.execute(SHARK_ATTACKS_DDL.format(table=table))
            con.execute(f"INSERT INTO {table} ({cols_sql}) SELECT {select_sql} FROM clean_df")
            con.execute("COMMIT")
        except duckdb.Error:
            con.execute("ROLLBACK")
            raise
    finally:
        con.unregister("clean_df")

    n = con.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
    logger.success(f"[DW] Load OK -> {table} (rows={n})")
    return n


def read_clean_table(con: duckdb.DuckDBPyConnection, table: str = "shark_attacks") -> pd.DataFrame:
    """
    Read the clean table back with the in-memory value types
    (datetime.date, int, str, None).

    Dates go through VARCHAR: historical dates fall outside the
    datetime64[ns] range.
    """
    select_sql = ", ".join(
        'CAST("date" AS VARCHAR) AS "date"' if c == "date" else f'"{c}"'
        for c in OUTPUT_COLUMNS
    )
    df = con.execute(f"SELECT {select_sql} FROM {table} ORDER BY incident_number").df()
    df = none_for_missing(df)
    df["date"] = df["date"].map(to_date)
    df["year"] = df["year"].map(to_year)
    df["incident_number"] = df["incident_number"].map(int)
    return df


def export_csv(df: pd.DataFrame, path: Union[str, Path]) -> Path:
    """CSV with BOM so spreadsheet tools pick up UTF-8 accents."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    to_output_frame(df).to_csv(path, index=False, encoding="utf-8-sig")
    logger.success(f"[EXPORT] {len(df)} rows -> {path}")
    return path
