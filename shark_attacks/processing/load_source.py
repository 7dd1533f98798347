"""
shark_attacks/processing/load_source.py - Raw source -> DataFrame / DuckDB raw table

The raw file is the immutable input of every run: it is read as text
(no type inference, so '0800' stays '0800') and copied untouched into
the raw table before any cleaning happens.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import duckdb
import pandas as pd
from loguru import logger

from shark_attacks.processing.record_store import none_for_missing

SUPPORTED_SUFFIXES = (".csv", ".xlsx", ".xls")

# The published spreadsheet export is Windows-1252, later copies are UTF-8
CSV_ENCODINGS = ("utf-8", "cp1252")


def read_source(path: Union[str, Path], encoding: Optional[str] = None) -> pd.DataFrame:
    """
    Read the raw incident file with every cell as text.

    Raises:
        FileNotFoundError: the file does not exist
        ValueError: the extension is not one of SUPPORTED_SUFFIXES
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Raw source not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported source format '{suffix}' (expected one of {SUPPORTED_SUFFIXES})")

    if suffix == ".csv":
        df = _read_csv(path, encoding)
    else:
        df = pd.read_excel(path, dtype=str)

    logger.info(f"[LOAD] {path.name}: {len(df)} rows, {len(df.columns)} columns")
    return df


def _read_csv(path: Path, encoding: Optional[str]) -> pd.DataFrame:
    encodings = (encoding,) if encoding else CSV_ENCODINGS
    last_error: Optional[UnicodeDecodeError] = None
    for enc in encodings:
        try:
            return pd.read_csv(path, dtype=str, keep_default_na=False, na_values=[""], encoding=enc)
        except UnicodeDecodeError as ex:
            logger.warning(f"[LOAD] {path.name} is not {enc}, trying next encoding")
            last_error = ex
    raise last_error


def _as_text_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Every cell as str or None, so DuckDB sees VARCHAR columns only."""
    out = none_for_missing(df)
    return out.apply(lambda col: col.map(lambda v: None if v is None else str(v)))


def load_raw_table(con: duckdb.DuckDBPyConnection, df: pd.DataFrame, table: str = "shark_attacks_raw") -> int:
    """
    Replace the raw table with an untouched copy of the source.

    Header spelling is kept as in the file; cleaning never reads back from
    this table, it is there for audit and re-runs.
    """
    frame = _as_text_frame(df)
    cols_sql = ", ".join(f'CAST("{c}" AS VARCHAR) AS "{c}"' for c in frame.columns)

    con.register("raw_source_df", frame)
    try:
        con.execute(f"CREATE OR REPLACE TABLE {table} AS SELECT {cols_sql} FROM raw_source_df")
    finally:
        con.unregister("raw_source_df")

    n = con.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
    logger.success(f"[DW] Raw copy OK -> {table} (rows={n})")
    return n


def read_raw_table(con: duckdb.DuckDBPyConnection, table: str = "shark_attacks_raw") -> pd.DataFrame:
    return con.execute(f"SELECT * FROM {table}").df()
