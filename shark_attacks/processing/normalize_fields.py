"""
shark_attacks/processing/normalize_fields.py - Per-column normalization passes

Each pass takes the RecordStore plus the cleaning settings
(see utils/config.cleaning_settings), mutates the store and returns it.
Passes only touch their own column(s) and are safe to re-run on clean data.

Pass order is fixed by NORMALIZATION_PASSES.
"""
from __future__ import annotations

import datetime as dt
from typing import Any, Callable, Dict, List, Optional, Tuple

import pandas as pd
from loguru import logger

from shark_attacks.classification.fatality import normalize_fatal
from shark_attacks.incidents.schema import TRIMMED_COLUMNS
from shark_attacks.processing.record_store import RecordStore
from shark_attacks.utils.text_utils import (
    blank_to_none,
    canonicalize_alias,
    collapse_placeholder,
    is_null,
    trim,
)

SEX_DOMAIN = frozenset({"M", "F"})
UNCONFIRMED_SUFFIX = " (unconfirmed)"

# ISO (clean table, re-runs), then the spreadsheet's 25-Jun-2018 style
DATE_FORMATS = ("%Y-%m-%d", "%Y-%m-%d %H:%M:%S", "%d-%b-%Y", "%d-%b-%y", "%d-%B-%Y")


# =============================================================================
# VALUE FUNCTIONS
# =============================================================================

def normalize_case_number(value: Any) -> Any:
    """
    Examples:
        >>> normalize_case_number("1906-01-12/R")
        '1906.01.12.R'
    """
    value = blank_to_none(value)
    if not isinstance(value, str):
        return value
    return value.replace("-", ".").replace("/", ".")


def to_date(value: Any) -> Optional[dt.date]:
    """Date without time component; unparseable -> None."""
    if is_null(value):
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    text = str(value).strip()
    # Explicit formats first: pandas timestamps stop at 1677
    for fmt in DATE_FORMATS:
        try:
            return dt.datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def to_year(value: Any) -> Optional[int]:
    if is_null(value):
        return None
    try:
        return int(float(str(value).strip()))
    except ValueError:
        return None


def align_date_year(date: Optional[dt.date], year: Optional[int]) -> Optional[dt.date]:
    """
    The year column is the source of truth: a date whose year disagrees
    (2029 typed for 1929...) takes the year column.

    Examples:
        >>> align_date_year(dt.date(2029, 6, 3), 1929)
        datetime.date(1929, 6, 3)
    """
    if date is None or year is None or year < 1 or date.year == year:
        return date
    try:
        return date.replace(year=year)
    except ValueError:
        # 29 Feb moved to a non-leap year
        return date.replace(year=year, day=28)


def normalize_country(value: Any, aliases: Dict[str, str]) -> Any:
    """
    Examples:
        >>> normalize_country(" EGYPT ?", {})
        'EGYPT (unconfirmed)'
        >>> normalize_country("United Arab Emirates (UAE)", {"United Arab Emirates (UAE)": "United Arab Emirates"})
        'United Arab Emirates'
    """
    value = blank_to_none(value)
    if not isinstance(value, str):
        return value
    if value.endswith("?"):
        value = value.rstrip("? ") + UNCONFIRMED_SUFFIX
    return canonicalize_alias(value, aliases)


def normalize_sex(value: Any) -> Optional[str]:
    """M / F, everything else None ('N', '.', 'lli' ...)."""
    if is_null(value):
        return None
    code = str(value).strip().upper()
    return code if code in SEX_DOMAIN else None


# =============================================================================
# PASSES
# =============================================================================

def _map_if_present(store: RecordStore, column: str, fn: Callable[[Any], Any]) -> int:
    if not store.has_column(column):
        logger.debug(f"[CLEAN] Column '{column}' not present, skipped")
        return 0
    return store.map_column(column, fn)


def clean_case_number(store: RecordStore, settings: Dict[str, Any]) -> RecordStore:
    n = _map_if_present(store, "case_number", normalize_case_number)
    logger.info(f"[CLEAN] case_number: {n} values normalized")
    return store


def clean_date_year(store: RecordStore, settings: Dict[str, Any]) -> RecordStore:
    if store.has_column("year"):
        store.map_column("year", to_year)
    if not store.has_column("date"):
        return store

    store.map_column("date", to_date)
    if store.has_column("year"):
        n = store.bulk_update(
            lambda df: df["date"].notna() & df["year"].notna(),
            "date",
            lambda row: align_date_year(row["date"], row["year"]),
        )
        logger.info(f"[CLEAN] date: {n} dates realigned to the year column")
    return store


def clean_type(store: RecordStore, settings: Dict[str, Any]) -> RecordStore:
    aliases = settings.get("type_aliases", {})
    n = _map_if_present(store, "type", lambda v: canonicalize_alias(blank_to_none(v), aliases))
    logger.info(f"[CLEAN] type: {n} values changed")
    return store


def clean_country(store: RecordStore, settings: Dict[str, Any]) -> RecordStore:
    aliases = settings.get("country_aliases", {})
    n = _map_if_present(store, "country", lambda v: normalize_country(v, aliases))
    logger.info(f"[CLEAN] country: {n} values changed")
    return store


def clean_free_text(store: RecordStore, settings: Dict[str, Any]) -> RecordStore:
    for column in TRIMMED_COLUMNS:
        n = _map_if_present(store, column, blank_to_none)
        if n:
            logger.info(f"[CLEAN] {column}: {n} values trimmed")
    return store


def clean_activity(store: RecordStore, settings: Dict[str, Any]) -> RecordStore:
    placeholders = settings.get("activity_placeholders", ["", "."])
    n = _map_if_present(store, "activity", lambda v: collapse_placeholder(trim(v), placeholders))
    logger.info(f"[CLEAN] activity: {n} values changed")
    return store


def clean_sex(store: RecordStore, settings: Dict[str, Any]) -> RecordStore:
    if not store.has_column("sex"):
        return store
    noise = store.df["sex"].map(lambda v: not is_null(v) and normalize_sex(v) is None)
    if noise.any():
        logger.info(f"[CLEAN] sex: nulling values outside M/F: {sorted(set(map(str, store.df.loc[noise, 'sex'])))}")
    store.map_column("sex", normalize_sex)
    return store


def clean_shark_description(store: RecordStore, settings: Dict[str, Any]) -> RecordStore:
    n = _map_if_present(store, "shark_description", blank_to_none)
    logger.info(f"[CLEAN] shark_description: {n} values changed")
    return store


def clean_fatal(store: RecordStore, settings: Dict[str, Any]) -> RecordStore:
    aliases = settings.get("fatal_aliases", {})
    n = _map_if_present(store, "fatal", lambda v: normalize_fatal(canonicalize_alias(trim(v), aliases)))
    logger.info(f"[CLEAN] fatal: {n} values normalized")
    return store


NORMALIZATION_PASSES: List[Tuple[str, Callable[[RecordStore, Dict[str, Any]], RecordStore]]] = [
    ("case_number", clean_case_number),
    ("date_year", clean_date_year),
    ("type", clean_type),
    ("country", clean_country),
    ("free_text", clean_free_text),
    ("activity", clean_activity),
    ("sex", clean_sex),
    ("shark_description", clean_shark_description),
    ("fatal", clean_fatal),
]


def run_normalization_passes(store: RecordStore, settings: Dict[str, Any]) -> RecordStore:
    for name, fn in NORMALIZATION_PASSES:
        store = fn(store, settings)
    return store
