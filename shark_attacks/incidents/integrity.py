"""
shark_attacks/incidents/integrity.py - Record integrity pass

Runs last, on the fully normalized table:
1. drop redundant columns (case number copies, href pair, pdf reference)
2. delete rows that are not confirmed shark attacks
3. delete rows without original order that carry no information
4. incident_number = ROW_NUMBER() OVER (ORDER BY original_order, case_number)
5. incident_number becomes the key, original_order is dropped
6. full-row duplicate check (reported, never auto-fixed)

Known limitation: two source rows share one original_order value. Their
relative order falls to the case_number tie-break; this is reported as a
finding, not silently trusted.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import duckdb
import pandas as pd
from loguru import logger

from shark_attacks.classification.rules import Rule, RuleTable, any_of, contains, equals
from shark_attacks.incidents.schema import (
    INFORMATIVE_COLUMNS,
    OUTPUT_COLUMNS,
    REDUNDANT_COLUMNS,
    SUBSTANTIVE_COLUMNS,
)
from shark_attacks.processing.record_store import RecordStore
from shark_attacks.utils.text_utils import is_null, to_text


@dataclass
class IntegrityReport:
    dropped_columns: List[str] = field(default_factory=list)
    non_shark_deleted: int = 0
    devoid_deleted: int = 0
    duplicate_order_values: List[Any] = field(default_factory=list)
    duplicate_rows: pd.DataFrame = field(default_factory=pd.DataFrame)

    @property
    def duplicate_row_count(self) -> int:
        return len(self.duplicate_rows)


# =============================================================================
# 1. REDUNDANT COLUMNS
# =============================================================================

def drop_redundant_columns(store: RecordStore, report: IntegrityReport) -> RecordStore:
    for column in REDUNDANT_COLUMNS:
        if store.drop_column(column):
            report.dropped_columns.append(column)
    logger.info(f"[INTEGRITY] Dropped columns: {report.dropped_columns}")
    return store


# =============================================================================
# 2. NOT A SHARK ATTACK
# =============================================================================

# Evidence per column: hoaxes, scavenging of remains, other animals,
# unconfirmed involvement
NON_SHARK_INJURY = RuleTable(
    rules=(
        Rule("not_shark", any_of(
            contains(
                "stingray", "question", "hoax", "not confirm", "shark involv",
                "mortem", "scaveng", "coral", "not cause", "sharks fed", "no attack",
            ),
            equals(
                "Later found to be fixtion, never happened",
                "Sharks were numerous & took corpses but made no attempts to harm the survivors.",
            ),
        ), "injury"),
    ),
)

NON_SHARK_DESCRIPTION = RuleTable(
    rules=(
        Rule("not_shark", any_of(
            contains(
                "stingray", "question", "hoax", "not confirm", "unconfirmed attack",
                "shark invo", "not a shark",
            ),
            equals("Not authenticated"),
        ), "shark_description"),
    ),
)

NON_SHARK_ACTIVITY = RuleTable(
    rules=(Rule("not_shark", equals("Suicide"), "activity"),),
)

NON_SHARK_EVIDENCE = {
    "injury": NON_SHARK_INJURY,
    "shark_description": NON_SHARK_DESCRIPTION,
    "activity": NON_SHARK_ACTIVITY,
}


def is_non_shark(row: Dict[str, Any]) -> bool:
    return any(
        table.classify(row.get(column)) is not None
        for column, table in NON_SHARK_EVIDENCE.items()
    )


def delete_non_shark(store: RecordStore, report: IntegrityReport) -> RecordStore:
    def _predicate(df: pd.DataFrame) -> pd.Series:
        if df.empty:
            return pd.Series(False, index=df.index)
        return df.apply(lambda row: is_non_shark(row.to_dict()), axis=1).astype(bool)

    deleted = store.delete(_predicate)
    report.non_shark_deleted += deleted
    logger.info(f"[INTEGRITY] Deleted {deleted} rows that are not confirmed shark attacks")
    return store


# =============================================================================
# 3. NO ORDER, NO INFORMATION
# =============================================================================

def delete_devoid_rows(store: RecordStore, report: IntegrityReport) -> RecordStore:
    if not store.has_column("original_order"):
        return store

    informative = [c for c in INFORMATIVE_COLUMNS if store.has_column(c)]

    def _predicate(df: pd.DataFrame) -> pd.Series:
        devoid = df[informative].isna().all(axis=1) if informative else pd.Series(True, index=df.index)
        return df["original_order"].isna() & devoid

    report.devoid_deleted = store.delete(_predicate)
    logger.info(f"[INTEGRITY] Deleted {report.devoid_deleted} rows without original order nor information")
    return store


# =============================================================================
# 4-5. SURROGATE KEY
# =============================================================================

def find_duplicate_order_values(store: RecordStore) -> List[Any]:
    if not store.has_column("original_order"):
        return []
    order = store.df["original_order"].dropna()
    counts = order.map(lambda v: float(v)).value_counts()
    return sorted(counts[counts > 1].index.tolist())


def _arrival_order(store: RecordStore) -> pd.Series:
    """original_order, else a previous incident_number, else load position."""
    for column in ("original_order", "incident_number"):
        if store.has_column(column):
            return pd.to_numeric(store.df[column], errors="coerce")
    return pd.Series(range(len(store)), index=store.df.index, dtype="float64")


def assign_incident_numbers(store: RecordStore, report: IntegrityReport) -> RecordStore:
    report.duplicate_order_values = find_duplicate_order_values(store)
    if report.duplicate_order_values:
        logger.warning(
            f"[INTEGRITY] original_order values shared by several rows: {report.duplicate_order_values}. "
            "Their order is decided by case_number only (assumed typo)."
        )

    df = store.df.copy()
    df["_order"] = _arrival_order(store)
    df["_case"] = df["case_number"].map(to_text) if "case_number" in df.columns else ""
    df = df.sort_values(["_order", "_case"], kind="mergesort", na_position="last")
    df = df.drop(columns=["_order", "_case"])

    numbers = list(range(1, len(df) + 1))
    if "incident_number" in df.columns:
        df = df.drop(columns=["incident_number"])
    df.insert(0, "incident_number", numbers)

    if "original_order" in df.columns:
        df = df.drop(columns=["original_order"])

    ordered = [c for c in OUTPUT_COLUMNS if c in df.columns]
    extra = [c for c in df.columns if c not in ordered]
    store.replace_frame(df[ordered + extra].reset_index(drop=True))
    logger.info(f"[INTEGRITY] incident_number assigned 1..{len(df)}")
    return store


# =============================================================================
# 6. DUPLICATE CHECK
# =============================================================================

def find_duplicate_rows(df: pd.DataFrame, key: str = "incident_number") -> pd.DataFrame:
    """
    Rows that repeat an earlier row on every substantive column.

    NULLs compare equal inside a partition, as in the source database.
    """
    partition = [c for c in SUBSTANTIVE_COLUMNS if c in df.columns]
    if df.empty or not partition or key not in df.columns:
        return df.iloc[0:0]

    con = duckdb.connect(":memory:")
    try:
        frame = df[[key] + partition].copy()
        for column in partition:
            frame[column] = frame[column].map(lambda v: None if is_null(v) else str(v))
        con.register("incidents", frame)
        partition_sql = ", ".join(f'CAST("{c}" AS VARCHAR)' for c in partition)
        dupes = con.execute(
            f"""
            WITH dupe_check AS (
                SELECT
                    *,
                    ROW_NUMBER() OVER (
                        PARTITION BY {partition_sql}
                        ORDER BY "{key}"
                    ) AS dupe_number
                FROM incidents
            )
            SELECT "{key}", dupe_number
            FROM dupe_check
            WHERE dupe_number > 1
            ORDER BY "{key}"
            """
        ).df()
    finally:
        con.close()

    return df[df[key].isin(dupes[key].tolist())]


# =============================================================================
# ENTRY POINT
# =============================================================================

def run_integrity_pass(
    store: RecordStore,
    settings: Optional[Dict[str, Any]] = None,
    report: Optional[IntegrityReport] = None,
) -> RecordStore:
    report = report if report is not None else IntegrityReport()

    store = drop_redundant_columns(store, report)
    store = delete_non_shark(store, report)
    store = delete_devoid_rows(store, report)
    store = assign_incident_numbers(store, report)

    report.duplicate_rows = find_duplicate_rows(store.df)
    if report.duplicate_row_count:
        logger.warning(
            f"[INTEGRITY] {report.duplicate_row_count} full-row duplicates found "
            f"(incident_number={report.duplicate_rows['incident_number'].tolist()}); manual review needed"
        )
    else:
        logger.success("[INTEGRITY] No full-row duplicates")

    return store
