"""
shark_attacks/processing/clean_shark_attacks.py - Cleaning pipeline

PROBLEM SOLVED:
The raw incident sheet mixes typed and free-text data, placeholders,
typos and records that are not shark attacks at all. This module turns it
into the clean incident table in one deterministic sequence of passes.

PASS ORDER (each pass reads columns written by the previous ones):
    1. delete all-null rows
    2. per-column normalization       (processing/normalize_fields.py)
    3. categorical classifiers        (processing/classify_fields.py)
    4. cross-field inference          (incidents/inference.py)
    5. non-shark deletion             (incidents/integrity.py)
    6. manual overrides               (incidents/overrides.py)
    7. record integrity pass          (incidents/integrity.py)
    8. data-quality report            (utils/dq_checks.py)

Running the pipeline on its own output changes nothing.

USAGE:
    from shark_attacks.processing.clean_shark_attacks import clean_records

    result = clean_records(raw_df, settings)
    result.table        # clean DataFrame, incident_number 1..N
    result.dq.ok        # False when a data-quality check failed
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Union

import pandas as pd
from loguru import logger

from shark_attacks.incidents.inference import run_inference
from shark_attacks.incidents.integrity import IntegrityReport, delete_non_shark, run_integrity_pass
from shark_attacks.incidents.overrides import OverrideReport, apply_overrides, overrides_from_settings
from shark_attacks.processing.classify_fields import run_classification_passes
from shark_attacks.processing.normalize_fields import run_normalization_passes
from shark_attacks.processing.record_store import RecordStore
from shark_attacks.utils.config import cleaning_settings
from shark_attacks.utils.dq_checks import (
    DQResult,
    check_no_duplicate_rows,
    check_unique_original_order,
    run_table_checks,
    summarize_results,
)


@dataclass
class CleaningResult:
    table: pd.DataFrame
    dq: DQResult
    integrity: IntegrityReport
    overrides: OverrideReport
    metrics: Dict[str, int] = field(default_factory=dict)


def clean_records(
    rows: Union[pd.DataFrame, Iterable[Dict[str, Any]]],
    settings: Optional[Dict[str, Any]] = None,
    min_rows: int = 1,
) -> CleaningResult:
    settings = settings if settings is not None else cleaning_settings()
    integrity = IntegrityReport()
    override_report = OverrideReport()

    store = RecordStore.load(rows)
    raw_rows = len(store)
    logger.info(f"[CLEAN] Start: {raw_rows} rows, {len(store.columns)} columns")

    empty_rows = store.delete_all_null_rows()
    logger.info(f"[CLEAN] Deleted {empty_rows} all-null rows")

    store = run_normalization_passes(store, settings)
    store = run_classification_passes(store, settings)
    store = run_inference(store, settings)
    store = delete_non_shark(store, integrity)
    store = apply_overrides(store, overrides_from_settings(settings), override_report)
    store = run_integrity_pass(store, settings, integrity)

    table = store.df
    checks = run_table_checks(table, min_rows)
    checks.append(check_no_duplicate_rows(integrity.duplicate_rows))
    checks.append(check_unique_original_order(integrity.duplicate_order_values))
    dq = summarize_results(checks)

    for c in dq.failed:
        logger.warning(f"[DQ] {c['check']} failed: {c}")
    if dq.ok:
        logger.success(f"[DQ] All {len(checks)} checks passed")

    metrics = {
        "raw_rows": raw_rows,
        "empty_rows_deleted": empty_rows,
        "non_shark_rows_deleted": integrity.non_shark_deleted,
        "devoid_rows_deleted": integrity.devoid_deleted,
        "clean_rows": len(table),
        "duplicate_rows": integrity.duplicate_row_count,
    }
    logger.success(f"[CLEAN] Done: {metrics}")

    return CleaningResult(
        table=table,
        dq=dq,
        integrity=integrity,
        overrides=override_report,
        metrics=metrics,
    )
