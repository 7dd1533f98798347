"""
shark_attacks/incidents/overrides.py - Manually verified corrections

Some records contradict the general rules and were checked by hand
(e.g. a "No Injury" incident recorded as fatal). They are kept as an
explicit list instead of special cases inside the rules, and applied as a
separate pass after inference so every correction shows up in the log.

Each override matches rows on exact column values (all keys must match)
and sets one field.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pandas as pd
from loguru import logger

from shark_attacks.processing.record_store import RecordStore


@dataclass(frozen=True)
class Override:
    match: Dict[str, Any]
    field: str
    value: Any
    reason: str = ""

    def predicate(self, df: pd.DataFrame) -> pd.Series:
        mask = pd.Series(True, index=df.index)
        for column, expected in self.match.items():
            if column not in df.columns:
                return pd.Series(False, index=df.index)
            mask &= df[column].map(lambda v: v is not None and str(v).strip() == str(expected).strip()).astype(bool)
        return mask


@dataclass
class OverrideReport:
    applied: List[Dict[str, Any]] = field(default_factory=list)
    unmatched: List[Dict[str, Any]] = field(default_factory=list)


def overrides_from_settings(settings: Dict[str, Any]) -> List[Override]:
    out: List[Override] = []
    for item in settings.get("overrides") or []:
        out.append(
            Override(
                match=dict(item["match"]),
                field=item["field"],
                value=item.get("value"),
                reason=item.get("reason", ""),
            )
        )
    return out


def apply_overrides(
    store: RecordStore,
    overrides: List[Override],
    report: Optional[OverrideReport] = None,
) -> RecordStore:
    report = report if report is not None else OverrideReport()

    for ov in overrides:
        if not store.has_column(ov.field):
            store.add_column(ov.field)
        matched = int(ov.predicate(store.df).sum())
        changed = store.bulk_update(ov.predicate, ov.field, ov.value)
        entry = {"match": ov.match, "field": ov.field, "value": ov.value, "rows": matched, "changed": changed}
        if matched:
            report.applied.append(entry)
            logger.info(f"[OVERRIDE] {ov.match} -> {ov.field}={ov.value!r} rows={matched} changed={changed} ({ov.reason})")
        else:
            report.unmatched.append(entry)
            logger.warning(f"[OVERRIDE] No row matches {ov.match}; override for {ov.field} not applied")

    return store
