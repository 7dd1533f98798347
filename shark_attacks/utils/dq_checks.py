from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

import pandas as pd

from shark_attacks.classification.body_part import NO_INJURY
from shark_attacks.classification.fatality import FATAL, FATAL_DOMAIN
from shark_attacks.classification.time_of_day import BUCKETS, CLOCK_RE


@dataclass
class DQResult:
    ok: bool
    checks: List[Dict[str, Any]]

    @property
    def failed(self) -> List[Dict[str, Any]]:
        return [c for c in self.checks if not c.get("ok", False)]


def check_min_rows(count: int, min_rows: int = 1) -> Dict[str, Any]:
    ok = count >= min_rows
    return {"check": "min_rows", "min_rows": min_rows, "value": count, "ok": ok}


def check_dense_key(df: pd.DataFrame, key: str = "incident_number") -> Dict[str, Any]:
    """Key present, unique and exactly 1..N."""
    if key not in df.columns:
        return {"check": "dense_key", "value": "missing column", "ok": False}
    values = sorted(int(v) for v in df[key].dropna())
    ok = values == list(range(1, len(df) + 1))
    return {"check": "dense_key", "rows": len(df), "distinct": len(set(values)), "ok": ok}


def check_no_duplicate_rows(duplicates: pd.DataFrame, key: str = "incident_number") -> Dict[str, Any]:
    ids = duplicates[key].tolist() if key in duplicates.columns else []
    return {"check": "no_duplicate_rows", "value": len(duplicates), "incident_numbers": ids, "ok": not ids}


def check_unique_original_order(duplicate_values: List[Any]) -> Dict[str, Any]:
    return {
        "check": "unique_original_order",
        "value": list(duplicate_values),
        "ok": not duplicate_values,
    }


def check_time_format(df: pd.DataFrame) -> Dict[str, Any]:
    """Every time is NULL, a bucket, or a valid 24h HH:MM."""
    if "time" not in df.columns:
        return {"check": "time_format", "value": [], "ok": True}
    bad = [
        v for v in df["time"].dropna().tolist()
        if v not in BUCKETS and not CLOCK_RE.match(str(v))
    ]
    return {"check": "time_format", "value": bad[:20], "invalid": len(bad), "ok": not bad}


def check_fatal_domain(df: pd.DataFrame) -> Dict[str, Any]:
    if "fatal" not in df.columns:
        return {"check": "fatal_domain", "value": [], "ok": True}
    bad = sorted({str(v) for v in df["fatal"].dropna() if v not in FATAL_DOMAIN})
    return {"check": "fatal_domain", "value": bad, "ok": not bad}


def check_sex_domain(df: pd.DataFrame) -> Dict[str, Any]:
    if "sex" not in df.columns:
        return {"check": "sex_domain", "value": [], "ok": True}
    bad = sorted({str(v) for v in df["sex"].dropna() if v not in ("M", "F")})
    return {"check": "sex_domain", "value": bad, "ok": not bad}


def check_no_injury_not_fatal(df: pd.DataFrame, key: str = "incident_number") -> Dict[str, Any]:
    """Incidents without injury must not be flagged fatal."""
    if not {"body_part_injured", "fatal"}.issubset(df.columns):
        return {"check": "no_injury_not_fatal", "value": [], "ok": True}
    bad = df[(df["body_part_injured"] == NO_INJURY) & (df["fatal"] == FATAL)]
    ids = bad[key].tolist() if key in bad.columns else bad.index.tolist()
    return {"check": "no_injury_not_fatal", "value": ids, "ok": not ids}


def check_date_year(df: pd.DataFrame) -> Dict[str, Any]:
    """date falls in `year` whenever both are set."""
    if not {"date", "year"}.issubset(df.columns):
        return {"check": "date_year", "value": 0, "ok": True}
    both = df[df["date"].notna() & df["year"].notna()]
    bad = both[[d.year != int(y) for d, y in zip(both["date"], both["year"])]]
    return {"check": "date_year", "value": len(bad), "ok": bad.empty}


def run_table_checks(df: pd.DataFrame, min_rows: int = 1) -> List[Dict[str, Any]]:
    """Checks that only need the finished table."""
    return [
        check_min_rows(len(df), min_rows),
        check_dense_key(df),
        check_time_format(df),
        check_fatal_domain(df),
        check_sex_domain(df),
        check_no_injury_not_fatal(df),
        check_date_year(df),
    ]


def summarize_results(checks: List[Dict[str, Any]]) -> DQResult:
    ok = all(c.get("ok", False) for c in checks)
    return DQResult(ok=ok, checks=checks)
