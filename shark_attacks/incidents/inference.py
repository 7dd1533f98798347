"""
shark_attacks/incidents/inference.py - Fill missing values from correlated columns

A rule says: when `target` is missing and the row's evidence matches, set
`target` to the rule's value. Rules run once, top to bottom; a value set by
one rule is never revisited by an earlier rule (no fixed-point iteration).

Usage:
    from shark_attacks.incidents.inference import run_inference

    store = run_inference(store, settings)
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

import pandas as pd
from loguru import logger

from shark_attacks.classification.fatality import FATAL, NOT_FATAL, fatal_from_evidence
from shark_attacks.processing.record_store import RecordStore
from shark_attacks.utils.text_utils import is_null, to_text

RowPredicate = Callable[[pd.Series], bool]


@dataclass(frozen=True)
class InferenceRule:
    name: str
    target: str
    evidence: RowPredicate
    value: Any


# =============================================================================
# SEX
# =============================================================================

# Names that describe the victim instead of naming them
MALE_LITERAL_NAMES: Tuple[str, ...] = (
    "male",
    "a male from the Second Seabee Battalion",
    "schoolboy",
)

MALE_TOKENS = re.compile(r"\b(male|man|boy)\b")
FEMALE_TOKENS = re.compile(r"\b(female|woman|girl)\b")


def _literal_male_name(row: pd.Series) -> bool:
    name = row.get("name")
    if is_null(name):
        return False
    return str(name).strip().lower() in {n.lower() for n in MALE_LITERAL_NAMES}


def sex_from_tokens(*texts: Any) -> Optional[str]:
    """
    'M' or 'F' when the texts mention one sex only; None for no or mixed
    evidence (several victims).

    Examples:
        >>> sex_from_tokens("a girl", "Left foot bitten")
        'F'
        >>> sex_from_tokens("boy and girl", None) is None
        True
    """
    joined = " ".join(to_text(t) for t in texts)
    male = bool(MALE_TOKENS.search(joined))
    female = bool(FEMALE_TOKENS.search(joined))
    if male and not female:
        return "M"
    if female and not male:
        return "F"
    return None


def _tokens_say(sex: str) -> RowPredicate:
    return lambda row: sex_from_tokens(row.get("name"), row.get("injury")) == sex


# =============================================================================
# FATAL
# =============================================================================

def _fatal_evidence(row: pd.Series) -> Optional[str]:
    return fatal_from_evidence(row.get("injury"), row.get("body_part_injured"))


def _evidence_says(value: str) -> RowPredicate:
    return lambda row: _fatal_evidence(row) == value


INFERENCE_RULES: List[InferenceRule] = [
    InferenceRule("sex_literal_name", "sex", _literal_male_name, "M"),
    InferenceRule("sex_tokens_male", "sex", _tokens_say("M"), "M"),
    InferenceRule("sex_tokens_female", "sex", _tokens_say("F"), "F"),
    InferenceRule("fatal_no_injury", "fatal", _evidence_says(NOT_FATAL), NOT_FATAL),
    InferenceRule("fatal_death_evidence", "fatal", _evidence_says(FATAL), FATAL),
]


def apply_rule(store: RecordStore, rule: InferenceRule) -> int:
    if not store.has_column(rule.target):
        store.add_column(rule.target)

    def _predicate(df: pd.DataFrame) -> pd.Series:
        missing = df[rule.target].isna()
        if not missing.any():
            return missing
        hits = df.loc[missing].apply(rule.evidence, axis=1).astype(bool)
        return missing & hits.reindex(df.index, fill_value=False)

    return store.bulk_update(_predicate, rule.target, rule.value)


def run_inference(
    store: RecordStore,
    settings: Optional[Dict[str, Any]] = None,
    rules: Optional[List[InferenceRule]] = None,
) -> RecordStore:
    counts: Dict[str, int] = {}
    for rule in rules or INFERENCE_RULES:
        counts[rule.name] = apply_rule(store, rule)
    logger.info(f"[INFER] values filled: {counts}")
    return store
