from __future__ import annotations

from typing import Any, Dict

from loguru import logger

from shark_attacks.classification.body_part import classify_body_part
from shark_attacks.classification.species import classify_species
from shark_attacks.classification.time_of_day import PLACEHOLDER_TOKENS, normalize_time
from shark_attacks.processing.record_store import RecordStore


def _ensure_column(store: RecordStore, name: str) -> None:
    if not store.has_column(name):
        store.add_column(name)


def _label_counts(store: RecordStore, column: str) -> Dict[Any, int]:
    return store.df[column].fillna("NULL").value_counts().to_dict()


def classify_body_parts(store: RecordStore, settings: Dict[str, Any]) -> RecordStore:
    """body_part_injured <- injury"""
    _ensure_column(store, "body_part_injured")
    _ensure_column(store, "injury")
    n = store.bulk_update(None, "body_part_injured", lambda row: classify_body_part(row["injury"]))
    logger.info(f"[CLASSIFY] body_part_injured: {n} values set -> {_label_counts(store, 'body_part_injured')}")
    return store


def classify_species_identified(store: RecordStore, settings: Dict[str, Any]) -> RecordStore:
    """species_identified <- shark_description"""
    _ensure_column(store, "species_identified")
    _ensure_column(store, "shark_description")
    n = store.bulk_update(None, "species_identified", lambda row: classify_species(row["shark_description"]))
    logger.info(f"[CLASSIFY] species_identified: {n} values set")
    return store


def classify_times(store: RecordStore, settings: Dict[str, Any]) -> RecordStore:
    """time <- time (HH:MM or Morning/Afternoon/Evening)"""
    if not store.has_column("time"):
        return store
    placeholders = settings.get("placeholders", PLACEHOLDER_TOKENS)
    n = store.map_column("time", lambda v: normalize_time(v, placeholders))
    logger.info(f"[CLASSIFY] time: {n} values normalized")
    return store


CLASSIFICATION_PASSES = [
    ("body_part_injured", classify_body_parts),
    ("species_identified", classify_species_identified),
    ("time", classify_times),
]


def run_classification_passes(store: RecordStore, settings: Dict[str, Any]) -> RecordStore:
    for name, fn in CLASSIFICATION_PASSES:
        store = fn(store, settings)
    return store
