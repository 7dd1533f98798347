"""
shark_attacks/incidents/schema.py - Column names of the incident table

Raw headers come in three flavours:
- the published spreadsheet ('Case Number', 'Fatal (Y/N)', 'Species ', 'href formula', ...)
- the relational copy of it ('CaseNumber', 'InvestigatorOrSource', 'OriginalOrder', ...)
- the cleaned snake_case names produced by this project

`canonical_column()` folds all of them onto the snake_case names below.
"""
from __future__ import annotations

import re
from typing import Dict, List

# Raw columns (22) in source order
RAW_COLUMNS: List[str] = [
    "case_number",
    "date",
    "year",
    "type",
    "country",
    "area",
    "location",
    "activity",
    "name",
    "sex",
    "age",
    "injury",
    "fatal",
    "time",
    "shark_description",
    "investigator_or_source",
    "pdf",
    "href_formula",
    "href",
    "case_number_1",
    "case_number_2",
    "original_order",
]

# Columns dropped by the integrity pass
REDUNDANT_COLUMNS: List[str] = [
    "case_number_1",
    "case_number_2",
    "href_formula",
    "href",
    "pdf",
]

# Final table, primary key first
OUTPUT_COLUMNS: List[str] = [
    "incident_number",
    "case_number",
    "date",
    "year",
    "type",
    "country",
    "area",
    "location",
    "activity",
    "name",
    "sex",
    "age",
    "injury",
    "fatal",
    "time",
    "shark_description",
    "species_identified",
    "investigator_or_source",
    "body_part_injured",
]

# Every column except the key: the partition of the duplicate check
SUBSTANTIVE_COLUMNS: List[str] = [c for c in OUTPUT_COLUMNS if c != "incident_number"]

# A row with none of these filled carries no usable information
INFORMATIVE_COLUMNS: List[str] = [
    "type",
    "country",
    "area",
    "location",
    "activity",
    "name",
    "injury",
    "shark_description",
]

# Free-text columns that only need trimming
TRIMMED_COLUMNS: List[str] = [
    "area",
    "location",
    "name",
    "injury",
    "investigator_or_source",
]

# Header variants that do not fold onto the canonical name by themselves
_HEADER_ALIASES: Dict[str, str] = {
    "species": "shark_description",
    "fatalyn": "fatal",
}


def _header_key(header: str) -> str:
    return re.sub(r"[^a-z0-9]", "", str(header).lower())


_KNOWN_KEYS: Dict[str, str] = {
    _header_key(c): c
    for c in RAW_COLUMNS + OUTPUT_COLUMNS
}
_KNOWN_KEYS.update(_HEADER_ALIASES)


def canonical_column(header: str) -> str:
    """
    Map any known header spelling to its snake_case column name.

    Unknown headers are returned unchanged.

    Examples:
        >>> canonical_column("Fatal (Y/N)")
        'fatal'
        >>> canonical_column("Case Number.1")
        'case_number_1'
        >>> canonical_column("InvestigatorOrSource")
        'investigator_or_source'
    """
    return _KNOWN_KEYS.get(_header_key(header), header)
