"""
shark_attacks/classification/fatality.py - Fatal flag (Y/N)

Correction happens in three steps, each in its own pass:
1. `normalize_fatal`    : code variants ('F' -> 'Y', ' N' -> 'N'), out-of-domain -> None
                         (the `fatal_aliases` setting maps hand-checked raw values first)
2. `fatal_from_evidence`: fills None during inference (see incidents/inference.py)
3. overrides            : manually verified single records (see incidents/overrides.py)
"""
from __future__ import annotations

from typing import Any, Optional

from shark_attacks.classification.body_part import NO_INJURY
from shark_attacks.classification.rules import Rule, RuleTable, contains
from shark_attacks.utils.text_utils import is_null

FATAL = "Y"
NOT_FATAL = "N"
FATAL_DOMAIN = frozenset({FATAL, NOT_FATAL})

FATAL_CODE_VARIANTS = {
    "F": FATAL,
}

# Injury text that proves a death
DEATH_EVIDENCE_RULES = RuleTable(
    rules=(
        Rule(FATAL, contains("fatal", unless=("non-fatal", "nonfatal", "not fatal")), "fatal"),
        Rule(FATAL, contains("remains"), "remains"),
    ),
    default=None,
)


def normalize_fatal(value: Any) -> Optional[str]:
    """
    Examples:
        >>> normalize_fatal(" N")
        'N'
        >>> normalize_fatal("F")
        'Y'
        >>> normalize_fatal("UNKNOWN") is None
        True
    """
    if is_null(value):
        return None
    code = str(value).strip().upper()
    code = FATAL_CODE_VARIANTS.get(code, code)
    if code in FATAL_DOMAIN:
        return code
    return None


def fatal_from_evidence(injury: Any, body_part_injured: Any) -> Optional[str]:
    """
    Fatal flag implied by the other columns, or None when they say nothing.

    "No Injury" wins over the death phrases so inference never produces a
    fatal incident without an injury.
    """
    if body_part_injured == NO_INJURY:
        return NOT_FATAL
    return DEATH_EVIDENCE_RULES.classify(injury)

