from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from shark_attacks.utils.text_utils import is_null

# Predicates receive the lower-cased, trimmed source text
Predicate = Callable[[str], bool]


@dataclass(frozen=True)
class Rule:
    label: Optional[str]
    predicate: Predicate
    name: str = ""


@dataclass(frozen=True)
class RuleTable:
    """
    Ordered (predicate, label) rules, evaluated top to bottom.

    - First matching rule wins.
    - No match -> `default`.
    - Missing source text -> `null_label` (None unless the vocabulary says otherwise).
    """
    rules: Tuple[Rule, ...]
    default: Optional[str] = None
    null_label: Optional[str] = None

    def match(self, text) -> Optional[Rule]:
        if is_null(text) or not str(text).strip():
            return None
        t = str(text).strip().lower()
        for rule in self.rules:
            if rule.predicate(t):
                return rule
        return None

    def classify(self, text) -> Optional[str]:
        if is_null(text) or not str(text).strip():
            return self.null_label
        rule = self.match(text)
        if rule is None:
            return self.default
        return rule.label

    @property
    def labels(self) -> Tuple[Optional[str], ...]:
        return tuple(r.label for r in self.rules)


# =============================================================================
# PREDICATE BUILDERS
# =============================================================================

def contains(*keywords: str, unless: Tuple[str, ...] = ()) -> Predicate:
    """Any keyword is a substring of the text and no `unless` keyword is."""
    kws = tuple(k.lower() for k in keywords)
    excl = tuple(k.lower() for k in unless)

    def _pred(t: str) -> bool:
        if any(x in t for x in excl):
            return False
        return any(k in t for k in kws)

    return _pred


def equals(*values: str) -> Predicate:
    """Exact (case-insensitive) match of the whole trimmed text."""
    vals = frozenset(v.strip().lower() for v in values)
    return lambda t: t in vals


def any_of(*predicates: Predicate) -> Predicate:
    return lambda t: any(p(t) for p in predicates)


def all_of(*predicates: Predicate) -> Predicate:
    return lambda t: all(p(t) for p in predicates)


def none_of(*keywords: str) -> Predicate:
    kws = tuple(k.lower() for k in keywords)
    return lambda t: not any(k in t for k in kws)
