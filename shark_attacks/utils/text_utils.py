"""
shark_attacks/utils/text_utils.py
Description: Stateless field normalizers shared by every cleaning pass.

PROBLEM SOLVED:
- The raw spreadsheet pads values with stray spaces (' N', 'Brazil ')
- Empty cells arrive as '', '.', '-' or 'X' depending on who typed them
- The same country or type is spelled several ways

USAGE:
    from shark_attacks.utils.text_utils import trim, collapse_placeholder, canonicalize_alias

    trim("  Australia ")                                  # → "Australia"
    collapse_placeholder(".", {"", "."})                  # → None
    canonicalize_alias("Boat", {"Boat": "Boating"})       # → "Boating"

None of these functions raise: values they do not understand are returned
unchanged.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, Mapping


def is_null(value: Any) -> bool:
    """
    True for None and for the float/pandas missing markers (NaN, NaT, pd.NA).
    """
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    # pd.NA / pd.NaT compare as "not equal to themselves" or raise on bool()
    try:
        return bool(value != value)
    except (TypeError, ValueError):
        return True


def trim(value: Any) -> Any:
    """
    Strip leading/trailing whitespace from strings.

    Examples:
        >>> trim("  Australia ")
        'Australia'
        >>> trim(None) is None
        True
        >>> trim(1945)
        1945
    """
    if isinstance(value, str):
        return value.strip()
    return value


def collapse_placeholder(value: Any, placeholders: Iterable[str]) -> Any:
    """
    Map a value that only stands for "no data" to None.

    Comparison happens on the trimmed value, so ' . ' and '.' are the same
    placeholder.
    """
    if is_null(value):
        return None
    if isinstance(value, str) and value.strip() in set(placeholders):
        return None
    return value


def canonicalize_alias(value: Any, aliases: Mapping[str, str]) -> Any:
    """Replace a known synonym by its canonical spelling."""
    if isinstance(value, str) and value in aliases:
        return aliases[value]
    return value


def blank_to_none(value: Any) -> Any:
    """Trim strings and turn empty results into None."""
    value = trim(value)
    if is_null(value) or value == "":
        return None
    return value


def to_text(value: Any) -> str:
    """Lower-cased string used by the matchers; missing values become ''."""
    if is_null(value):
        return ""
    return str(value).lower()

