"""
shark_attacks/classification/time_of_day.py - Time column normalization

Raw times come as exact clock times in many spellings ("1430", "14h30",
"9:15", "14:00-15:00", "14:430"), as descriptions ("dawn", "After noon",
"Before 11:00", "Shortly after Opperman's attack") or as placeholders
("--", "X", ":").

Two stages:
1. Clock normalization -> "HH:MM" (24h)
2. Remaining phrases    -> "Morning" | "Afternoon" | "Evening" | None

A value already in HH:MM form, or already a bucket, is returned unchanged.
Anything that resolves to neither becomes None.
"""
from __future__ import annotations

import datetime as dt
import re
from typing import Any, Iterable, Optional

from shark_attacks.classification.rules import Rule, RuleTable, any_of, contains, equals
from shark_attacks.utils.text_utils import is_null

MORNING = "Morning"
AFTERNOON = "Afternoon"
EVENING = "Evening"
BUCKETS = (MORNING, AFTERNOON, EVENING)

CLOCK_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

PLACEHOLDER_TOKENS = ("", ".", "-", "--", "X")

EXACT_CLOCK = {
    "noon": "12:00",
}

_AMPM_RE = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*([ap])\.?\s*m\.?$", re.IGNORECASE)
_LETTER_SEPARATOR_RE = re.compile(r"(?<=\d)\s*[hj]\s*(?=\d)", re.IGNORECASE)
_DOT_SEPARATOR_RE = re.compile(r"^(\d{1,2})\.(\d{2})$")
_HOUR_SUFFIX_RE = re.compile(r"^(\d{1,2})\s*(?:h|hr|hrs)\.?$", re.IGNORECASE)
_HRS_SUFFIX_RE = re.compile(r"(?<=\d)\s*hrs?\.?$", re.IGNORECASE)
_RANGE_RE = re.compile(r"^(\d{1,2}:?\d{2})\s*(?:-+|/)\s*\d")
_SECONDS_RE = re.compile(r"^(\d{1,2}:\d{2}):\d{2}$")
_REPEATED_DIGIT_RE = re.compile(r"^(\d)(\d):(\d)(\d\d)$")


# =============================================================================
# STAGE 1: CLOCK TIMES
# =============================================================================

def _from_ampm(s: str) -> Optional[str]:
    m = _AMPM_RE.match(s)
    if not m:
        return None
    hour = int(m.group(1))
    minute = int(m.group(2) or 0)
    if not 1 <= hour <= 12:
        return None
    if m.group(3).lower() == "p" and hour != 12:
        hour += 12
    if m.group(3).lower() == "a" and hour == 12:
        hour = 0
    return f"{hour:02d}:{minute:02d}"


def normalize_clock(text: str) -> Optional[str]:
    """
    Turn an exact clock time into "HH:MM"; None when the text is not one.

    Examples:
        >>> normalize_clock("1430")
        '14:30'
        >>> normalize_clock("9:15")
        '09:15'
        >>> normalize_clock("14h30")
        '14:30'
        >>> normalize_clock("10:00-11:00")
        '10:00'
        >>> normalize_clock("dawn") is None
        True
    """
    s = text.strip()
    if s.lower() in EXACT_CLOCK:
        return EXACT_CLOCK[s.lower()]

    ampm = _from_ampm(s)
    if ampm:
        return ampm

    # letters used as separators: 14h30, 10j00
    s = _LETTER_SEPARATOR_RE.sub(":", s)
    m = _HOUR_SUFFIX_RE.match(s)
    if m:
        s = f"{int(m.group(1)):02d}:00"
    s = _HRS_SUFFIX_RE.sub("", s)

    # stray leading/trailing punctuation: "?14:30", "14:30:", "1430 "
    s = s.strip(" ?:")

    m = _DOT_SEPARATOR_RE.match(s)
    if m:
        s = f"{m.group(1)}:{m.group(2)}"

    # spreadsheet times carry seconds: 14:00:00
    m = _SECONDS_RE.match(s)
    if m:
        s = m.group(1)

    # a range keeps its first bound: 10:00-11:00, 10h00 -- 11h00, 10h45-11h
    m = _RANGE_RE.match(s)
    if m:
        s = m.group(1)

    if s.isdigit():
        if len(s) == 3:
            s = "0" + s
        if len(s) == 4:
            s = f"{s[:2]}:{s[2:]}"

    if re.match(r"^\d:\d\d$", s):
        s = "0" + s

    # hh:hmm -> hh:mm (hour digit typed twice)
    m = _REPEATED_DIGIT_RE.match(s)
    if m and m.group(2) == m.group(3):
        s = f"{m.group(1)}{m.group(2)}:{m.group(4)}"

    if CLOCK_RE.match(s):
        return s
    return None


# =============================================================================
# STAGE 2: DESCRIPTIONS -> BUCKETS
# =============================================================================

TIME_BUCKET_RULES = RuleTable(
    rules=(
        Rule(MORNING, any_of(
            equals("am", "a.m."),
            contains(
                "daybreak", "dawn", "morning", "before 12", "before noon", "before 11",
                "11:01 -time of", "sometime between 06",
                "1992.07.08.a",  # refers to an incident recorded in the morning
            ),
            equals(
                "before 07:00", "before 10:30", "prior to 10:37", "after 04:00",
                "between 05:00 and 08:00", "between 06:00 & 07:20", "between 11:00 & 12:00",
                "<07:30", ">06:45", ">08:00",
            ),
        ), "morning"),
        Rule(AFTERNOON, any_of(
            contains(
                "afternoon", "after noon", "afternon", "midday", "lunch",
                "after 12", "before 13", "or 14:00", "or 13:30", "at 03:10",
                "opperman",  # "shortly after Opperman's attack"
            ),
            equals("pm", "p.m.", "15:00 or 15:45", "12:00 to 14:00", "daytime", ">12:00", ">14:30"),
        ), "afternoon"),
        Rule(EVENING, any_of(
            contains("dark", "dusk", "evening", "sundown", "sunset", "night"),
            equals("16:30 or 18:00", "17:00 or 17:40", "18:15 to 21:30", ">17:00", ">17:30"),
        ), "evening"),
        # no usable time: outcome text typed in the wrong column, or a
        # reference to an incident without a recorded time
        Rule(None, contains("fatal", "2000.08.21"), "no_time"),
    ),
    default=None,
)


def classify_time_bucket(text: str) -> Optional[str]:
    return TIME_BUCKET_RULES.classify(text)


# =============================================================================
# ENTRY POINT
# =============================================================================

def _as_time_text(value: Any) -> str:
    if isinstance(value, (dt.time, dt.datetime)):
        return value.strftime("%H:%M")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_time(value: Any, placeholders: Iterable[str] = PLACEHOLDER_TOKENS) -> Optional[str]:
    """
    Normalize one raw time value.

    Examples:
        >>> normalize_time("1430")
        '14:30'
        >>> normalize_time("daybreak")
        'Morning'
        >>> normalize_time("--") is None
        True
    """
    if is_null(value):
        return None

    s = _as_time_text(value).strip()
    if s.lower() in {p.lower() for p in placeholders}:
        return None
    if CLOCK_RE.match(s) or s in BUCKETS:
        return s

    clock = normalize_clock(s)
    if clock:
        return clock

    return classify_time_bucket(s)
