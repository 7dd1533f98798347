"""
shark_attacks/classification/body_part.py - Body part injured, from injury text

Rule order (load-bearing):
1. No-injury phrases                      -> "No Injury"
2. Keywords from two or more regions      -> "Multiple Body Parts Injured"
   ("rib", "elbow", "calves" only pair with an earlier region)
3. One region, by priority
   head > torso > arm > leg > hand > foot > pelvis
   ("recovered" anywhere suppresses every single-region rule)
4. Nothing                                -> None

"hip" never counts when the text contains "ship" (shipwreck, ship's crew...).

Usage:
    from shark_attacks.classification.body_part import classify_body_part

    classify_body_part("Lacerations to right thigh and left hand")
    # → "Multiple Body Parts Injured"
"""
from __future__ import annotations

from typing import Dict, Optional, Tuple

from shark_attacks.classification.rules import Rule, RuleTable, any_of, contains, equals

NO_INJURY = "No Injury"
MULTIPLE = "Multiple Body Parts Injured"

NO_INJURY_PHRASES: Tuple[str, ...] = (
    "no injur",
    "no inu",
    "not injur",
    "no attack",
    "after he patted it on the head",
)

# Keyword groups used to detect combination injuries
MULTI_REGION_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "head": ("head", "face", "skull", "neck"),
    "torso": ("abdomen", "stomach", "chest", "torso", "back", "rib"),
    "arm": ("arm", "shoulder", "elbow"),
    "leg": ("leg", "calf", "calves", "thigh", "shin", "knee"),
    "hand": ("hand", "finger", "wrist"),
    "foot": ("foot", "feet", "toe", "ankle"),
    "pelvis": ("pelvis", "buttock", "hip", "groin"),
}

# Count only as the later region of a pair: "elbow and calf" is an arm injury
PARTNER_ONLY_KEYWORDS = frozenset({"rib", "elbow", "calves"})

# (label, keywords, extra exclusions, literal typo entries), in priority order
SINGLE_REGIONS: Tuple[Tuple[str, Tuple[str, ...], Tuple[str, ...], Tuple[str, ...]], ...] = (
    ("Head",
     ("head", "face", "facial", "scalp", "skull", "scull", "neck", "nose", "lip", "cheek", "eye", "jaw"),
     (), ()),
    ("Torso",
     ("abdomen", "stomach", "chest", "torso", "back", "rib"),
     (), ()),
    ("Arm(s)",
     ("arm", "foream", "bicep", "shoulder", "elbow", "radius", "ulna"),
     (), ("Am lacerated",)),
    ("Leg(s)",
     ("leg", "thigh", "calf", "calves", "shin", "knee", "hamstring", "femur", "femoral"),
     (), ("Left eg bitten PROVOKED INCIDENT",)),
    ("Hand(s)",
     ("hand", "finger", "wrist", "thumb", "palm"),
     ("threw up his hands", "found in a shark"), ()),
    ("Foot",
     ("foot", "feet", "toe", "ankle", "achilles tendon", "heel"),
     (), ()),
    ("Pelvis",
     ("pelvis", "buttock", "hip", "groin", "penis"),
     (), ()),
)

SUPPRESS_SINGLE_REGION: Tuple[str, ...] = ("recovered",)


def _keyword_hit(text: str, keyword: str) -> bool:
    if keyword == "hip":
        return "hip" in text and "ship" not in text
    return keyword in text


def regions_hit(text: str) -> Tuple[str, ...]:
    """Regions of MULTI_REGION_KEYWORDS with at least one keyword in the text."""
    t = (text or "").lower()
    return tuple(
        region
        for region, keywords in MULTI_REGION_KEYWORDS.items()
        if any(_keyword_hit(t, kw) for kw in keywords)
    )


def _multiple_regions(text: str) -> bool:
    """A lead keyword of one region plus any keyword of a later region."""
    t = (text or "").lower()
    hits = regions_hit(t)
    leads = [
        region
        for region in hits
        if any(_keyword_hit(t, kw) for kw in MULTI_REGION_KEYWORDS[region] if kw not in PARTNER_ONLY_KEYWORDS)
    ]
    if not leads:
        return False
    order = list(MULTI_REGION_KEYWORDS)
    first = order.index(leads[0])
    return any(order.index(region) > first for region in hits)


def _region_predicate(keywords: Tuple[str, ...], exclusions: Tuple[str, ...], literals: Tuple[str, ...]):
    excl = SUPPRESS_SINGLE_REGION + exclusions

    def _pred(t: str) -> bool:
        if any(x in t for x in excl):
            return False
        return any(_keyword_hit(t, kw) for kw in keywords)

    if literals:
        return any_of(_pred, equals(*literals))
    return _pred


def build_body_part_rules() -> RuleTable:
    rules = [
        Rule(NO_INJURY, contains(*NO_INJURY_PHRASES), "no_injury"),
        Rule(MULTIPLE, _multiple_regions, "multiple_regions"),
    ]
    for label, keywords, exclusions, literals in SINGLE_REGIONS:
        rules.append(Rule(label, _region_predicate(keywords, exclusions, literals), f"region_{label.lower()}"))
    return RuleTable(rules=tuple(rules), default=None, null_label=None)


BODY_PART_RULES = build_body_part_rules()


def classify_body_part(injury) -> Optional[str]:
    return BODY_PART_RULES.classify(injury)
