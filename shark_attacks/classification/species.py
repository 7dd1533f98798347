"""
shark_attacks/classification/species.py - Species identified, from shark description

The raw "Species" column mixes species, size and free description
("3 m white shark", "Said to involve a grey nurse shark", "1.8 m [6'] blacktip").
`classify_species` reduces it to one label of a fixed vocabulary.

Order matters: narrow names are checked before the broad names that would
swallow them (shortfin/longfin mako before mako, sandbar handled inside the
sand tiger rule exclusion, grey reef before reef...), or the broad rule
excludes the narrow keywords explicitly.
"""
from __future__ import annotations

from typing import Optional

from shark_attacks.classification.rules import Rule, RuleTable, any_of, contains

UNCONFIRMED = "Unconfirmed- See Shark Description"
NOT_SPECIFIED = "Not Specified"


def _ambiguous(t: str) -> bool:
    # "X or Y" names two candidate sharks; one binomial pairing is a genus name
    if " or " in t and "rhizoprionodon or loxodon" not in t:
        return True
    return "(or " in t


SPECIES_RULES = RuleTable(
    rules=(
        Rule(UNCONFIRMED, _ambiguous, "ambiguous"),
        Rule("Angel Shark", contains("angel")),
        Rule("Basking Shark", contains("basking")),
        Rule("Blacktail/Gray Reef Shark", contains("blacktail", "grey reef", "gray reef")),
        Rule("Blacktip Reef Shark", contains("blacktip")),
        Rule("Blue Shark", contains("blue", unless=("pointer",))),
        Rule("Blue Pointer/Bonito/Shortfin Mako Shark", contains("blue pointer", "bonit", "shortfin mako")),
        Rule("Broadnose Sevengill Shark", contains("broadnose", "sevengill", "seven-gill", "7 gill", "7-gill")),
        Rule("Bronze Whaler/Copper/Narrowtooth Shark", contains("bronze", "copper", "whaler")),
        Rule("Bull/Zambezi Shark", contains("bull", "zambe", "leucas")),
        Rule("Caribbean Reef Shark", contains("caribbean")),
        Rule("Carpet Shark/Wobbegong", contains("carpet", "wobbegong")),
        Rule("Cow Shark", contains("cow")),
        Rule("Dogfish Shark", contains("dog")),
        Rule("Dusky Shark", contains("dusky")),
        Rule("Galapagos Shark", contains("galapagos")),
        Rule("Goblin Shark", contains("goblin")),
        Rule(
            "Sand Tiger/Gray Nurse/Raggedtooth Shark",
            any_of(contains("gray nurse", "grey nurse", "ragged"), contains("sand", unless=("bar",))),
        ),
        Rule("Hammerhead Shark", contains("hammerhead")),
        Rule("Horn Shark", contains("horn")),
        Rule("Ganges Shark", contains("ganges", "gangeticus")),
        Rule("Lemon Shark", contains("lemon", unless=(" or ",))),
        Rule("Leopard Shark", contains("leopard")),
        Rule("Longfin Mako Shark", contains("longfin mako")),
        Rule("Mako Shark", contains("mako", unless=("shortfin", "longfin"))),
        Rule("Nurse Shark", contains("nurse", unless=("tawn",))),
        Rule("Oceanic Whitetip Shark", contains("oceanic")),
        Rule("Porbeagle Shark", contains("porbeagle")),
        Rule(
            "Reef Shark",
            contains("reef", unless=("blacktip", "grey", "gray", "whitetip", "galapagos", "galapogos", "caribbean")),
        ),
        Rule("Salmon Shark", contains("salmon")),
        Rule("Sandbar/Brown/Thickskin Shark", contains("sandbar", "brown shark", "thickskin")),
        Rule("Shovenose Shark", contains("shovel")),
        Rule("Silky Shark", contains("silky")),
        Rule("Silvertip Shark", contains("silvertip", "albimarginatus")),
        Rule("Spinner Shark", contains("spinner")),
        Rule("Spurdog", contains("spurdog")),
        Rule("Tawny Nurse Shark", contains("tawn")),
        Rule("Tiger Shark", contains("tiger shark")),
        Rule("Great White Shark", contains("white shark")),
        Rule("Whitetip Reef Shark", contains("whitetip", "whtietip")),
        Rule("Gummy Shark", contains("gummy")),
        Rule("Whiptail Shark/Common Thresher", contains("whiptail", "thresher")),
        Rule("Catshark", contains("catshark", "cat shark")),
        Rule("Soupfin Shark", contains("soupfin")),
        Rule("Starry Smoothhound Shark", contains("starry smooth")),
        Rule("Whale Shark", contains("whale shark")),
    ),
    default=NOT_SPECIFIED,
    null_label=NOT_SPECIFIED,
)


def classify_species(shark_description) -> Optional[str]:
    return SPECIES_RULES.classify(shark_description)
