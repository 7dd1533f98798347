from shark_attacks.classification.rules import Rule, RuleTable, all_of, any_of, contains, equals, none_of


TABLE = RuleTable(
    rules=(
        Rule("narrow", contains("shortfin mako"), "narrow"),
        Rule("broad", contains("mako", unless=("longfin",)), "broad"),
        Rule("exact", equals("Am lacerated"), "exact"),
    ),
    default="other",
    null_label="missing",
)


def test_first_matching_rule_wins():
    assert TABLE.classify("Shortfin mako, 2 m") == "narrow"
    assert TABLE.classify("Mako shark") == "broad"


def test_exclusion_blocks_rule():
    assert TABLE.classify("Longfin mako") == "other"


def test_match_is_case_insensitive_and_trimmed():
    assert TABLE.classify("  MAKO  ") == "broad"
    assert TABLE.classify("am LACERATED") == "exact"


def test_default_and_null_label():
    assert TABLE.classify("hammerhead") == "other"
    assert TABLE.classify(None) == "missing"
    assert TABLE.classify("   ") == "missing"
    assert TABLE.classify(float("nan")) == "missing"


def test_match_returns_rule_for_audit():
    rule = TABLE.match("shortfin mako")
    assert rule is not None and rule.name == "narrow"
    assert TABLE.match("nothing here") is None
    assert TABLE.labels == ("narrow", "broad", "exact")


def test_combinators():
    p = all_of(contains("shark"), none_of("stingray"))
    assert p("white shark")
    assert not p("stingray, not a shark")
    q = any_of(equals("pm"), contains("afternoon"))
    assert q("pm")
    assert q("late afternoon")
    assert not q("pmx")
