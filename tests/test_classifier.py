from pulse.nlq import classify_by_keywords, classify_intent, intents
from pulse.nlq.keywords import KEYWORD_CATEGORIES, score_keywords


def test_keyword_categories_in_declaration_order():
    assert [name for name, _ in KEYWORD_CATEGORIES] == [
        "velocity", "bugs", "resolution", "trends", "performance",
    ]


def test_scores_count_substring_hits_per_category():
    scores = dict(score_keywords("bug and defect errors over time"))
    assert scores["bugs"] == 3
    assert scores["resolution"] == 1
    assert scores["velocity"] == 0


def test_highest_score_wins():
    assert classify_by_keywords("throughput vs defect and failure") == "bugs"


def test_tie_resolves_to_first_declared_category():
    assert classify_by_keywords("velocity bug") == "velocity"
    assert classify_by_keywords("kpi quarter") == "trends"


def test_zero_hits_returns_none():
    assert classify_by_keywords("xyz random gibberish") is None


def test_classify_intent_normalises_text():
    result = classify_intent("   SHOW Velocity FOR Frontend Team  ")
    assert result == {
        "intent": intents.VELOCITY,
        "params": {"team": "frontend team"},
        "source": "pattern",
    }


def test_keyword_fallback_is_always_all_teams():
    result = classify_intent("velocity bug for backend team")
    assert result["intent"] == intents.VELOCITY
    assert result["source"] == "keyword"
    assert result["params"] == {"team": intents.ALL_TEAMS}


def test_pattern_takes_precedence_over_keywords():
    # Keyword scoring alone would choose bugs (4 hits vs 1).
    result = classify_intent("show velocity: bug defect error failure")
    assert result["intent"] == intents.VELOCITY
    assert result["source"] == "pattern"


def test_unclassified_query():
    assert classify_intent("xyz random gibberish") == {
        "intent": intents.UNKNOWN, "params": {}, "source": None,
    }
