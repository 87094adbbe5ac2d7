# ===============================================
# tests/test_safety.py
# ===============================================

import pytest

from zenpath.safety import SafetyClassifier, load_patterns


def test_default_patterns_loaded_from_yaml():
    patterns = load_patterns()
    assert "i want to die" in patterns
    assert len(patterns) == 10
    assert all(p == p.lower() for p in patterns)


@pytest.mark.parametrize(
    "text",
    [
        "I Am Hopeless",
        "honestly i want to disappear for a while",
        "Sometimes I feel like I can't go on.",
        "maybe everyone is BETTER OFF DEAD without me",
    ],
)
def test_high_risk_text_matches(text):
    assert SafetyClassifier().classify(text) is True


@pytest.mark.parametrize("text", ["I'm nervous about my exam", "", "hope is a thing with feathers"])
def test_ordinary_text_does_not_match(text):
    assert SafetyClassifier().classify(text) is False


def test_substring_ignores_word_boundaries():
    clf = SafetyClassifier(["end it all"])
    assert clf.classify("let's append it all to the list") is True


def test_first_match_reports_pattern_in_order():
    clf = SafetyClassifier(["alpha", "beta"])
    assert clf.first_match("BETA then ALPHA") == "alpha"
    assert clf.first_match("nothing here") is None


def test_patterns_are_immutable_and_normalized():
    clf = SafetyClassifier(["  Help Me  ", "", None])
    assert clf.patterns == ("help me",)
    assert isinstance(clf.patterns, tuple)


def test_load_patterns_from_custom_file(tmp_path):
    path = tmp_path / "patterns.yaml"
    path.write_text("patterns:\n  - 'Give Up'\n", encoding="utf-8")
    assert load_patterns(str(path)) == ("give up",)


def test_load_patterns_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_patterns(str(tmp_path / "nope.yaml"))
