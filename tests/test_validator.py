# ===============================================
# tests/test_validator.py
# Line-based option parsing and structured bundle decoding.
# ===============================================

import json

import pytest

from zenpath.generate.types import Theme
from zenpath.generate.validator import (
    DEFAULT_FILLER,
    SchemaViolation,
    parse_option_list,
    parse_structured_bundle,
)

from conftest import OPTIONS_RAW, structured_payload


def test_four_bullets_parse_in_order():
    out = parse_option_list(OPTIONS_RAW)
    assert out == [
        "Avoid the meeting entirely.",
        "I always mess this up.",
        "Triple-check everything ten times.",
        "Take a breath; one step is enough.",
    ]
    assert DEFAULT_FILLER not in out


def test_single_line_is_padded_with_filler():
    out = parse_option_list("- only one line")
    assert out == ["only one line", DEFAULT_FILLER, DEFAULT_FILLER, DEFAULT_FILLER]


@pytest.mark.parametrize("lines", [0, 1, 4, 10])
def test_output_is_always_four(lines):
    raw = "\n".join(f"- line {i}" for i in range(lines))
    out = parse_option_list(raw)
    assert len(out) == 4


def test_long_input_keeps_first_four():
    raw = "\n".join(f"- line {i}" for i in range(10))
    assert parse_option_list(raw) == ["line 0", "line 1", "line 2", "line 3"]


def test_blank_and_bullet_only_lines_are_dropped():
    raw = "\n\n   \n- \n-   first\n  second  \n\n"
    assert parse_option_list(raw) == ["first", "second", DEFAULT_FILLER, DEFAULT_FILLER]


def test_empty_and_none_input():
    assert parse_option_list("") == [DEFAULT_FILLER] * 4
    assert parse_option_list(None) == [DEFAULT_FILLER] * 4


def test_only_leading_bullet_is_stripped():
    assert parse_option_list("- keep - the - dashes", expected_count=1) == ["keep - the - dashes"]


def test_custom_count_and_filler():
    assert parse_option_list("- a", expected_count=2, filler="x") == ["a", "x"]


def test_bad_expected_count():
    with pytest.raises(ValueError):
        parse_option_list("- a", expected_count=0)


# --- structured ---

def test_structured_bundle_decodes():
    bundle = parse_structured_bundle(structured_payload())
    assert bundle.core_text == "I'm going to fail this exam."
    assert len(bundle.options) == 4
    assert [o.theme for o in bundle.options] == list(Theme.ordered())
    assert [o.is_optimal for o in bundle.options] == [False, False, False, True]
    assert bundle.options[0].explanation == "Blocked path."


def test_structured_bundle_inside_code_fence():
    raw = "```json\n" + structured_payload() + "\n```"
    assert parse_structured_bundle(raw).intro_text.startswith("That sounds stressful")


def test_three_options_is_schema_violation():
    options = json.loads(structured_payload())["options"][1:]
    with pytest.raises(SchemaViolation, match="expected 4 options, got 3"):
        parse_structured_bundle(structured_payload(options=options))


def test_five_options_is_not_truncated():
    options = json.loads(structured_payload())["options"]
    options.append(dict(options[0]))
    with pytest.raises(SchemaViolation):
        parse_structured_bundle(structured_payload(options=options))


def test_not_json_is_schema_violation():
    with pytest.raises(SchemaViolation, match="not valid JSON"):
        parse_structured_bundle("Here are your options: ...")


def test_missing_field_is_schema_violation():
    data = json.loads(structured_payload())
    del data["introDialogue"]
    with pytest.raises(SchemaViolation, match="does not match schema"):
        parse_structured_bundle(json.dumps(data))


def test_unknown_theme_is_schema_violation():
    options = json.loads(structured_payload())["options"]
    options[0]["theme"] = "distraction"
    with pytest.raises(SchemaViolation):
        parse_structured_bundle(structured_payload(options=options))


def test_optimal_must_be_the_reframe():
    options = json.loads(structured_payload())["options"]
    options[3]["optimal"] = False
    options[0]["optimal"] = True
    with pytest.raises(SchemaViolation, match="must be 'reframe'"):
        parse_structured_bundle(structured_payload(options=options))


def test_two_optimal_options_rejected():
    options = json.loads(structured_payload())["options"]
    options[2]["optimal"] = True
    with pytest.raises(SchemaViolation, match="exactly one optimal"):
        parse_structured_bundle(structured_payload(options=options))


def test_duplicate_theme_rejected():
    options = json.loads(structured_payload())["options"]
    options[1]["theme"] = "avoidance"
    with pytest.raises(SchemaViolation, match="distinct"):
        parse_structured_bundle(structured_payload(options=options))
