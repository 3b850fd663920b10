import json
import logging

import pytest

from quote_engine.layout_config import (
    DEFAULT_QUOTE_LAYOUT,
    LEGACY_SECTION_ID,
    LayoutConfigError,
    SectionComponent,
    default_layout,
    get_effective_global_styles,
    load_layout_config,
    normalize_layout,
    parse_layout_config,
    validate_layout,
)


def test_default_layout_is_a_fresh_copy():
    layout = default_layout()
    layout["sections"].clear()
    assert len(DEFAULT_QUOTE_LAYOUT["sections"]) == 7


def test_default_layout_is_valid():
    assert validate_layout(DEFAULT_QUOTE_LAYOUT) == []


def test_effective_global_styles_fill_missing_and_empty():
    styles = get_effective_global_styles({"globalStyles": {"maxWidth": "", "backgroundColor": "#000"}})
    assert styles["maxWidth"] == "1152px"
    assert styles["backgroundColor"] == "#000"
    assert styles["customCss"] == ""
    assert get_effective_global_styles(None)["fontFamily"] == "Inter, sans-serif"


def test_parse_json_string_and_dict():
    raw = json.dumps({"version": 1, "sections": [{"id": "a", "type": "component", "component": "TermsSection"}]})
    assert parse_layout_config(raw)["sections"][0]["component"] == "TermsSection"
    assert parse_layout_config(json.loads(raw)) == parse_layout_config(raw)


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]", "42", b"\xff"])
def test_parse_rejects_bad_json(raw):
    with pytest.raises(LayoutConfigError):
        parse_layout_config(raw)


def test_load_falls_back_and_logs(caplog):
    with caplog.at_level(logging.WARNING, logger="quote_engine.layout_config"):
        layout = load_layout_config("{broken", context="company acme")
    assert layout == DEFAULT_QUOTE_LAYOUT
    assert "company acme" in caplog.text


def test_load_empty_gives_default():
    assert load_layout_config(None) == DEFAULT_QUOTE_LAYOUT
    assert load_layout_config("") == DEFAULT_QUOTE_LAYOUT


def test_normalize_legacy_html_block():
    layout = normalize_layout({"html": "<p>Hi</p>", "css": "p{}"})
    assert layout["sections"] == [{
        "id": LEGACY_SECTION_ID,
        "label": "Custom Layout",
        "type": "custom_html",
        "html": "<p>Hi</p>",
        "css": "p{}",
    }]
    assert layout["globalStyles"] == {}


def test_normalize_section_types():
    layout = normalize_layout({"sections": [
        {"id": "a", "type": "built_in", "component": "HeaderSection"},
        {"id": "b", "component": "TermsSection"},
        {"id": "c", "html": "<p>x</p>"},
        "junk",
        {"id": "d", "type": "mystery"},
    ]})
    assert [s["type"] for s in layout["sections"]] == ["component", "component", "custom_html", "mystery"]


def test_normalize_does_not_modify_input():
    raw = {"sections": [{"id": "a", "type": "built_in", "component": "HeaderSection"}]}
    normalize_layout(raw)
    assert raw["sections"][0]["type"] == "built_in"


def test_validate_reports_problems():
    errors = validate_layout({"sections": [
        {"type": "component", "component": "HeaderSection"},
        {"id": "a", "type": "component", "component": "Nope"},
        {"id": "a", "type": "custom_html"},
        {"id": "b", "type": "weird"},
        {"id": "c", "type": "component", "component": "TermsSection", "config": []},
        {"id": "d", "type": "custom_html", "html": "", "condition": {"operator": "~="}},
        {"id": "e", "type": "custom_html", "html": "", "condition": {"field": "job.x", "operator": "=="}},
        "junk",
    ]})
    assert errors == [
        "Section 0 missing required field 'id'",
        "Section 'a' has unknown component: Nope",
        "Duplicate section ID: 'a'",
        "Section 'a' is custom_html but has no html",
        "Section 'b' has invalid type: weird",
        "Section 'c' config must be an object",
        "Section 'd' condition missing 'field'",
        "Section 'd' condition has unknown operator: ~=",
        "Section 'e' condition operator '==' requires a value",
        "Section 7 must be an object",
    ]


def test_validate_structure():
    assert validate_layout([]) == ["Layout must be an object"]
    assert validate_layout({}) == ["Missing 'sections' field"]
    assert validate_layout({"sections": {}}) == ["'sections' must be a list"]


def test_valueless_operators_need_no_value():
    layout = {"sections": [{"id": "a", "type": "custom_html", "html": "",
                            "condition": {"field": "job.x", "operator": "isBlank"}}]}
    assert validate_layout(layout) == []


def test_section_component_parse():
    assert SectionComponent.parse("EstimateCard") is SectionComponent.ESTIMATE
    assert SectionComponent.parse("Nope") is None
    assert SectionComponent.parse(None) is None
