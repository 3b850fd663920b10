import logging

from quote_engine.branding_config import get_branding, layout_overrides, merge_branding
from quote_engine.layout_config import DEFAULT_QUOTE_LAYOUT
from quote_engine.layout_store import (
    SOURCE_ASSIGNED,
    SOURCE_BUILT_IN,
    SOURCE_DEFAULT_TEMPLATE,
    resolve_layout_config,
)


def terms_layout(section_id):
    return {"version": 1, "sections": [{"id": section_id, "type": "component", "component": "TermsSection"}]}


def test_built_in_when_nothing_stored(db_session):
    resolved = resolve_layout_config(db_session, "acme")
    assert resolved.source == SOURCE_BUILT_IN
    assert resolved.layout == DEFAULT_QUOTE_LAYOUT
    assert resolved.template_id is None


def test_global_default_template(db_session, add_template):
    template = add_template(terms_layout("default-terms"), name="House Style", is_default=True)
    resolved = resolve_layout_config(db_session, "acme")
    assert resolved.source == SOURCE_DEFAULT_TEMPLATE
    assert resolved.template_id == template.id
    assert resolved.template_name == "House Style"
    assert resolved.layout["sections"][0]["id"] == "default-terms"


def test_assigned_template_wins(db_session, add_template, add_branding):
    add_template(terms_layout("default-terms"), is_default=True)
    assigned = add_template(terms_layout("acme-terms"), name="Acme")
    add_branding("acme", layout_template_id=assigned.id)

    resolved = resolve_layout_config(db_session, "acme")
    assert resolved.source == SOURCE_ASSIGNED
    assert resolved.layout["sections"][0]["id"] == "acme-terms"

    assert resolve_layout_config(db_session, "other").source == SOURCE_DEFAULT_TEMPLATE


def test_inactive_templates_are_ignored(db_session, add_template, add_branding):
    assigned = add_template(terms_layout("acme-terms"), is_active=False)
    add_template(terms_layout("default-terms"), is_default=True, is_active=False)
    add_branding("acme", layout_template_id=assigned.id)

    assert resolve_layout_config(db_session, "acme").source == SOURCE_BUILT_IN


def test_broken_json_skips_to_next_tier(db_session, add_template, add_branding, caplog):
    assigned = add_template("{not json", name="Broken")
    add_template(terms_layout("default-terms"), is_default=True)
    add_branding("acme", layout_template_id=assigned.id)

    with caplog.at_level(logging.WARNING, logger="quote_engine.layout_store"):
        resolved = resolve_layout_config(db_session, "acme")

    assert resolved.source == SOURCE_DEFAULT_TEMPLATE
    assert "acme" in caplog.text


def test_broken_default_falls_back_to_built_in(db_session, add_template):
    add_template("[]", is_default=True)
    assert resolve_layout_config(db_session, "acme").source == SOURCE_BUILT_IN


def test_branding_overrides_global_styles(db_session, add_branding):
    add_branding("acme", font_family="Georgia, serif", hero_banner_url="/uploads/hero.jpg")
    resolved = resolve_layout_config(db_session, "acme")
    styles = resolved.layout["globalStyles"]
    assert styles["fontFamily"] == "Georgia, serif"
    assert styles["heroBannerUrl"] == "/uploads/hero.jpg"
    assert styles["maxWidth"] == "1152px"
    assert "footerImageUrl" not in styles
    assert DEFAULT_QUOTE_LAYOUT["globalStyles"]["fontFamily"] == "Inter, sans-serif"


def test_get_branding_merges_defaults(db_session, add_branding):
    add_branding("acme", company_name="Acme Movers", primary_color="")
    branding = get_branding(db_session, "acme")
    assert branding["companyName"] == "Acme Movers"
    assert branding["primaryColor"] == "#1a56db"
    assert get_branding(db_session, "missing")["companyName"] == "Your Moving Company"


def test_merge_branding_and_overrides():
    merged = merge_branding({"a": "1", "b": "2"}, {"a": "", "b": "3", "c": None})
    assert merged == {"a": "1", "b": "3"}
    assert layout_overrides({"fontFamily": "X", "heroBannerUrl": "", "companyName": "Y"}) == {"fontFamily": "X"}
    assert layout_overrides(None) == {}
