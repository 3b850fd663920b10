"""
Quote Page Layout Configuration

A layout is an ordered list of sections plus page-wide styles:

    {
        "version": 1,
        "globalStyles": {"fontFamily": ..., "maxWidth": "1152px", ...},
        "sections": [
            {"id": "hdr", "type": "component", "component": "HeaderSection"},
            {"id": "hi", "type": "custom_html", "html": "<p>Hi {{customerName}}</p>",
             "condition": {"field": "job.moveType", "operator": "==", "value": "LR"}},
        ]
    }

Section order is render order. Layouts saved by older builder versions
(single html block, "built_in" type tag) are normalized on load.

Layout is display-only: nothing here writes back to storage.
"""

import copy
import json
import logging
from enum import Enum
from typing import List, Optional

from .conditions import CONDITION_OPERATORS, VALUELESS_OPERATORS

logger = logging.getLogger(__name__)


class LayoutConfigError(ValueError):
    """Stored layout JSON could not be parsed into a layout."""


class SectionComponent(str, Enum):
    HEADER = "HeaderSection"
    INTRO = "IntroSection"
    LOCATION = "LocationInfo"
    ESTIMATE = "EstimateCard"
    INVENTORY = "InventoryTable"
    TERMS = "TermsSection"
    NEXT_STEPS = "NextStepsForm"
    ACCEPTANCE = "AcceptanceForm"

    @classmethod
    def parse(cls, name) -> Optional["SectionComponent"]:
        try:
            return cls(name)
        except ValueError:
            return None


SECTION_TYPE_CUSTOM = "custom_html"
SECTION_TYPE_COMPONENT = "component"

# "built_in" is the tag older layouts were saved with
SECTION_TYPE_ALIASES = {
    "custom_html": SECTION_TYPE_CUSTOM,
    "component": SECTION_TYPE_COMPONENT,
    "built_in": SECTION_TYPE_COMPONENT,
}

LEGACY_SECTION_ID = "legacy-layout"

# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_GLOBAL_STYLES = {
    "fontFamily": "Inter, sans-serif",
    "backgroundColor": "#f9fafb",
    "maxWidth": "1152px",
    "customCss": "",
    "heroBannerUrl": "",
    "footerImageUrl": "",
}

DEFAULT_QUOTE_LAYOUT = {
    "version": 1,
    "globalStyles": {
        "fontFamily": "Inter, sans-serif",
        "backgroundColor": "#f9fafb",
        "maxWidth": "1152px",
    },
    "sections": [
        {"id": "default-header", "label": "Header", "type": "component", "component": "HeaderSection", "visible": True},
        {"id": "default-intro", "label": "Introduction", "type": "component", "component": "IntroSection", "visible": True},
        {"id": "default-locations", "label": "Moving Locations", "type": "component", "component": "LocationInfo", "visible": True},
        {"id": "default-pricing", "label": "Pricing Options", "type": "component", "component": "EstimateCard", "visible": True},
        {"id": "default-inventory", "label": "Included Items", "type": "component", "component": "InventoryTable", "visible": True},
        {"id": "default-acceptance", "label": "Accept Quote", "type": "component", "component": "AcceptanceForm", "visible": True},
        {"id": "default-terms", "label": "Terms & Conditions", "type": "component", "component": "TermsSection", "visible": True},
    ],
}


def default_layout() -> dict:
    """Fresh copy of the built-in layout; callers may modify it."""
    return copy.deepcopy(DEFAULT_QUOTE_LAYOUT)


def get_effective_global_styles(layout: Optional[dict]) -> dict:
    """Layout globalStyles with a default for every missing or empty key."""
    styles = dict(DEFAULT_GLOBAL_STYLES)
    stored = (layout or {}).get("globalStyles") or {}
    if isinstance(stored, dict):
        for key, value in stored.items():
            if value not in (None, ""):
                styles[key] = value
    return styles


# =============================================================================
# LAYOUT LOADER
# =============================================================================

def parse_layout_config(raw) -> dict:
    """
    Parse a stored layout (JSON string or already-decoded dict).

    Raises:
        LayoutConfigError: if the JSON is invalid or not an object
    """
    layout = raw
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            layout = json.loads(raw)
        except ValueError as e:
            raise LayoutConfigError(f"Layout JSON is not valid: {e}") from e

    if not isinstance(layout, dict):
        raise LayoutConfigError(f"Layout must be a JSON object, got {type(layout).__name__}")

    return normalize_layout(layout)


def load_layout_config(raw, context: str = "") -> dict:
    """
    Parse a stored layout, falling back to the built-in layout.

    Parse failures are logged, never raised.
    """
    if raw in (None, ""):
        return default_layout()
    try:
        return parse_layout_config(raw)
    except LayoutConfigError as e:
        logger.warning("Falling back to default quote layout%s: %s",
                       f" ({context})" if context else "", e)
        return default_layout()


def normalize_layout(layout: dict) -> dict:
    """
    Bring any saved layout shape to the current one.

    Returns a new dict; the input is not modified.
    """
    version = layout.get("version") or 0
    styles = layout.get("globalStyles")
    sections = layout.get("sections")

    if sections is None and layout.get("html"):
        # Version 0: one html/css block for the whole page
        sections = [{
            "id": LEGACY_SECTION_ID,
            "label": "Custom Layout",
            "type": SECTION_TYPE_CUSTOM,
            "html": layout.get("html"),
            "css": layout.get("css") or "",
        }]

    if not isinstance(sections, list):
        sections = []

    return {
        "version": version,
        "globalStyles": copy.deepcopy(styles) if isinstance(styles, dict) else {},
        "sections": [
            _normalize_section(s) for s in sections if isinstance(s, dict)
        ],
    }


def _normalize_section(section: dict) -> dict:
    result = copy.deepcopy(section)
    section_type = SECTION_TYPE_ALIASES.get(section.get("type"))

    if section_type is None:
        if section.get("component"):
            section_type = SECTION_TYPE_COMPONENT
        elif "html" in section:
            section_type = SECTION_TYPE_CUSTOM
        else:
            section_type = section.get("type")

    result["type"] = section_type
    return result


# =============================================================================
# VALIDATION
# =============================================================================

def validate_layout(layout: dict) -> List[str]:
    """Validate a layout configuration. Returns list of error messages."""
    errors = []

    if not isinstance(layout, dict):
        return ["Layout must be an object"]

    if "sections" not in layout:
        errors.append("Missing 'sections' field")
        return errors

    if not isinstance(layout["sections"], list):
        errors.append("'sections' must be a list")
        return errors

    seen_ids = set()

    for i, section in enumerate(layout["sections"]):
        if not isinstance(section, dict):
            errors.append(f"Section {i} must be an object")
            continue

        section_id = section.get("id")
        if not section_id:
            errors.append(f"Section {i} missing required field 'id'")
            section_id = f"section_{i}"
        elif section_id in seen_ids:
            errors.append(f"Duplicate section ID: '{section_id}'")
        seen_ids.add(section_id)

        section_type = SECTION_TYPE_ALIASES.get(section.get("type"))
        if section_type is None:
            errors.append(f"Section '{section_id}' has invalid type: {section.get('type')}")
        elif section_type == SECTION_TYPE_CUSTOM:
            if not isinstance(section.get("html"), str):
                errors.append(f"Section '{section_id}' is custom_html but has no html")
        elif SectionComponent.parse(section.get("component")) is None:
            errors.append(f"Section '{section_id}' has unknown component: {section.get('component')}")

        config = section.get("config")
        if config is not None and not isinstance(config, dict):
            errors.append(f"Section '{section_id}' config must be an object")

        condition = section.get("condition")
        if condition is not None:
            errors.extend(_validate_condition(section_id, condition))

    return errors


def _validate_condition(section_id: str, condition) -> List[str]:
    if not isinstance(condition, dict):
        return [f"Section '{section_id}' condition must be an object"]

    errors = []
    if not condition.get("field"):
        errors.append(f"Section '{section_id}' condition missing 'field'")

    operator = condition.get("operator")
    if operator not in CONDITION_OPERATORS:
        errors.append(f"Section '{section_id}' condition has unknown operator: {operator}")
    elif operator not in VALUELESS_OPERATORS and condition.get("value") is None:
        errors.append(f"Section '{section_id}' condition operator '{operator}' requires a value")

    return errors
