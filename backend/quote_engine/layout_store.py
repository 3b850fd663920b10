"""
Layout Resolution

Decides which layout a company's quote page uses:

    1. Layout template assigned to the company (active only)
    2. Global default layout template (is_default, active)
    3. Built-in default layout

The render engine never sees this chain; it only receives the layout
returned here. A stored template whose JSON can't be parsed is skipped
and the next tier is tried.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from .branding_config import get_assigned_template_id, get_branding, layout_overrides
from .layout_config import LayoutConfigError, default_layout, parse_layout_config

logger = logging.getLogger(__name__)

SOURCE_ASSIGNED = "layout_template"
SOURCE_DEFAULT_TEMPLATE = "default_template"
SOURCE_BUILT_IN = "built_in"


@dataclass
class ResolvedLayout:
    layout: dict
    source: str
    template_id: Optional[int] = None
    template_name: Optional[str] = None


def resolve_layout_config(db: Session, company_id: str) -> ResolvedLayout:
    """Resolve the layout for a company and merge its branding overrides."""
    resolved = _resolve_template(db, company_id)

    overrides = layout_overrides(get_branding(db, company_id))
    if overrides:
        styles = dict(resolved.layout.get("globalStyles") or {})
        styles.update(overrides)
        resolved.layout["globalStyles"] = styles

    return resolved


def _resolve_template(db: Session, company_id: str) -> ResolvedLayout:
    template_id = get_assigned_template_id(db, company_id)
    if template_id:
        row = db.execute(
            text("SELECT id, name, layout_config FROM layout_templates WHERE id = :id AND is_active = :active"),
            {"id": template_id, "active": True}
        ).mappings().fetchone()
        resolved = _parse_row(row, SOURCE_ASSIGNED, company_id)
        if resolved:
            return resolved

    row = db.execute(
        text("""
            SELECT id, name, layout_config FROM layout_templates
            WHERE is_default = :is_default AND is_active = :active
            ORDER BY id
            LIMIT 1
        """),
        {"is_default": True, "active": True}
    ).mappings().fetchone()
    resolved = _parse_row(row, SOURCE_DEFAULT_TEMPLATE, company_id)
    if resolved:
        return resolved

    return ResolvedLayout(layout=default_layout(), source=SOURCE_BUILT_IN)


def _parse_row(row, source: str, company_id: str) -> Optional[ResolvedLayout]:
    if not row:
        return None
    try:
        layout = parse_layout_config(row["layout_config"])
    except LayoutConfigError as e:
        logger.warning("Skipping layout template %s (%s) for company %s: %s",
                       row["id"], source, company_id, e)
        return None
    return ResolvedLayout(
        layout=layout,
        source=source,
        template_id=row["id"],
        template_name=row["name"],
    )
