"""
Branding Configuration for Quote Pages

Default branding and helpers to load company-specific branding.
Values are per-company, stored in the branding_settings table.
"""

from sqlalchemy.orm import Session
from sqlalchemy import text
from typing import Optional

# =============================================================================
# DEFAULT BRANDING
# Fallback values when a company hasn't configured a setting
# =============================================================================

DEFAULT_BRANDING = {
    "companyName": "Your Moving Company",
    "logoUrl": "",
    "heroBannerUrl": "",
    "footerImageUrl": "",
    "primaryColor": "#1a56db",
    "secondaryColor": "#ffffff",
    "fontFamily": "",
}

# branding_settings column -> branding key
_COLUMN_KEYS = {
    "company_name": "companyName",
    "logo_url": "logoUrl",
    "hero_banner_url": "heroBannerUrl",
    "footer_image_url": "footerImageUrl",
    "primary_color": "primaryColor",
    "secondary_color": "secondaryColor",
    "font_family": "fontFamily",
}

# Branding keys that override the layout's globalStyles
LAYOUT_OVERRIDE_KEYS = ("fontFamily", "heroBannerUrl", "footerImageUrl")


# =============================================================================
# BRANDING LOADER
# =============================================================================

def get_branding(db: Session, company_id: str) -> dict:
    """
    Load branding for a company, merged with defaults for missing keys.

    Args:
        db: Database session
        company_id: Company identifier

    Returns:
        Complete branding dict
    """
    branding = dict(DEFAULT_BRANDING)
    row = _get_branding_row(db, company_id)
    if not row:
        return branding

    for column, key in _COLUMN_KEYS.items():
        value = row.get(column)
        if value:
            branding[key] = value
    return branding


def merge_branding(base: Optional[dict], overrides: Optional[dict]) -> dict:
    """Overlay non-empty values from overrides onto base (neither is modified)."""
    merged = dict(base or {})
    for key, value in (overrides or {}).items():
        if value not in (None, ""):
            merged[key] = value
    return merged


def layout_overrides(branding: Optional[dict]) -> dict:
    """Company imagery and font that replace the shared template's globalStyles."""
    if not branding:
        return {}
    return {
        key: branding[key]
        for key in LAYOUT_OVERRIDE_KEYS
        if branding.get(key)
    }


def get_assigned_template_id(db: Session, company_id: str) -> Optional[int]:
    row = _get_branding_row(db, company_id)
    if not row:
        return None
    return row.get("layout_template_id")


# =============================================================================
# PRIVATE HELPERS
# =============================================================================

def _get_branding_row(db: Session, company_id: str) -> Optional[dict]:
    if not company_id:
        return None
    result = db.execute(
        text("""
            SELECT company_name, logo_url, hero_banner_url, footer_image_url,
                   primary_color, secondary_color, font_family, layout_template_id
            FROM branding_settings
            WHERE company_id = :company_id
        """),
        {"company_id": company_id}
    ).mappings().fetchone()
    return dict(result) if result else None
